"""
Character handling for hanseg.

Provides character classification (Chinese, other CJK, Latin letters,
Arabic digits, everything else) and the regularization applied to every
buffered character and dictionary word: full-width ASCII to half-width,
ideographic space to space, optional lowercasing.
"""

from enum import IntEnum
from typing import Iterable, List, Tuple

# ============================================================================
# Character Types
# ============================================================================

class CharType(IntEnum):
    """Character classes used by the recognizers."""
    USELESS = 0
    ARABIC = 1
    ENGLISH = 2
    CHINESE = 4
    OTHER_CJK = 8


# ============================================================================
# Unicode Block Tables
# ============================================================================

# Ideographs handled by the dictionary recognizer
CHINESE_RANGES: List[Tuple[int, int]] = [
    (0x4E00, 0x9FFF),    # CJK Unified Ideographs
    (0x3400, 0x4DBF),    # Extension A
    (0xF900, 0xFAFF),    # CJK Compatibility Ideographs
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2EBEF),  # Extensions C-F
    (0x2F800, 0x2FA1F),  # Compatibility Supplement
    (0x30000, 0x3134F),  # Extension G
]

# Kana, hangul and full-width forms
OTHER_CJK_RANGES: List[Tuple[int, int]] = [
    (0x3040, 0x309F),    # Hiragana
    (0x30A0, 0x30FF),    # Katakana
    (0x31F0, 0x31FF),    # Katakana Phonetic Extensions
    (0x1100, 0x11FF),    # Hangul Jamo
    (0x3130, 0x318F),    # Hangul Compatibility Jamo
    (0xAC00, 0xD7AF),    # Hangul Syllables
    (0xFF00, 0xFFEF),    # Halfwidth and Fullwidth Forms
]

IDEOGRAPHIC_SPACE = 0x3000
FULLWIDTH_FIRST = 0xFF01
FULLWIDTH_LAST = 0xFF5E
FULLWIDTH_SHIFT = 0xFEE0


def _in_ranges(code: int, ranges: Iterable[Tuple[int, int]]) -> bool:
    for low, high in ranges:
        if low <= code <= high:
            return True
    return False


def identify_char_type(char: str) -> CharType:
    """
    Classify a single (regularized) character.

    Example:
        >>> identify_char_type('中')
        <CharType.CHINESE: 4>
        >>> identify_char_type('7')
        <CharType.ARABIC: 1>
    """
    if '0' <= char <= '9':
        return CharType.ARABIC
    if 'a' <= char <= 'z' or 'A' <= char <= 'Z':
        return CharType.ENGLISH
    code = ord(char)
    if _in_ranges(code, CHINESE_RANGES):
        return CharType.CHINESE
    if _in_ranges(code, OTHER_CJK_RANGES):
        return CharType.OTHER_CJK
    return CharType.USELESS


def regularize(char: str, lowercase: bool = True) -> str:
    """
    Normalize one character before classification and matching.

    Full-width ASCII variants become their half-width counterparts and the
    ideographic space becomes a plain space.

    Example:
        >>> regularize('Ａ')
        'a'
        >>> regularize('Ａ', lowercase=False)
        'A'
    """
    code = ord(char)
    if code == IDEOGRAPHIC_SPACE:
        char = ' '
    elif FULLWIDTH_FIRST <= code <= FULLWIDTH_LAST:
        char = chr(code - FULLWIDTH_SHIFT)
    if lowercase and 'A' <= char <= 'Z':
        char = char.lower()
    return char


def regularize_text(text: str, lowercase: bool = True) -> str:
    """Regularize every character of a string."""
    return ''.join(regularize(c, lowercase) for c in text)

