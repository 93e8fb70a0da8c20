"""
Chinese number handling for hanseg.

Numeral character tables shared by the numeral recognizer, and conversion
of recognized numerals (including positional units and X分之Y fractions)
to numeric values.
"""

from typing import Dict, Optional, Union

# ============================================================================
# Numeral Character Tables
# ============================================================================

# Digit characters, common and financial (大写) forms
DIGIT_VALUES: Dict[str, int] = {
    '零': 0, '〇': 0,
    '一': 1, '壹': 1,
    '二': 2, '贰': 2, '两': 2,
    '三': 3, '叁': 3,
    '四': 4, '肆': 4,
    '五': 5, '伍': 5,
    '六': 6, '陆': 6,
    '七': 7, '柒': 7,
    '八': 8, '捌': 8,
    '九': 9, '玖': 9,
}

# Shorthand tens
TENS_VALUES: Dict[str, int] = {
    '廿': 20,
    '卅': 30,
}

# Units below ten thousand
SMALL_UNITS: Dict[str, int] = {
    '十': 10, '拾': 10,
    '百': 100, '佰': 100,
    '千': 1000, '仟': 1000,
}

# Section units
BIG_UNITS: Dict[str, int] = {
    '万': 10 ** 4, '萬': 10 ** 4,
    '亿': 10 ** 8, '億': 10 ** 8,
    '兆': 10 ** 12,
}

# Every character that may appear in a numeral run
NUMERAL_CHARS = frozenset(DIGIT_VALUES) | frozenset(TENS_VALUES) | frozenset(SMALL_UNITS) | frozenset(BIG_UNITS)

# Fraction infix: 三分之一
FRACTION_MARKER = "分之"


def _is_number_char(char: str) -> bool:
    return '0' <= char <= '9' or char in ',.' or char in NUMERAL_CHARS


def numeral_prefix(text: str) -> str:
    """
    Leading number part of a count expression.

    Example:
        >>> numeral_prefix("三本")
        '三'
        >>> numeral_prefix("三分之一个")
        '三分之一'
    """
    end = 0
    while end < len(text):
        if _is_number_char(text[end]):
            end += 1
        elif (text.startswith(FRACTION_MARKER, end) and end + 2 < len(text)
              and text[end + 2] in NUMERAL_CHARS):
            end += 2
        else:
            break
    return text[:end]


# ============================================================================
# Parse Number from Chinese Numerals
# ============================================================================

class NotANumber(Exception):
    """Raised when a string cannot be parsed as a Chinese number."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"'{text}' is not a number: {reason}")


def _parse_integer(text: str) -> int:
    if not text:
        raise NotANumber(text, "empty")

    for char in text:
        if char not in NUMERAL_CHARS:
            raise NotANumber(text, f"unexpected character {char!r}")

    # Digit strings without units read positionally: 二〇二四 -> 2024
    if all(char in DIGIT_VALUES for char in text):
        value = 0
        for char in text:
            value = value * 10 + DIGIT_VALUES[char]
        return value

    total = 0
    section = 0
    current: Optional[int] = None
    last_big = 0

    for char in text:
        if char in DIGIT_VALUES:
            if current:
                raise NotANumber(text, "consecutive digits")
            current = DIGIT_VALUES[char]
        elif char in TENS_VALUES:
            section += TENS_VALUES[char]
            current = None
        elif char in SMALL_UNITS:
            section += (1 if current is None else current) * SMALL_UNITS[char]
            current = None
        else:
            unit = BIG_UNITS[char]
            amount = section + (current or 0)
            if total and unit > last_big:
                # 十万亿: a larger unit scales everything before it
                total = (total + amount) * unit
            else:
                total += (amount or 1) * unit
            last_big = max(last_big, unit)
            section = 0
            current = None

    return total + section + (current or 0)


def parse_chinese_number(text: str) -> Union[int, float]:
    """
    Parse a Chinese numeral string.

    Args:
        text: Numeral text as produced by the numeral recognizer.

    Returns:
        An int, or a float for X分之Y fractions.

    Raises:
        NotANumber: If the string cannot be parsed.

    Example:
        >>> parse_chinese_number("一百二十三")
        123
        >>> parse_chinese_number("一亿三千万")
        130000000
        >>> parse_chinese_number("四分之一")
        0.25
        >>> parse_chinese_number("3万")
        30000
    """
    # Fused forms start with Arabic digits: 3万, 1.5亿
    prefix_end = 0
    while prefix_end < len(text) and ('0' <= text[prefix_end] <= '9' or text[prefix_end] in ',.'):
        prefix_end += 1
    if prefix_end:
        try:
            arabic = float(text[:prefix_end].replace(',', ''))
        except ValueError:
            raise NotANumber(text, "malformed digits") from None
        rest = text[prefix_end:]
        if any(char in DIGIT_VALUES or char in TENS_VALUES for char in rest):
            raise NotANumber(text, "digits after arabic number")
        value = arabic * (_parse_integer(rest) if rest else 1)
        return int(value) if value.is_integer() else value

    if FRACTION_MARKER in text:
        denominator_text, _, numerator_text = text.partition(FRACTION_MARKER)
        denominator = _parse_integer(denominator_text)
        numerator = _parse_integer(numerator_text)
        if denominator == 0:
            raise NotANumber(text, "zero denominator")
        return numerator / denominator
    return _parse_integer(text)
