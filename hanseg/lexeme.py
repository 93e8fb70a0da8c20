"""
Lexeme: a typed token with an absolute stream offset.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class LexemeType(Enum):
    """Lexeme types produced by the recognizers and the fallback pass."""
    CN_WORD = "CN_WORD"          # dictionary word
    CN_CHAR = "CN_CHAR"          # single ideograph fallback
    OTHER_CJK = "OTHER_CJK"      # single kana / hangul / full-width fallback
    NUMERAL = "NUMERAL"          # Chinese numeral
    QUANTIFIER = "QUANTIFIER"    # quantifier word
    COUNT = "COUNT"              # numeral fused with a quantifier
    ENGLISH = "ENGLISH"          # Latin letters
    ARABIC = "ARABIC"            # decimal number
    LETTER = "LETTER"            # mixed letters, digits and connectors
    UNKNOWN = "UNKNOWN"          # any other single character


# Types that may absorb a following lexeme in smart mode
NUMBER_TYPES = frozenset({LexemeType.NUMERAL, LexemeType.ARABIC})


@dataclass(frozen=True)
class Lexeme:
    """
    A recognized token.

    Equality covers position and type; `text` is carried along for output.
    Sorting (see `sort_key`) orders by begin offset, then longer first.
    """
    begin_offset: int
    length: int
    type: LexemeType
    text: str = field(default="", compare=False)

    @property
    def end_offset(self) -> int:
        return self.begin_offset + self.length

    @property
    def sort_key(self) -> Tuple[int, int]:
        return (self.begin_offset, -self.length)

    def __lt__(self, other: "Lexeme") -> bool:
        return self.sort_key < other.sort_key

    def overlaps(self, other: "Lexeme") -> bool:
        """True when the two lexemes share at least one character."""
        return self.begin_offset < other.end_offset and other.begin_offset < self.end_offset

    def fuse(self, following: "Lexeme", lexeme_type: LexemeType) -> "Lexeme":
        """
        Join this lexeme with the one immediately after it.

        Raises:
            ValueError: If `following` does not start where this one ends.
        """
        if following.begin_offset != self.end_offset:
            raise ValueError(f"cannot fuse {self} with non-adjacent {following}")
        return Lexeme(
            begin_offset=self.begin_offset,
            length=self.length + following.length,
            type=lexeme_type,
            text=self.text + following.text,
        )

    def __str__(self) -> str:
        return f"{self.begin_offset}-{self.end_offset} : {self.text} : {self.type.value}"
