"""
Pydantic models for hanseg results.

Usage:
    from hanseg.models import SegmentationResult

    result = SegmentationResult.from_lexemes(lexemes, source=text)
    print(result.model_dump_json())
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from hanseg.lexeme import Lexeme, LexemeType
from hanseg.numbers import NotANumber, numeral_prefix, parse_chinese_number

# Lexeme types that carry a numeric value
VALUED_TYPES = {LexemeType.NUMERAL, LexemeType.COUNT, LexemeType.ARABIC}


def lexeme_value(lexeme: Lexeme) -> Optional[Union[int, float]]:
    """Numeric value of a number or count lexeme, None when there is none."""
    if lexeme.type not in VALUED_TYPES:
        return None
    text = numeral_prefix(lexeme.text) if lexeme.type == LexemeType.COUNT else lexeme.text
    try:
        return parse_chinese_number(text)
    except NotANumber:
        return None


class LexemeResult(BaseModel):
    """A single lexeme as returned to callers."""
    text: str = Field(..., description="Regularized lexeme text (half-width, lowercased)")
    surface: Optional[str] = Field(None, description="Text as it appears in the input, when known")
    type: str = Field(..., description="Lexeme type, e.g. CN_WORD or COUNT")
    begin: int = Field(..., description="Start offset in the input stream")
    end: int = Field(..., description="End offset (exclusive) in the input stream")
    length: int = Field(..., description="Length in characters")
    value: Optional[Union[int, float]] = Field(
        None,
        description="Numeric value for NUMERAL, ARABIC and COUNT lexemes",
    )

    class Config:
        from_attributes = True

    @classmethod
    def from_lexeme(cls, lexeme: Lexeme, source: Optional[str] = None) -> "LexemeResult":
        surface = None
        if source is not None:
            surface = source[lexeme.begin_offset:lexeme.end_offset]
        return cls(
            text=lexeme.text,
            surface=surface,
            type=lexeme.type.value,
            begin=lexeme.begin_offset,
            end=lexeme.end_offset,
            length=lexeme.length,
            value=lexeme_value(lexeme),
        )


class SegmentationResult(BaseModel):
    """
    All lexemes of one input.

    In smart mode the lexemes partition the input; in fine-grained mode
    overlapping alternatives are included.
    """
    lexemes: List[LexemeResult] = Field(..., description="Lexemes in stream order")
    count: int = Field(..., description="Number of lexemes")
    smart: bool = Field(True, description="True if produced in smart mode")

    @classmethod
    def from_lexemes(cls, lexemes: List[Lexeme], source: Optional[str] = None,
                     smart: bool = True) -> "SegmentationResult":
        items = [LexemeResult.from_lexeme(lexeme, source) for lexeme in lexemes]
        return cls(lexemes=items, count=len(items), smart=smart)

    def texts(self) -> List[str]:
        return [item.text for item in self.lexemes]
