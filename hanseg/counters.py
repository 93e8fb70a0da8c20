"""
Numeral and quantifier recognition for hanseg.

Chinese numerals combine with a quantifier (量词) to form count expressions:
- 三本 = 三 (three) + 本 (volume)
- 二十五个 = 二十五 (twenty-five) + 个 (generic)
- 3.5万 = 3.5 + 万 (ten thousand)

This recognizer only proposes the numeral and the quantifier as separate
candidates; joining them into a COUNT lexeme is done by the arbitrator in
smart mode.
"""

from hanseg.characters import CharType
from hanseg.context import BufferContext
from hanseg.dictionary import Dictionary
from hanseg.lexeme import NUMBER_TYPES, LexemeType
from hanseg.numbers import FRACTION_MARKER, NUMERAL_CHARS
from hanseg.recognizers import Recognizer
from hanseg.trie import HitArena

# Fraction states inside a numeral run
NO_FRACTION = 0
AFTER_FEN = 1         # saw 分, need 之
AFTER_ZHI = 2         # saw 分之, need a numeral
FRACTION_DONE = 3     # X分之Y complete; no second fraction

FEN, ZHI = FRACTION_MARKER


class QuantifierRecognizer(Recognizer):
    """
    Numeral runs and quantifier words.

    Quantifiers are only looked for inside or right after a number: while a
    numeral run is open, while quantifier hits are alive, or when a NUMERAL
    or ARABIC candidate ends at the cursor. A 量词 standing alone is left to
    the dictionary.
    """

    name = "QUAN"

    def __init__(self, dictionary: Dictionary):
        self._hits = HitArena(dictionary.quantifier_trie)
        self.reset()

    def reset(self) -> None:
        self._start = -1
        self._end = -1
        self._fraction = NO_FRACTION
        self._hits.clear()

    def analyze(self, context: BufferContext) -> None:
        self._process_numeral(context)
        self._process_quantifier(context)

        if self._start != -1 or self._hits:
            context.lock_buffer(self.name)
        else:
            context.unlock_buffer(self.name)

    # ------------------------------------------------------------------
    # Numerals
    # ------------------------------------------------------------------

    def _emit_numeral(self, context: BufferContext) -> None:
        lexeme = context.make_lexeme(self._start, self._end - self._start + 1, LexemeType.NUMERAL)
        context.add_candidate(lexeme)
        self._start = -1
        self._end = -1
        self._fraction = NO_FRACTION

    def _try_start(self, context: BufferContext) -> None:
        if context.current_char in NUMERAL_CHARS:
            self._start = self._end = context.cursor

    def _process_numeral(self, context: BufferContext) -> None:
        char = context.current_char
        cursor = context.cursor

        if self._start == -1:
            self._try_start(context)
        elif self._fraction == AFTER_FEN:
            if char == ZHI:
                self._fraction = AFTER_ZHI
            else:
                # 分 was not part of the numeral (三分钟); the run ends before it
                self._emit_numeral(context)
                self._try_start(context)
        elif self._fraction == AFTER_ZHI:
            if char in NUMERAL_CHARS:
                self._end = cursor
                self._fraction = FRACTION_DONE
            else:
                self._emit_numeral(context)
                self._try_start(context)
        elif char in NUMERAL_CHARS:
            self._end = cursor
        elif char == FEN and self._fraction == NO_FRACTION:
            self._fraction = AFTER_FEN
        else:
            self._emit_numeral(context)

        if context.is_buffer_consumed() and self._start != -1:
            self._emit_numeral(context)

    # ------------------------------------------------------------------
    # Quantifiers
    # ------------------------------------------------------------------

    def _needs_quantifier_scan(self, context: BufferContext) -> bool:
        if self._start != -1 or self._hits:
            return True
        return context.has_candidate_ending_at(context.cursor, NUMBER_TYPES)

    def _process_quantifier(self, context: BufferContext) -> None:
        if self._needs_quantifier_scan(context):
            if context.current_char_type == CharType.CHINESE:
                for begin, length in self._hits.feed(context.current_char, context.cursor):
                    context.add_candidate(context.make_lexeme(begin, length, LexemeType.QUANTIFIER))
            else:
                self._hits.clear()

        if context.is_buffer_consumed():
            self._hits.clear()
