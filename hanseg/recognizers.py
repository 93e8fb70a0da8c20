"""
Recognizers for hanseg.

A recognizer looks at the character under the cursor, keeps whatever partial
match state it needs across cursor steps and proposes candidate lexemes to
the context. While a recognizer holds an open match it locks the buffer, so
the cycle never ends in the middle of that match.

The numeral/quantifier recognizer lives in hanseg.counters.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet

from hanseg.characters import CharType
from hanseg.context import BufferContext
from hanseg.dictionary import Dictionary
from hanseg.lexeme import LexemeType
from hanseg.trie import HitArena


class Recognizer(ABC):
    """One segmentation strategy, driven position by position."""

    # Lock owner name in the buffer context
    name: str = ""

    @abstractmethod
    def analyze(self, context: BufferContext) -> None:
        """Inspect the current cursor position and add candidates."""

    @abstractmethod
    def reset(self) -> None:
        """Drop all partial match state."""


# ============================================================================
# CJK Word Recognizer
# ============================================================================

class CJKRecognizer(Recognizer):
    """
    Dictionary word matcher.

    Every position opens a hit in the main trie; all alive hits are advanced
    by each following character, so every dictionary word starting at every
    offset is proposed, nested and overlapping matches included.
    """

    name = "CJK"

    def __init__(self, dictionary: Dictionary):
        self._hits = HitArena(dictionary.main_trie)

    def analyze(self, context: BufferContext) -> None:
        if context.current_char_type != CharType.USELESS:
            for begin, length in self._hits.feed(context.current_char, context.cursor):
                context.add_candidate(context.make_lexeme(begin, length, LexemeType.CN_WORD))
        else:
            self._hits.clear()

        if context.is_buffer_consumed():
            self._hits.clear()

        if self._hits:
            context.lock_buffer(self.name)
        else:
            context.unlock_buffer(self.name)

    def reset(self) -> None:
        self._hits.clear()


# ============================================================================
# Letter / Digit Recognizer
# ============================================================================

# Characters that may sit inside a mixed letter run: c++, a.b@c.com, x-1
LETTER_CONNECTORS = frozenset("#&+-.@_")

# Characters that may sit inside a number: 1,000.5
NUMBER_CONNECTORS = frozenset(",.")


class _LetterRun:
    """
    Scanner for one kind of letter run, tracking [start, end] buffer indexes.

    Connectors only continue a run that is already open. With
    `keep_connectors` they also extend it; otherwise a trailing connector is
    left out of the emitted lexeme.
    """

    def __init__(self, lexeme_type: LexemeType, member_types: FrozenSet[CharType],
                 connectors: FrozenSet[str] = frozenset(), keep_connectors: bool = False):
        self.lexeme_type = lexeme_type
        self.member_types = member_types
        self.connectors = connectors
        self.keep_connectors = keep_connectors
        self.start = -1
        self.end = -1

    @property
    def is_open(self) -> bool:
        return self.start != -1

    def reset(self) -> None:
        self.start = -1
        self.end = -1

    def _emit(self, context: BufferContext) -> None:
        lexeme = context.make_lexeme(self.start, self.end - self.start + 1, self.lexeme_type)
        context.add_candidate(lexeme)
        self.reset()

    def feed(self, context: BufferContext) -> None:
        char_type = context.current_char_type
        cursor = context.cursor

        if self.start == -1:
            if char_type in self.member_types:
                self.start = self.end = cursor
        elif char_type in self.member_types:
            self.end = cursor
        elif char_type == CharType.USELESS and context.current_char in self.connectors:
            if self.keep_connectors:
                self.end = cursor
        else:
            self._emit(context)

        if context.is_buffer_consumed() and self.start != -1:
            self._emit(context)


class LetterRecognizer(Recognizer):
    """
    Latin letters, decimal numbers and mixed alphanumeric tokens.

    Three scanners run side by side, in this order: English letters, Arabic
    numbers and mixed runs. A mixed run spanning exactly the same characters
    as a pure run is dropped by the context's duplicate check.
    """

    name = "LETTER"

    def __init__(self):
        self._runs = [
            _LetterRun(LexemeType.ENGLISH, frozenset({CharType.ENGLISH})),
            _LetterRun(LexemeType.ARABIC, frozenset({CharType.ARABIC}), NUMBER_CONNECTORS),
            _LetterRun(LexemeType.LETTER, frozenset({CharType.ENGLISH, CharType.ARABIC}),
                       LETTER_CONNECTORS, keep_connectors=True),
        ]

    def analyze(self, context: BufferContext) -> None:
        for run in self._runs:
            run.feed(context)

        if any(run.is_open for run in self._runs):
            context.lock_buffer(self.name)
        else:
            context.unlock_buffer(self.name)

    def reset(self) -> None:
        for run in self._runs:
            run.reset()
