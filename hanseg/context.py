"""
Buffer context for hanseg.

Owns the sliding character buffer, the cursor, the candidate lexemes of
the current cycle and the queue of resolved lexemes waiting to be pulled.

A cycle processes the buffer from index 0 up to the cursor position where
it stops. It may only stop at a *safe point*: a position after which no
recognizer still holds a partial match. When the cursor reaches the end of
a full buffer while a match is still open, the cycle is rewound to the last
safe point and the rest is re-read after the refill, so a word crossing a
refill boundary is never cut.
"""

from collections import deque
from typing import Collection, Deque, Dict, List, Optional, Set, Tuple

from hanseg.characters import CharType, identify_char_type, regularize
from hanseg.dictionary import Dictionary
from hanseg.lexeme import Lexeme, LexemeType
from hanseg.settings import BUFFER_EXHAUST_CRITICAL, Configuration

# Fallback lexeme type for characters no recognizer claimed
FALLBACK_TYPES = {
    CharType.CHINESE: LexemeType.CN_CHAR,
    CharType.OTHER_CJK: LexemeType.OTHER_CJK,
    CharType.ENGLISH: LexemeType.ENGLISH,
    CharType.ARABIC: LexemeType.ARABIC,
    CharType.USELESS: LexemeType.UNKNOWN,
}


class BufferContext:
    """Per-segmenter buffer, cursor, candidates and output queue."""

    def __init__(self, dictionary: Dictionary, config: Optional[Configuration] = None):
        if config is None:
            config = Configuration()
        self._dictionary = dictionary
        self._capacity = config.buffer_size
        self._lowercase = config.enable_lowercase
        self._filter_stop_words = config.filter_stop_words
        self.reset()

    def reset(self) -> None:
        """Forget the stream: buffer, cursor, candidates, queue and offset."""
        self._buffer: List[str] = []
        self._char_types: List[CharType] = []
        self._buffer_offset = 0
        self._available = 0
        self._consumed = 0
        self._cursor = 0
        self._safe_cursor = -1
        self._stream_exhausted = False
        self._locks: Set[str] = set()
        self._candidates: Dict[Tuple[int, int], Lexeme] = {}
        self._candidate_ends: Dict[int, List[Lexeme]] = {}
        self._path: List[Lexeme] = []
        self._results: Deque[Lexeme] = deque()

    # ------------------------------------------------------------------
    # Buffer
    # ------------------------------------------------------------------

    @property
    def available(self) -> int:
        return self._available

    @property
    def buffer_offset(self) -> int:
        """Absolute stream offset of buffer index 0."""
        return self._buffer_offset

    @property
    def stream_exhausted(self) -> bool:
        return self._stream_exhausted

    def fill_buffer(self, reader) -> int:
        """
        Shift the unprocessed tail to the front and top the buffer up.

        Reads until the buffer is full or the reader returns an empty
        string. Errors raised by the reader propagate unchanged.

        Returns:
            Characters available for the next cycle (tail included);
            0 once the stream is exhausted.
        """
        self._buffer = self._buffer[self._consumed:self._available]
        self._char_types = self._char_types[self._consumed:self._available]

        wanted = self._capacity - len(self._buffer)
        while wanted > 0 and not self._stream_exhausted:
            data = reader.read(wanted)
            if not data:
                self._stream_exhausted = True
                break
            for char in data:
                char = regularize(char, self._lowercase)
                self._buffer.append(char)
                self._char_types.append(identify_char_type(char))
            wanted -= len(data)

        self._available = len(self._buffer)
        self._consumed = 0
        return self._available

    def text_at(self, begin: int, length: int) -> str:
        return ''.join(self._buffer[begin:begin + length])

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_char(self) -> str:
        return self._buffer[self._cursor]

    @property
    def current_char_type(self) -> CharType:
        return self._char_types[self._cursor]

    def init_cursor(self) -> None:
        self._cursor = 0
        self._safe_cursor = -1

    def move_cursor(self) -> bool:
        """
        Advance the cursor by one.

        Returns False at the end of the safely processable region. At the end
        of a full buffer with a match still open, the cursor is first rewound
        to the last safe point and candidates beyond it are discarded.
        """
        if not self._locks:
            self._safe_cursor = self._cursor
        if self._cursor < self._available - 1:
            self._cursor += 1
            return True
        if self._locks and not self._stream_exhausted and self._safe_cursor >= 0:
            self._rewind(self._safe_cursor)
        return False

    def need_refill_buffer(self) -> bool:
        """
        True when the cycle should stop here to make room for more input:
        more input may follow, the cursor is near the buffer end and no
        recognizer has a match open.
        """
        return (not self._stream_exhausted
                and self._cursor < self._available - 1
                and self._cursor >= self._available - BUFFER_EXHAUST_CRITICAL
                and not self._locks)

    def is_buffer_consumed(self) -> bool:
        """
        True at the last character recognizers will see for good: the end of
        the stream, or the end of a full buffer that has no safe point at all.
        """
        return (self._cursor == self._available - 1
                and (self._stream_exhausted or self._safe_cursor < 0))

    def _rewind(self, position: int) -> None:
        self._cursor = position
        limit = self._buffer_offset + position
        kept = [lexeme for lexeme in self._candidates.values() if lexeme.begin_offset <= limit]
        self._candidates = {}
        self._candidate_ends = {}
        for lexeme in kept:
            self.add_candidate(lexeme)

    # ------------------------------------------------------------------
    # Recognizer locks
    # ------------------------------------------------------------------

    def lock_buffer(self, name: str) -> None:
        self._locks.add(name)

    def unlock_buffer(self, name: str) -> None:
        self._locks.discard(name)

    def is_buffer_locked(self) -> bool:
        return bool(self._locks)

    # ------------------------------------------------------------------
    # Candidates
    # ------------------------------------------------------------------

    def make_lexeme(self, begin: int, length: int, lexeme_type: LexemeType) -> Lexeme:
        """Build a lexeme from buffer-relative coordinates."""
        return Lexeme(
            begin_offset=self._buffer_offset + begin,
            length=length,
            type=lexeme_type,
            text=self.text_at(begin, length),
        )

    def add_candidate(self, lexeme: Lexeme) -> bool:
        """
        Record a proposal. A proposal covering exactly the same span as an
        earlier one is ignored.
        """
        key = (lexeme.begin_offset, lexeme.length)
        if key in self._candidates:
            return False
        self._candidates[key] = lexeme
        self._candidate_ends.setdefault(lexeme.end_offset, []).append(lexeme)
        return True

    def has_candidate_ending_at(self, index: int, types: Collection[LexemeType]) -> bool:
        """True if a candidate of one of `types` ends right before buffer index `index`."""
        for lexeme in self._candidate_ends.get(self._buffer_offset + index, ()):
            if lexeme.type in types:
                return True
        return False

    def take_candidates(self) -> List[Lexeme]:
        """Return this cycle's candidates in lexeme order and clear them."""
        candidates = sorted(self._candidates.values(), key=lambda l: l.sort_key)
        self._candidates = {}
        self._candidate_ends = {}
        return candidates

    def set_resolved_path(self, lexemes: List[Lexeme]) -> None:
        self._path = sorted(lexemes, key=lambda l: l.sort_key)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _fallback_lexeme(self, index: int) -> Lexeme:
        return self.make_lexeme(index, 1, FALLBACK_TYPES[self._char_types[index]])

    def output_to_result(self) -> None:
        """
        Queue the resolved path for buffer[0..cursor], adding a single
        character lexeme for every character the path leaves uncovered.
        """
        end = self._cursor + 1
        index = 0
        for lexeme in self._path:
            begin = lexeme.begin_offset - self._buffer_offset
            while index < begin:
                self._results.append(self._fallback_lexeme(index))
                index += 1
            self._results.append(lexeme)
            index = max(index, begin + lexeme.length)
        while index < end:
            self._results.append(self._fallback_lexeme(index))
            index += 1
        self._path = []

    def mark_buffer_offset(self) -> None:
        """Account for the characters this cycle consumed."""
        self._consumed = self._cursor + 1
        self._buffer_offset += self._consumed

    def get_next_lexeme(self) -> Optional[Lexeme]:
        """Pop the next queued lexeme, skipping stop words when configured."""
        while self._results:
            lexeme = self._results.popleft()
            if self._filter_stop_words and self._dictionary.is_stop_word(lexeme.text):
                continue
            return lexeme
        return None
