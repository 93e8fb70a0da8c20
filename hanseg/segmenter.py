"""
Streaming segmenter for hanseg.

Usage:
    >>> from hanseg import Segmenter
    >>> seg = Segmenter("中华人民共和国成立了")
    >>> [lexeme.text for lexeme in seg]
    ['中华人民共和国', '成立', '了']

`Segmenter.next()` pulls one lexeme at a time. Each time the output queue
runs dry the next buffer cycle runs: refill, walk every recognizer over every
cursor position, arbitrate, queue the result.
"""

import io
import logging
import threading
from typing import Iterator, List, Optional, Union

from hanseg.arbitrator import Arbitrator
from hanseg.context import BufferContext
from hanseg.counters import QuantifierRecognizer
from hanseg.dictionary import Dictionary, init_dictionary
from hanseg.lexeme import Lexeme
from hanseg.recognizers import CJKRecognizer, LetterRecognizer, Recognizer
from hanseg.settings import Configuration

logger = logging.getLogger(__name__)


def default_recognizers(dictionary: Dictionary) -> List[Recognizer]:
    """The fixed recognizer set, in analysis order."""
    return [
        LetterRecognizer(),
        QuantifierRecognizer(dictionary),
        CJKRecognizer(dictionary),
    ]


def _as_reader(source):
    if isinstance(source, str):
        return io.StringIO(source)
    return source


class Segmenter:
    """
    Pull-based segmenter over one character stream.

    Args:
        source: A string, or any object with `read(size) -> str`. The caller
            owns (and closes) the reader.
        use_smart: Smart mode (one fused path) or fine-grained mode (all
            candidates).
        dictionary: Shared dictionary. Defaults to the process-wide one,
            initialized on first use.
        config: Buffer size, lowercasing and stop word filtering.
    """

    def __init__(self, source, use_smart: Optional[bool] = None,
                 dictionary: Optional[Dictionary] = None,
                 config: Optional[Configuration] = None):
        if config is None:
            config = Configuration()
        if dictionary is None:
            dictionary = init_dictionary(config)

        self.config = config
        self.use_smart = config.use_smart if use_smart is None else use_smart
        self.dictionary = dictionary

        self._reader = _as_reader(source)
        self._context = BufferContext(dictionary, config)
        self._recognizers = default_recognizers(dictionary)
        self._arbitrator = Arbitrator()
        self._exhausted = False
        self._lock = threading.Lock()

    def next(self) -> Optional[Lexeme]:
        """
        Return the next lexeme, or None once the stream is exhausted.

        Reader errors propagate; call `reset` before reusing the instance.
        """
        with self._lock:
            lexeme = self._context.get_next_lexeme()
            while lexeme is None and not self._exhausted:
                if self._run_cycle() == 0:
                    self._exhausted = True
                    logger.debug("Stream exhausted")
                    break
                lexeme = self._context.get_next_lexeme()
            return lexeme

    def _run_cycle(self) -> int:
        context = self._context
        available = context.fill_buffer(self._reader)
        if available <= 0:
            self._reset_recognizers()
            return 0

        context.init_cursor()
        while True:
            for recognizer in self._recognizers:
                recognizer.analyze(context)
            if context.need_refill_buffer():
                break
            if not context.move_cursor():
                break

        self._reset_recognizers()
        self._arbitrator.process(context, self.use_smart)
        context.output_to_result()
        logger.debug(f"Cycle at offset {context.buffer_offset}: "
                     f"consumed {context.cursor + 1} of {available} characters")
        context.mark_buffer_offset()
        return available

    def _reset_recognizers(self) -> None:
        for recognizer in self._recognizers:
            recognizer.reset()

    def reset(self, source) -> None:
        """Rebind to a new input and clear all per-stream state."""
        with self._lock:
            self._reader = _as_reader(source)
            self._context.reset()
            self._reset_recognizers()
            self._exhausted = False

    def __iter__(self) -> Iterator[Lexeme]:
        while True:
            lexeme = self.next()
            if lexeme is None:
                return
            yield lexeme

    def segment(self) -> List[Lexeme]:
        """Drain the rest of the stream."""
        return list(self)
