"""
Shared dictionary for hanseg.

Three independent tries (main words, quantifiers, stop words) built once
per process by `init_dictionary` and then shared, read-only, by every
segmenter. Lookups never mutate anything, so no locking is needed after
the bootstrap.
"""

import logging
import threading
import time
from typing import Iterable, List, Optional

from hanseg.characters import regularize_text
from hanseg.db.connection import get_session
from hanseg.db.models import WordKind
from hanseg.dict_load import WordLists, collect_word_lists, load_words_from_db
from hanseg.settings import Configuration
from hanseg.trie import MatchState, WordTrie

logger = logging.getLogger(__name__)


class DictionaryNotInitializedError(RuntimeError):
    """Raised when the shared dictionary is used before `init_dictionary`."""

    def __init__(self):
        super().__init__("Dictionary has not been initialized; call hanseg.init_dictionary() first")


def _normalize_words(words: Iterable[str], lowercase: bool) -> List[str]:
    result = []
    for word in words:
        word = word.strip()
        if word:
            result.append(regularize_text(word, lowercase))
    return result


class Dictionary:
    """
    Word, quantifier and stop word tries.

    Words are regularized the same way buffered characters are, so a
    full-width or upper-case entry still matches its normalized input.

    Example:
        >>> d = Dictionary(["中华", "人民"], quantifier_words=["本"])
        >>> d.query_main("中华").is_match
        True
        >>> d.query_quantifier("本").is_match
        True
    """

    def __init__(self, main_words: Iterable[str] = (), quantifier_words: Iterable[str] = (),
                 stop_words: Iterable[str] = (), lowercase: bool = True):
        self._main = WordTrie(_normalize_words(main_words, lowercase))
        self._quantifiers = WordTrie(_normalize_words(quantifier_words, lowercase))
        self._stop_words = WordTrie(_normalize_words(stop_words, lowercase))

    @classmethod
    def from_word_lists(cls, word_lists: WordLists, lowercase: bool = True) -> "Dictionary":
        return cls(
            main_words=word_lists.get(WordKind.MAIN, ()),
            quantifier_words=word_lists.get(WordKind.QUANTIFIER, ()),
            stop_words=word_lists.get(WordKind.STOPWORD, ()),
            lowercase=lowercase,
        )

    @classmethod
    def from_config(cls, config: Optional[Configuration] = None) -> "Dictionary":
        """
        Build from the word store when `config.db_path` exists, otherwise
        from the word list files.
        """
        if config is None:
            config = Configuration()
        if config.db_path is not None and config.db_path.exists():
            with get_session(config.db_path) as session:
                word_lists = load_words_from_db(session)
        else:
            word_lists = collect_word_lists(config)
        return cls.from_word_lists(word_lists, lowercase=config.enable_lowercase)

    @property
    def main_trie(self) -> WordTrie:
        return self._main

    @property
    def quantifier_trie(self) -> WordTrie:
        return self._quantifiers

    @property
    def stopword_trie(self) -> WordTrie:
        return self._stop_words

    def query_main(self, sequence: str) -> MatchState:
        return self._main.query(sequence)

    def query_quantifier(self, sequence: str) -> MatchState:
        return self._quantifiers.query(sequence)

    def is_stop_word(self, sequence: str) -> bool:
        return self._stop_words.query(sequence).is_match

    def __repr__(self) -> str:
        return (f"<Dictionary main={len(self._main)} quantifiers={len(self._quantifiers)} "
                f"stop_words={len(self._stop_words)}>")


# ============================================================================
# Process-wide Instance
# ============================================================================

_dictionary: Optional[Dictionary] = None
_dictionary_lock = threading.Lock()


def init_dictionary(config: Optional[Configuration] = None, reset: bool = False) -> Dictionary:
    """
    Build the shared dictionary once.

    Later calls return the existing instance and ignore `config`, unless
    `reset` is True.

    Args:
        config: Word list / database locations.
        reset: Rebuild even if already initialized.
    """
    global _dictionary

    if _dictionary is not None and not reset:
        return _dictionary

    with _dictionary_lock:
        if _dictionary is not None and not reset:
            return _dictionary

        t0 = time.perf_counter()
        dictionary = Dictionary.from_config(config)
        elapsed = (time.perf_counter() - t0) * 1000
        logger.info(f"Dictionary initialized in {elapsed:.1f}ms: {dictionary!r}")
        _dictionary = dictionary
        return dictionary


def set_dictionary(dictionary: Dictionary) -> None:
    """Install an already built dictionary as the shared instance."""
    global _dictionary
    with _dictionary_lock:
        _dictionary = dictionary


def get_dictionary() -> Dictionary:
    """
    Return the shared dictionary.

    Raises:
        DictionaryNotInitializedError: If `init_dictionary` has not run.
    """
    if _dictionary is None:
        raise DictionaryNotInitializedError()
    return _dictionary


def is_dictionary_ready() -> bool:
    return _dictionary is not None


def clear_dictionary() -> None:
    """Drop the shared dictionary (used by tests)."""
    global _dictionary
    with _dictionary_lock:
        _dictionary = None
