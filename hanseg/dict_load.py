"""
Dictionary loading module for hanseg.

Reads the plain-text word lists (main dictionary, quantifiers, stop words
and their extensions) and moves them in and out of the SQLite word store.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hanseg.db.connection import create_schema, get_session
from hanseg.db.models import DictWord, WordKind
from hanseg.settings import Configuration

logger = logging.getLogger(__name__)

WordLists = Dict[WordKind, List[str]]

COMMENT_PREFIX = "#"


# ============================================================================
# Word List Files
# ============================================================================

def read_word_list(path: Union[str, Path]) -> List[str]:
    """
    Read one word per line.

    Blank lines and lines starting with '#' are skipped; a UTF-8 byte order
    mark is tolerated.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    words = []
    with open(path, encoding="utf-8-sig") as f:
        for line in f:
            word = line.strip()
            if not word or word.startswith(COMMENT_PREFIX):
                continue
            words.append(word)
    logger.info(f"Read {len(words)} words from {path}")
    return words


def collect_word_lists(config: Optional[Configuration] = None) -> WordLists:
    """
    Gather every word list named by the configuration.

    Extension dictionaries are merged into the main list and extension stop
    word lists into the stop word list.
    """
    if config is None:
        config = Configuration()

    main = read_word_list(config.main_dict)
    for path in config.ext_dicts:
        main.extend(read_word_list(path))

    stopwords = read_word_list(config.stopword_dict)
    for path in config.ext_stopwords:
        stopwords.extend(read_word_list(path))

    return {
        WordKind.MAIN: main,
        WordKind.QUANTIFIER: read_word_list(config.quantifier_dict),
        WordKind.STOPWORD: stopwords,
    }


# ============================================================================
# Word Store
# ============================================================================

def store_words(session: Session, kind: WordKind, words: Iterable[str],
                source: Optional[str] = None, batch_size: int = 5000,
                progress_callback: Optional[Callable[[int], None]] = None) -> int:
    """
    Insert words of one kind, skipping ones already stored.

    Returns:
        Number of rows inserted.
    """
    existing = set(session.scalars(
        select(DictWord.text).where(DictWord.kind == kind.value)
    ))

    inserted = 0
    pending = []
    for word in words:
        if word in existing:
            continue
        existing.add(word)
        pending.append(DictWord(text=word, kind=kind.value, source=source))
        if len(pending) >= batch_size:
            session.add_all(pending)
            session.flush()
            inserted += len(pending)
            pending = []
            if progress_callback:
                progress_callback(inserted)

    if pending:
        session.add_all(pending)
        session.flush()
        inserted += len(pending)
        if progress_callback:
            progress_callback(inserted)

    return inserted


def init_database(db_path: Union[str, Path], config: Optional[Configuration] = None,
                  batch_size: int = 5000,
                  progress_callback: Optional[Callable[[int], None]] = None) -> Dict[WordKind, int]:
    """
    Build (or extend) the SQLite word store from the configured word lists.

    Args:
        db_path: Target database file.
        config: Word list locations. Defaults to the bundled lists.
        batch_size: Rows per flush.
        progress_callback: Called with the running row count of each kind.

    Returns:
        Rows inserted per kind.
    """
    create_schema(db_path)
    word_lists = collect_word_lists(config)

    counts: Dict[WordKind, int] = {}
    with get_session(db_path) as session:
        for kind, words in word_lists.items():
            logger.info(f"Storing {len(words)} {kind.value} words...")
            counts[kind] = store_words(session, kind, words, source=kind.value,
                                       batch_size=batch_size,
                                       progress_callback=progress_callback)
        session.commit()

    logger.info(f"Word store ready at {db_path}: " +
                ", ".join(f"{kind.value}={count}" for kind, count in counts.items()))
    return counts


def load_words_from_db(session: Session) -> WordLists:
    """Read all stored words grouped by kind, in insertion order."""
    word_lists: WordLists = {kind: [] for kind in WordKind}
    rows = session.execute(select(DictWord.kind, DictWord.text).order_by(DictWord.id))
    for kind, text in rows:
        word_lists[WordKind(kind)].append(text)
    logger.info("Loaded word store: " +
                ", ".join(f"{kind.value}={len(words)}" for kind, words in word_lists.items()))
    return word_lists


def count_words(session: Session) -> Dict[WordKind, int]:
    """Stored row count per kind."""
    counts = {kind: 0 for kind in WordKind}
    rows = session.execute(select(DictWord.kind, func.count()).group_by(DictWord.kind))
    for kind, count in rows:
        counts[WordKind(kind)] = count
    return counts


def database_exists(db_path: Union[str, Path]) -> bool:
    """Check whether a word store exists and holds at least one word."""
    path = Path(db_path)
    if not path.exists():
        return False
    try:
        with get_session(path) as session:
            return sum(count_words(session).values()) > 0
    except SQLAlchemyError:
        logger.warning(f"Could not read word store at {path}", exc_info=True)
        return False
