"""
Database connection management for hanseg.

Engines are cached per database path; sessions are cheap and created on
demand.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Union

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from hanseg.db.models import Base
from hanseg.settings import DB_PATH

_engines: Dict[str, Engine] = {}
_engine_lock = threading.Lock()


def get_db_path() -> Optional[Path]:
    """Return the configured database path if the file exists."""
    if DB_PATH.exists():
        return DB_PATH
    return None


def get_engine(db_path: Union[str, Path]) -> Engine:
    """Get (or create) the engine for a SQLite file."""
    key = str(Path(db_path))
    with _engine_lock:
        engine = _engines.get(key)
        if engine is None:
            engine = create_engine(f"sqlite:///{key}")
            _engines[key] = engine
        return engine


def get_session(db_path: Optional[Union[str, Path]] = None) -> Session:
    """
    Open a session on the word store.

    Args:
        db_path: SQLite file. Defaults to settings.DB_PATH.

    Raises:
        FileNotFoundError: If the database file does not exist.
    """
    path = Path(db_path) if db_path is not None else DB_PATH
    if not path.exists():
        raise FileNotFoundError(f"Database not found: {path}")
    return Session(get_engine(path))


def create_schema(db_path: Union[str, Path]) -> Engine:
    """Create the word store tables, creating parent directories as needed."""
    path = Path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    engine = get_engine(path)
    Base.metadata.create_all(engine)
    return engine


def dispose_engines() -> None:
    """Close every cached engine."""
    with _engine_lock:
        for engine in _engines.values():
            engine.dispose()
        _engines.clear()
