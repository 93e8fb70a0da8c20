"""SQLite word store."""

from hanseg.db.connection import create_schema, dispose_engines, get_db_path, get_engine, get_session
from hanseg.db.models import Base, DictWord, WordKind

__all__ = [
    "Base",
    "DictWord",
    "WordKind",
    "create_schema",
    "dispose_engines",
    "get_db_path",
    "get_engine",
    "get_session",
]
