"""
SQLAlchemy ORM models for the hanseg word store.

All three word lists share one table; `kind` tells them apart.
"""

from enum import Enum
from typing import Optional

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class WordKind(str, Enum):
    """Which trie a stored word belongs to."""
    MAIN = "main"
    QUANTIFIER = "quantifier"
    STOPWORD = "stopword"


class DictWord(Base):
    """One dictionary word."""
    __tablename__ = "dict_word"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(String, nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    source: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint("kind", "text", name="uq_dict_word_kind_text"),
        Index("ix_dict_word_kind", "kind"),
    )

    def __repr__(self) -> str:
        return f"<DictWord {self.kind}:{self.text}>"
