"""
AttnViz Backend: TextRecord SQLAlchemy Model
===============================================

What:  ORM model representing the `texts` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by TextStore for CRUD operations and by Alembic for schema management.

Table Design:
    - id: 64-bit autoincrement primary key. BIGINT on server databases,
      INTEGER on SQLite (already 64-bit there, and the only type AUTOINCREMENT
      accepts). On SQLite the AUTOINCREMENT keyword (sqlite_autoincrement)
      guarantees ids of deleted rows are never handed out again; without it
      SQLite may reuse the highest freed rowid.
    - text: TEXT NOT NULL. The 100-character limit is a business rule enforced
      by TextStore before insert, not a column constraint.
"""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from attnviz.database import Base


class TextRecord(Base):
    """
    A short text saved by a user.

    Lifecycle:
        1. Created by POST /api/texts (id assigned by the database)
        2. Text replaced in place by PUT /api/texts/{id} (id unchanged)
        3. Removed by DELETE /api/texts/{id}; the id is never reissued
    """

    __tablename__ = "texts"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<TextRecord(id={self.id}, text={self.text!r})>"
