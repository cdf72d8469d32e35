"""Member ORM: table definition for the single persisted record type.

Invariants:
    - id is an autoincrementing integer primary key (never reused on SQLite)
    - id is signed 64-bit everywhere: BIGINT on Postgres, INTEGER (already 64-bit) on SQLite
    - email is UNIQUE: the store, not the application, rejects duplicates
    - joined_date is ISO text (YYYY-MM-DD), written once at insert

Design Decisions:
    - Text date over Date column: matches the wire format and sorts lexically
    - Model used for metadata (create_all) only; queries are parameterized SQL
      in infrastructure/member_store.py
"""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from member_api.db.base import Base


class Member(Base):
    """A member record."""
    __tablename__ = "members"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    joined_date: Mapped[str] = mapped_column(Text, nullable=False)
