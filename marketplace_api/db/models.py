"""SQLAlchemy ORM models for the marketplace.

A user row behaves like the document it replaces: the favorite product ids
live in an ordered JSON array on the row itself rather than in a join table,
so a favorites mutation is a read-modify-write of one row.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    """Return a 32 character hexadecimal identifier."""
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320),
        nullable=False,
        unique=True,
        index=True,
        doc="Stored trimmed and lower-cased; uniqueness is case-insensitive.",
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    favorites: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        doc=(
            "Ordered product ids without duplicates. Ids are references only;"
            " deleting a product leaves them in place."
        ),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_object_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(String(2048), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


__all__ = ["Base", "Product", "User", "new_object_id", "utcnow"]
