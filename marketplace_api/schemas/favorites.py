"""Pydantic schemas for the favorites endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FavoritesResponse(BaseModel):
    """Authoritative favorites list returned after every mutation."""

    favorites: list[str] = Field(
        default_factory=list,
        description="Product ids in the order they were favorited, without duplicates.",
    )


class MessageResponse(BaseModel):
    message: str
