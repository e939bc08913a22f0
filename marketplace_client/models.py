"""Client-side views of the API payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    favorites: list[str] = Field(default_factory=list)


class AuthPayload(BaseModel):
    token: str
    user: UserProfile


class Product(BaseModel):
    id: str
    title: str
    price: float
    description: str
    image: str


class ProductPage(BaseModel):
    products: list[Product] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 0


class FavoritesPayload(BaseModel):
    favorites: list[str] = Field(default_factory=list)
