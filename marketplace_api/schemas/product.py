"""Pydantic schemas for catalog reads and product administration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    price: float = Field(..., ge=0)
    description: str
    image: str


class ProductCreate(BaseModel):
    """Payload for ``POST /products``; every field is required and non-blank."""

    title: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    description: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1, max_length=2048)

    @field_validator("title", "description", "image")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Must not be blank")
        return cleaned


class ProductUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    title: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, ge=0)
    description: str | None = Field(None, min_length=1)
    image: str | None = Field(None, min_length=1, max_length=2048)

    @field_validator("title", "description", "image")
    @classmethod
    def _reject_blank(cls, value: str | None) -> str | None:
        if value is None:
            return value
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Must not be blank")
        return cleaned


class ProductPage(BaseModel):
    """Response body of ``GET /products``."""

    products: list[ProductRead]
    total: int = Field(..., ge=0, description="Number of products matching the search")
    page: int = Field(..., ge=1)
    pages: int = Field(..., ge=0, description="ceil(total / limit)")
