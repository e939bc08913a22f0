"""Pydantic schemas for registration, login and the public user projection."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Body of ``POST /auth/register``; emptiness is checked by the service."""

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=1024)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=320)
    password: str = Field(..., max_length=1024)


class UserPublic(BaseModel):
    """User fields that are safe to return to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    favorites: list[str] = Field(default_factory=list)


class AuthResponse(BaseModel):
    """Signed session token plus the user it was issued for."""

    token: str
    user: UserPublic
