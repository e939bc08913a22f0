"""Pydantic schema package for the marketplace API."""

from .auth import AuthResponse, LoginRequest, RegisterRequest, UserPublic
from .error import ErrorResponse, ErrorType, ValidationErrorDetail, ValidationErrorResponse
from .favorites import FavoritesResponse, MessageResponse
from .product import ProductCreate, ProductPage, ProductRead, ProductUpdate

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "ErrorType",
    "FavoritesResponse",
    "LoginRequest",
    "MessageResponse",
    "ProductCreate",
    "ProductPage",
    "ProductRead",
    "ProductUpdate",
    "RegisterRequest",
    "UserPublic",
    "ValidationErrorDetail",
    "ValidationErrorResponse",
]
