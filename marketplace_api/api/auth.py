"""FastAPI router for registration and login."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from marketplace_api.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from marketplace_api.services.auth_service import AuthService
from marketplace_api.services.dependencies import get_auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Create an account and return a session token for it."""

    return await service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    service: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    return await service.login(email=payload.email, password=payload.password)
