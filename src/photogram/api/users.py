"""Registration and login endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from photogram.api.auth import require_user
from photogram.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from photogram.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from photogram.containers import AppContainer

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, request: Request) -> AuthResponse:
    """Create an account and sign it in."""
    container: AppContainer = request.app.state.container
    token, user = container.user_service.register(
        body.username, body.email, body.password
    )
    return AuthResponse(token=token, user=UserResponse.from_domain(user.public()))


@router.post("/login")
async def login(body: LoginRequest, request: Request) -> AuthResponse:
    """Exchange credentials for a token."""
    container: AppContainer = request.app.state.container
    token, user = container.user_service.login(body.username, body.password)
    return AuthResponse(token=token, user=UserResponse.from_domain(user.public()))


@router.get("/me")
async def me(user: UserRecord = Depends(require_user)) -> UserResponse:
    """Return the user the bearer token belongs to."""
    return UserResponse.from_domain(user.public())
