"""Auth API client."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import httpx

from photogram.client.http import send
from photogram.domain.models import PublicUser
from photogram.errors import ServerError, ValidationError


@dataclass(frozen=True)
class AuthResult:
    """Token and user returned by a successful login or registration."""

    token: str
    user: PublicUser


class AuthClient(Protocol):
    """Interface for the authentication endpoints."""

    async def login(self, username: str, password: str) -> AuthResult:
        """Exchange credentials for a token."""

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Create an account and return a token for it."""

    async def me(self, token: str) -> PublicUser:
        """Return the user a token belongs to."""


@dataclass
class HttpxAuthClient(AuthClient):
    """Auth client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> "HttpxAuthClient":
        """Create an auth client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def login(self, username: str, password: str) -> AuthResult:
        """Log in with username and password."""
        body = await send(
            self.http_client,
            "POST",
            f"{self.base_url}/auth/login",
            json={"username": username, "password": password},
            timeout=self.timeout,
        )
        return _parse_auth_result(body)

    async def register(self, username: str, email: str, password: str) -> AuthResult:
        """Register a new account; empty fields fail before any request."""
        if not username.strip() or not email.strip() or not password:
            raise ValidationError("Please provide all fields")
        body = await send(
            self.http_client,
            "POST",
            f"{self.base_url}/auth/register",
            json={"username": username, "email": email, "password": password},
            timeout=self.timeout,
        )
        return _parse_auth_result(body)

    async def me(self, token: str) -> PublicUser:
        """Fetch the profile behind a token."""
        body = await send(
            self.http_client,
            "GET",
            f"{self.base_url}/auth/me",
            token=token,
            timeout=self.timeout,
        )
        return parse_user(body)

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()


def parse_user(payload: object) -> PublicUser:
    """Build a ``PublicUser`` from a JSON user object."""
    if not isinstance(payload, dict):
        raise ServerError("Malformed user payload")
    try:
        return PublicUser(
            id=UUID(str(payload["id"])),
            username=str(payload["username"]),
            email=str(payload["email"]),
        )
    except (KeyError, ValueError) as exc:
        raise ServerError("Malformed user payload") from exc


def _parse_auth_result(payload: object) -> AuthResult:
    if not isinstance(payload, dict) or not payload.get("token"):
        raise ServerError("Malformed auth response")
    return AuthResult(token=str(payload["token"]), user=parse_user(payload.get("user")))
