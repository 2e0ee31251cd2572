"""Account registration and login."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photogram.domain.models import UserRecord
from photogram.errors import AuthError, ForbiddenError, ValidationError
from photogram.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with the given email, if present."""

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create and return a new user record."""


@dataclass
class UserService:
    """Application service for account lifecycle actions."""

    repository: UserRepository
    tokens: TokenService
    hasher: PasswordHasher

    def register(
        self, username: str, email: str, password: str
    ) -> tuple[str, UserRecord]:
        """Create an account and return a token for it."""
        username = (username or "").strip()
        email = (email or "").strip().lower()
        if not username or not email or not password:
            raise ValidationError("Please provide all fields")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if self.repository.get_by_username(username) or self.repository.get_by_email(
            email
        ):
            raise ValidationError("User already exists")

        user = self.repository.create_user(
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
        )
        logger.info("Registered user", extra={"user_id": str(user.id)})
        return self.tokens.issue(user), user

    def login(self, username: str, password: str) -> tuple[str, UserRecord]:
        """Check credentials and return a fresh token."""
        username = (username or "").strip()
        if not username or not password:
            raise ValidationError("Please provide all fields")
        user = self.repository.get_by_username(username)
        if user is None or not self.hasher.verify(password, user.password_hash):
            raise AuthError("Invalid username or password")
        return self.tokens.issue(user), user

    def resolve_token(self, token: str) -> UserRecord:
        """Return the user a bearer token belongs to."""
        user = self.repository.get_by_id(self.tokens.subject(token))
        if user is None:
            raise ForbiddenError("Not authorized, token failed")
        return user
