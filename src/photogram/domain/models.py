"""Domain models for the photo feed."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class PublicUser:
    """User identity as exposed to clients."""

    id: UUID
    username: str
    email: str


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    username: str
    email: str
    password_hash: str
    created_at: datetime

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, username=self.username, email=self.email)


@dataclass(frozen=True)
class Photo:
    """A posted photo. Only ``name`` and ``description`` ever change."""

    id: UUID
    photo: str
    name: str
    description: str
    owner: UUID
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class FeedPhoto:
    """Feed entry with the owner's username populated."""

    id: UUID
    photo: str
    name: str
    description: str
    owner: UUID
    owner_username: str | None
    created_at: datetime
    updated_at: datetime
