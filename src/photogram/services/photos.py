"""Photo feed resource service with ownership checks."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photogram.domain.models import FeedPhoto, Photo, UserRecord
from photogram.errors import ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photos."""

    def create_photo(
        self, owner: UUID, photo: str, name: str, description: str
    ) -> Photo:
        """Insert a photo and return it with server-assigned fields."""

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""

    def list_feed(self) -> list[FeedPhoto]:
        """Return all photos newest first with owner usernames populated."""

    def update_photo(self, photo_id: UUID, changes: dict[str, str]) -> Photo:
        """Apply changes to ``name``/``description`` and return the photo."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo."""


@dataclass
class PhotoService:
    """Create, read, update and delete photos on behalf of a user."""

    repository: PhotoRepository

    def create_photo(
        self, owner: UserRecord, photo: str, name: str, description: str
    ) -> Photo:
        """Create a photo owned by the authenticated user."""
        fields = [_clean(photo), _clean(name), _clean(description)]
        if not all(fields):
            raise ValidationError("Please provide all fields")
        created = self.repository.create_photo(owner.id, *fields)
        logger.info(
            "Photo created",
            extra={"photo_id": str(created.id), "user_id": str(owner.id)},
        )
        return created

    def list_feed(self) -> list[FeedPhoto]:
        """Return the feed, newest first."""
        return sorted(
            self.repository.list_feed(),
            key=lambda entry: entry.created_at,
            reverse=True,
        )

    def update_photo(
        self,
        identity: UserRecord,
        photo_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Photo:
        """Update name and/or description of a photo the caller owns."""
        current = self._owned_photo(identity, photo_id)
        changes: dict[str, str] = {}
        for key, value in (("name", name), ("description", description)):
            if value is None:
                continue
            cleaned = _clean(value)
            if not cleaned:
                raise ValidationError(f"Please add a {key}")
            changes[key] = cleaned
        if not changes:
            return current
        updated = self.repository.update_photo(current.id, changes)
        logger.info(
            "Photo updated",
            extra={"photo_id": str(current.id), "user_id": str(identity.id)},
        )
        return updated

    def delete_photo(self, identity: UserRecord, photo_id: str) -> str:
        """Delete a photo the caller owns and return a confirmation."""
        current = self._owned_photo(identity, photo_id)
        self.repository.delete_photo(current.id)
        logger.info(
            "Photo deleted",
            extra={"photo_id": str(current.id), "user_id": str(identity.id)},
        )
        return "Photo removed"

    def _owned_photo(self, identity: UserRecord, photo_id: str) -> Photo:
        parsed = _parse_id(photo_id)
        current = self.repository.get_photo(parsed) if parsed else None
        if current is None:
            raise NotFoundError("Photo not found")
        if current.owner != identity.id:
            raise ForbiddenError("User not authorized")
        return current


def _clean(value: str | None) -> str:
    return value.strip() if isinstance(value, str) else ""


def _parse_id(raw: str) -> UUID | None:
    try:
        return UUID(str(raw))
    except ValueError:
        return None
