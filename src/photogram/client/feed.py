"""Screen-facing state of the home feed."""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import TypeVar
from uuid import UUID

from photogram.client.explore_client import ExploreClient
from photogram.client.session import SessionManager
from photogram.domain.models import FeedPhoto, Photo
from photogram.errors import PhotogramError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


@dataclass
class FeedController:
    """Keeps the feed list, its error state and the local like markers.

    The feed is never patched locally: every successful mutation is followed
    by a full re-fetch. Likes live only in this object.
    """

    explore_client: ExploreClient
    session: SessionManager
    photos: list[FeedPhoto] = field(default_factory=list)
    error: str | None = None
    retryable: bool = False
    notice: str | None = None
    liked: set[UUID] = field(default_factory=set)

    async def refresh(self) -> list[FeedPhoto]:
        """Reload the feed. A failure leaves an empty, retryable feed."""
        try:
            self.photos = await self.explore_client.list()
        except PhotogramError as exc:
            logger.warning("Failed to load photos", extra={"kind": exc.kind})
            self.photos = []
            self.error = "Failed to load photos"
            self.retryable = True
        else:
            self.error = None
            self.retryable = False
        return self.photos

    async def add_photo(self, photo: str, name: str, description: str) -> Photo:
        created = await self._mutate(
            "Failed to add photo",
            "Photo added successfully",
            self.explore_client.create(photo, name, description),
        )
        await self.refresh()
        return created

    async def edit_photo(
        self,
        photo_id: UUID,
        name: str | None = None,
        description: str | None = None,
    ) -> Photo:
        updated = await self._mutate(
            "Failed to update photo",
            "Photo updated successfully",
            self.explore_client.update(photo_id, name=name, description=description),
        )
        await self.refresh()
        return updated

    async def remove_photo(self, photo_id: UUID) -> str:
        message = await self._mutate(
            "Failed to delete photo",
            "Photo deleted successfully",
            self.explore_client.delete(photo_id),
        )
        self.liked.discard(photo_id)
        await self.refresh()
        return message

    def toggle_like(self, photo_id: UUID) -> bool:
        """Flip the local like marker; returns whether the photo is now liked."""
        if photo_id in self.liked:
            self.liked.discard(photo_id)
            return False
        self.liked.add(photo_id)
        return True

    def is_owned(self, photo: FeedPhoto | Photo) -> bool:
        """Whether the signed-in user may edit or delete this photo."""
        user = self.session.user
        return user is not None and user.id == photo.owner

    async def _mutate(self, failure: str, success: str, call: Awaitable[_T]) -> _T:
        self.notice = None
        try:
            result = await call
        except PhotogramError as exc:
            self.notice = exc.message if exc.server_message and exc.message else failure
            raise
        self.notice = success
        return result
