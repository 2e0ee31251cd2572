"""Resource API client for the photo feed."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

import httpx

from photogram.client.http import send
from photogram.domain.models import FeedPhoto, Photo
from photogram.errors import ServerError, UnauthorizedError, ValidationError


class TokenSource(Protocol):
    """Anything that knows the current bearer token."""

    @property
    def token(self) -> str | None:
        """Return the current token, if signed in."""


class ExploreClient(Protocol):
    """Interface for the photo feed endpoints."""

    async def list(self) -> list[FeedPhoto]:
        """Return the feed, newest first."""

    async def create(self, photo: str, name: str, description: str) -> Photo:
        """Create a photo."""

    async def update(
        self,
        photo_id: UUID | str,
        name: str | None = None,
        description: str | None = None,
    ) -> Photo:
        """Update a photo's name and/or description."""

    async def delete(self, photo_id: UUID | str) -> str:
        """Delete a photo."""


@dataclass
class HttpxExploreClient(ExploreClient):
    """CRUD client for ``/explore`` that attaches the session token."""

    base_url: str
    session: TokenSource
    http_client: httpx.AsyncClient
    timeout: float = 10.0

    @classmethod
    def connect(
        cls, base_url: str, session: TokenSource, timeout: float = 10.0
    ) -> "HttpxExploreClient":
        """Create an explore client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            session=session,
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def list(self) -> list[FeedPhoto]:
        """Return the feed, newest first. No token needed."""
        body = await send(
            self.http_client, "GET", self._url(), timeout=self.timeout
        )
        if not isinstance(body, list):
            raise ServerError("Malformed feed response")
        return [parse_feed_photo(item) for item in body]

    async def create(self, photo: str, name: str, description: str) -> Photo:
        """Post a new photo as the signed-in user."""
        token = self._require_token()
        if not all(value.strip() for value in (photo, name, description)):
            raise ValidationError("Please provide all fields")
        body = await send(
            self.http_client,
            "POST",
            self._url(),
            token=token,
            json={"photo": photo, "name": name, "description": description},
            timeout=self.timeout,
        )
        return parse_photo(body)

    async def update(
        self,
        photo_id: UUID | str,
        name: str | None = None,
        description: str | None = None,
    ) -> Photo:
        """Change the name and/or description of one of the user's photos."""
        token = self._require_token()
        payload: dict[str, object] = {}
        if name is not None:
            payload["name"] = name
        if description is not None:
            payload["description"] = description
        body = await send(
            self.http_client,
            "PUT",
            self._url(photo_id),
            token=token,
            json=payload,
            timeout=self.timeout,
        )
        return parse_photo(body)

    async def delete(self, photo_id: UUID | str) -> str:
        """Delete one of the user's photos and return the server's message."""
        token = self._require_token()
        body = await send(
            self.http_client,
            "DELETE",
            self._url(photo_id),
            token=token,
            timeout=self.timeout,
        )
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return "Photo removed"

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    def _require_token(self) -> str:
        token = self.session.token
        if not token:
            raise UnauthorizedError("Not signed in")
        return token

    def _url(self, photo_id: UUID | str | None = None) -> str:
        if photo_id is None:
            return f"{self.base_url}/explore"
        return f"{self.base_url}/explore/{photo_id}"


def parse_photo(payload: object) -> Photo:
    """Build a ``Photo`` from its JSON form."""
    feed_photo = parse_feed_photo(payload)
    return Photo(
        id=feed_photo.id,
        photo=feed_photo.photo,
        name=feed_photo.name,
        description=feed_photo.description,
        owner=feed_photo.owner,
        created_at=feed_photo.created_at,
        updated_at=feed_photo.updated_at,
    )


def parse_feed_photo(payload: object) -> FeedPhoto:
    """Build a ``FeedPhoto`` from its JSON form."""
    if not isinstance(payload, dict):
        raise ServerError("Malformed photo payload")
    try:
        created_at = datetime.fromisoformat(str(payload["created_at"]))
        updated_raw = payload.get("updated_at")
        owner_username = payload.get("owner_username")
        return FeedPhoto(
            id=UUID(str(payload["id"])),
            photo=str(payload["photo"]),
            name=str(payload["name"]),
            description=str(payload["description"]),
            owner=UUID(str(payload["owner"])),
            owner_username=owner_username if isinstance(owner_username, str) else None,
            created_at=created_at,
            updated_at=datetime.fromisoformat(str(updated_raw))
            if updated_raw
            else created_at,
        )
    except (KeyError, ValueError) as exc:
        raise ServerError("Malformed photo payload") from exc
