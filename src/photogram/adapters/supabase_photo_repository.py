"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from photogram.domain.models import FeedPhoto, Photo
from photogram.services.photos import PhotoRepository

_COLUMNS = "id, photo, name, description, owner_id, created_at, updated_at"


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo persistence."""

    client: Client

    def create_photo(
        self, owner: UUID, photo: str, name: str, description: str
    ) -> Photo:
        """Insert a photo row and return it."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "owner_id": str(owner),
                    "photo": photo,
                    "name": name,
                    "description": description,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo")
        return _row_to_photo(response.data[0])

    def get_photo(self, photo_id: UUID) -> Photo | None:
        """Return a photo by id, if present."""
        response = (
            self.client.table("photos")
            .select(_COLUMNS)
            .eq("id", str(photo_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_photo(response.data[0])

    def list_feed(self) -> list[FeedPhoto]:
        """Return all photos newest first, embedding the owner's username."""
        response = (
            self.client.table("photos")
            .select(f"{_COLUMNS}, users(username)")
            .order("created_at", desc=True)
            .execute()
        )
        feed = []
        for row in response.data or []:
            photo = _row_to_photo(row)
            owner = row.get("users")
            feed.append(
                FeedPhoto(
                    id=photo.id,
                    photo=photo.photo,
                    name=photo.name,
                    description=photo.description,
                    owner=photo.owner,
                    owner_username=owner.get("username")
                    if isinstance(owner, dict)
                    else None,
                    created_at=photo.created_at,
                    updated_at=photo.updated_at,
                )
            )
        return feed

    def update_photo(self, photo_id: UUID, changes: dict[str, str]) -> Photo:
        """Update the mutable columns of a photo row."""
        response = (
            self.client.table("photos")
            .update({**changes, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(photo_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update photo")
        return _row_to_photo(response.data[0])

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row."""
        self.client.table("photos").delete().eq("id", str(photo_id)).execute()


def _row_to_photo(row: dict[str, object]) -> Photo:
    created_at = datetime.fromisoformat(str(row["created_at"]))
    updated_raw = row.get("updated_at")
    return Photo(
        id=UUID(str(row["id"])),
        photo=str(row["photo"]),
        name=str(row["name"]),
        description=str(row["description"]),
        owner=UUID(str(row["owner_id"])),
        created_at=created_at,
        updated_at=datetime.fromisoformat(str(updated_raw))
        if updated_raw
        else created_at,
    )
