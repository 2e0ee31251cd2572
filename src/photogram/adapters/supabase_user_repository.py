"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from photogram.domain.models import UserRecord
from photogram.services.users import UserRepository

_COLUMNS = "id, username, email, password_hash, created_at"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        return self._first("id", str(user_id))

    def get_by_username(self, username: str) -> UserRecord | None:
        """Return the user with the given username, if present."""
        return self._first("username", username)

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with the given email, if present."""
        return self._first("email", email)

    def create_user(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "username": username,
                    "email": email,
                    "password_hash": password_hash,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _row_to_user(response.data[0])

    def _first(self, column: str, value: str) -> UserRecord | None:
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq(column, value)
            .limit(1)
            .execute()
        )
        if response.data:
            return _row_to_user(response.data[0])
        return None


def _row_to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        username=str(row["username"]),
        email=str(row["email"]),
        password_hash=str(row["password_hash"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
