"""Dependency container wiring for the API server."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photogram.adapters.supabase_photo_repository import SupabasePhotoRepository
from photogram.adapters.supabase_user_repository import SupabaseUserRepository
from photogram.config import Settings
from photogram.services.photos import PhotoService
from photogram.services.security import PasswordHasher, TokenService
from photogram.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    photo_service: PhotoService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(
        repository=SupabaseUserRepository(supabase_client),
        tokens=TokenService(
            secret=resolved_settings.jwt_secret,
            expire_minutes=resolved_settings.access_token_expire_minutes,
        ),
        hasher=PasswordHasher(),
    )
    photo_service = PhotoService(SupabasePhotoRepository(supabase_client))

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        photo_service=photo_service,
        close_resources=close_resources,
    )
