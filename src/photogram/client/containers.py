"""Dependency wiring for the mobile client core."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from photogram.client.auth_client import HttpxAuthClient
from photogram.client.credentials import FileCredentialStore
from photogram.client.explore_client import HttpxExploreClient
from photogram.client.feed import FeedController
from photogram.client.session import SessionManager
from photogram.config import ClientSettings


@dataclass
class ClientContainer:
    """Holds the client's session, API clients and feed state."""

    settings: ClientSettings
    session: SessionManager
    explore_client: HttpxExploreClient
    feed: FeedController
    close_resources: Callable[[], Awaitable[None]]


def build_client_container(settings: ClientSettings | None = None) -> ClientContainer:
    """Create the default client container."""
    resolved_settings = settings or ClientSettings()
    auth_client = HttpxAuthClient.connect(
        resolved_settings.base_url, timeout=resolved_settings.request_timeout
    )
    session = SessionManager(
        auth_client=auth_client,
        credential_store=FileCredentialStore(resolved_settings.credentials_path),
    )
    explore_client = HttpxExploreClient.connect(
        resolved_settings.base_url,
        session=session,
        timeout=resolved_settings.request_timeout,
    )
    feed = FeedController(explore_client=explore_client, session=session)

    async def close_resources() -> None:
        await auth_client.close()
        await explore_client.close()

    return ClientContainer(
        settings=resolved_settings,
        session=session,
        explore_client=explore_client,
        feed=feed,
        close_resources=close_resources,
    )
