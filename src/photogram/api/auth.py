"""Bearer token guard for authenticated routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from photogram.domain.models import UserRecord  # noqa: TC001
from photogram.errors import UnauthorizedError

if TYPE_CHECKING:
    from photogram.containers import AppContainer

bearer_scheme = HTTPBearer(auto_error=False)


async def require_user(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UserRecord:
    """Resolve ``Authorization: Bearer <token>`` to the calling user.

    A missing or malformed header raises ``UnauthorizedError``; a token that
    fails verification or names an unknown user raises ``ForbiddenError``.
    """
    if creds is None or not creds.credentials.strip():
        raise UnauthorizedError("Not authorized, no token")
    container: AppContainer = request.app.state.container
    return container.user_service.resolve_token(creds.credentials.strip())
