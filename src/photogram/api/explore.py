"""Photo feed endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request, status

from photogram.api.auth import require_user
from photogram.api.schemas import (
    MessageResponse,
    PhotoCreateRequest,
    PhotoResponse,
    PhotoUpdateRequest,
)
from photogram.domain.models import UserRecord  # noqa: TC001

if TYPE_CHECKING:
    from photogram.containers import AppContainer

router = APIRouter(prefix="/api/explore", tags=["explore"])


@router.get("")
async def list_photos(request: Request) -> list[PhotoResponse]:
    """Return the feed, newest first. Public."""
    container: AppContainer = request.app.state.container
    return [
        PhotoResponse.from_domain(entry)
        for entry in container.photo_service.list_feed()
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_photo(
    body: PhotoCreateRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> PhotoResponse:
    """Create a photo owned by the caller."""
    container: AppContainer = request.app.state.container
    created = container.photo_service.create_photo(
        owner=user,
        photo=body.photo,
        name=body.name,
        description=body.description,
    )
    return PhotoResponse.from_domain(created)


@router.put("/{photo_id}")
async def update_photo(
    photo_id: str,
    body: PhotoUpdateRequest,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> PhotoResponse:
    """Update the name and/or description of the caller's photo."""
    container: AppContainer = request.app.state.container
    updated = container.photo_service.update_photo(
        user, photo_id, name=body.name, description=body.description
    )
    return PhotoResponse.from_domain(updated)


@router.delete("/{photo_id}")
async def delete_photo(
    photo_id: str,
    request: Request,
    user: UserRecord = Depends(require_user),
) -> MessageResponse:
    """Delete the caller's photo."""
    container: AppContainer = request.app.state.container
    message = container.photo_service.delete_photo(user, photo_id)
    return MessageResponse(message=message)
