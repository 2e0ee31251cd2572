"""Request and response schemas for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from photogram.domain.models import FeedPhoto, Photo, PublicUser


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class PhotoCreateRequest(BaseModel):
    """Body of ``POST /api/explore``. Unknown fields such as ``owner`` are dropped."""

    model_config = ConfigDict(extra="ignore")

    photo: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class PhotoUpdateRequest(BaseModel):
    """Body of ``PUT /api/explore/{id}``; only the mutable fields."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)


class UserResponse(BaseModel):
    id: UUID
    username: str
    email: str

    @classmethod
    def from_domain(cls, user: PublicUser) -> "UserResponse":
        return cls(id=user.id, username=user.username, email=user.email)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class PhotoResponse(BaseModel):
    id: UUID
    photo: str
    name: str
    description: str
    owner: UUID
    owner_username: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, photo: Photo | FeedPhoto) -> "PhotoResponse":
        return cls(
            id=photo.id,
            photo=photo.photo,
            name=photo.name,
            description=photo.description,
            owner=photo.owner,
            owner_username=getattr(photo, "owner_username", None),
            created_at=photo.created_at,
            updated_at=photo.updated_at,
        )


class MessageResponse(BaseModel):
    message: str
