"""Password hashing and bearer token handling."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from photogram.domain.models import UserRecord
from photogram.errors import ForbiddenError

JWT_ALG = "HS256"


@dataclass
class PasswordHasher:
    """Hashes and verifies passwords with passlib."""

    context: CryptContext = field(
        default_factory=lambda: CryptContext(
            schemes=["pbkdf2_sha256"], deprecated="auto"
        )
    )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self.context.verify(password, password_hash)
        except ValueError:
            return False


@dataclass
class TokenService:
    """Issues and verifies HS256 access tokens."""

    secret: str
    expire_minutes: int = 120

    def issue(self, user: UserRecord) -> str:
        """Create a signed token whose subject is the user id."""
        now = datetime.now(tz=UTC)
        payload: dict[str, object] = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALG)

    def subject(self, token: str) -> UUID:
        """Return the user id of a valid token."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[JWT_ALG])
        except ExpiredSignatureError as exc:
            raise ForbiddenError("Not authorized, token expired") from exc
        except JWTError as exc:
            raise ForbiddenError("Not authorized, token failed") from exc
        try:
            return UUID(str(payload.get("sub")))
        except ValueError as exc:
            raise ForbiddenError("Not authorized, token failed") from exc
