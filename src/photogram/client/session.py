"""Client session state machine.

The manager owns the current token, user and auth error. Every change goes
through one of its transitions:

    restore_session  UNAUTHENTICATED -> AUTHENTICATED (token persisted earlier)
    signin / signup  UNAUTHENTICATED|AUTH_ERROR -> AUTHENTICATING
                     -> AUTHENTICATED | AUTH_ERROR
    signout          any -> UNAUTHENTICATED
    clear_error      AUTH_ERROR -> UNAUTHENTICATED

Listeners registered with ``subscribe`` receive an immutable ``Session``
snapshot after each transition.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import UUID

from jose import JWTError, jwt

from photogram.client.auth_client import AuthClient, AuthResult
from photogram.client.credentials import TOKEN_KEY, CredentialStore
from photogram.domain.models import PublicUser
from photogram.errors import (
    ForbiddenError,
    PhotogramError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

TRANSPORT_ERROR_MESSAGE = "Unable to reach the server"
FALLBACK_ERROR_MESSAGE = "Request failed"


class SessionState(StrEnum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    AUTHENTICATING = "AUTHENTICATING"
    AUTHENTICATED = "AUTHENTICATED"
    AUTH_ERROR = "AUTH_ERROR"


class SessionStateError(RuntimeError):
    """Raised when a transition is not allowed from the current state."""


class SessionBusyError(SessionStateError):
    """Raised when a sign-in or sign-up starts while another is pending."""


@dataclass(frozen=True)
class Session:
    """Snapshot of the session at one point in time."""

    state: SessionState = SessionState.UNAUTHENTICATED
    token: str | None = None
    user: PublicUser | None = None
    error_message: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED


Listener = Callable[[Session], None]


@dataclass
class SessionManager:
    """Owns the client session and persists its token."""

    auth_client: AuthClient
    credential_store: CredentialStore
    _session: Session = field(default_factory=Session, init=False)
    _last_error: PhotogramError | None = field(default=None, init=False)
    _in_flight: bool = field(default=False, init=False)
    _listeners: list[Listener] = field(default_factory=list, init=False)

    @property
    def state(self) -> SessionState:
        return self._session.state

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def user(self) -> PublicUser | None:
        return self._session.user

    @property
    def error_message(self) -> str | None:
        return self._session.error_message

    @property
    def last_error(self) -> PhotogramError | None:
        """The exception behind the current ``error_message``, kind intact."""
        return self._last_error

    def snapshot(self) -> Session:
        return self._session

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def restore_session(self, verify: bool = False) -> Session:
        """Rebuild the session from a previously persisted token.

        Without ``verify`` the token is trusted as-is and the user is read
        from its claims. With ``verify`` the server is asked who the token
        belongs to; a rejected token is discarded.
        """
        token = self.credential_store.get(TOKEN_KEY)
        if not token:
            return self._session
        user = _user_from_claims(token)
        if user is None:
            logger.warning("Discarding unreadable stored token")
            self.credential_store.delete(TOKEN_KEY)
            return self._session

        if verify:
            try:
                user = await self.auth_client.me(token)
            except (UnauthorizedError, ForbiddenError):
                logger.info("Stored token rejected by server")
                self.credential_store.delete(TOKEN_KEY)
                return self._session
            except PhotogramError as exc:
                logger.warning(
                    "Could not verify stored token, keeping it",
                    extra={"kind": exc.kind},
                )

        self._last_error = None
        self._set(Session(SessionState.AUTHENTICATED, token=token, user=user))
        return self._session

    async def signin(self, username: str, password: str) -> Session:
        """Log in and persist the token on success."""
        return await self._authenticate(
            "signin", lambda: self.auth_client.login(username, password)
        )

    async def signup(self, username: str, email: str, password: str) -> Session:
        """Register, which also signs the new account in."""
        return await self._authenticate(
            "signup", lambda: self.auth_client.register(username, email, password)
        )

    def signout(self) -> Session:
        """Forget the session in memory and in storage. Safe to repeat."""
        self.credential_store.delete(TOKEN_KEY)
        self._last_error = None
        self._set(Session())
        return self._session

    def clear_error(self) -> Session:
        """Leave the error state; does nothing when there is no error."""
        if self._session.state is SessionState.AUTH_ERROR:
            self._last_error = None
            self._set(Session())
        return self._session

    async def _authenticate(
        self, action: str, call: Callable[[], Awaitable[AuthResult]]
    ) -> Session:
        if self._in_flight:
            raise SessionBusyError(f"Cannot {action} while another attempt is pending")
        if self._session.state is SessionState.AUTHENTICATED:
            raise SessionStateError(f"Cannot {action} while signed in, sign out first")
        self._in_flight = True
        self._set(Session(SessionState.AUTHENTICATING))
        try:
            result = await call()
            self.credential_store.set(TOKEN_KEY, result.token)
        except PhotogramError as exc:
            logger.warning(
                "Authentication failed",
                extra={"action": action, "kind": exc.kind},
            )
            self._last_error = exc
            self._set(
                Session(SessionState.AUTH_ERROR, error_message=_error_message(exc))
            )
            return self._session
        except BaseException:
            self._set(Session())
            raise
        finally:
            self._in_flight = False

        self._last_error = None
        self._set(
            Session(SessionState.AUTHENTICATED, token=result.token, user=result.user)
        )
        return self._session

    def _set(self, session: Session) -> None:
        self._session = session
        for listener in list(self._listeners):
            try:
                listener(session)
            except Exception:
                logger.exception("Session listener failed")


def _error_message(exc: PhotogramError) -> str:
    """Prefer the server's text, else a generic message for the failure kind."""
    if isinstance(exc, TransportError):
        return TRANSPORT_ERROR_MESSAGE
    if exc.message and (exc.server_message or isinstance(exc, ValidationError)):
        return exc.message
    return FALLBACK_ERROR_MESSAGE


def _user_from_claims(token: str) -> PublicUser | None:
    """Read the user out of a token without checking its signature."""
    try:
        claims = jwt.get_unverified_claims(token)
        return PublicUser(
            id=UUID(str(claims["sub"])),
            username=str(claims.get("username", "")),
            email=str(claims.get("email", "")),
        )
    except (JWTError, KeyError, ValueError):
        return None
