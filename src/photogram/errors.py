"""Error taxonomy shared by the API server and the client."""

from __future__ import annotations


class PhotogramError(Exception):
    """Base error carrying a user-facing message and a wire kind."""

    kind = "server"
    status_code: int | None = 500

    def __init__(self, message: str | None = None, *, server_message: bool = False):
        self.message = message
        self.server_message = server_message
        super().__init__(message or self.kind)


class ValidationError(PhotogramError):
    """A required field is missing or empty, or a value is not acceptable."""

    kind = "validation"
    status_code = 400


class AuthError(PhotogramError):
    """Credentials were rejected."""

    kind = "auth"
    status_code = 401


class UnauthorizedError(PhotogramError):
    """A call that needs a bearer token was made without a usable one."""

    kind = "unauthorized"
    status_code = 401


class ForbiddenError(PhotogramError):
    """The token is valid but does not grant the requested action."""

    kind = "forbidden"
    # Sent as 401 on the wire, distinguished by its kind.
    status_code = 401


class NotFoundError(PhotogramError):
    """The addressed resource does not exist."""

    kind = "not_found"
    status_code = 404


class TransportError(PhotogramError):
    """The server could not be reached or did not answer in time."""

    kind = "transport"
    status_code = None


class ServerError(PhotogramError):
    """Unexpected server-side failure."""

    kind = "server"
    status_code = 500


ERROR_KINDS: dict[str, type[PhotogramError]] = {
    cls.kind: cls
    for cls in (
        ValidationError,
        AuthError,
        UnauthorizedError,
        ForbiddenError,
        NotFoundError,
        ServerError,
    )
}

_STATUS_FALLBACK: dict[int, type[PhotogramError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}


def error_for_response(
    status_code: int, kind: str | None, message: str | None
) -> PhotogramError:
    """Build the error matching a failed HTTP response."""
    error_cls = ERROR_KINDS.get(kind or "") or _STATUS_FALLBACK.get(
        status_code, ServerError
    )
    return error_cls(message, server_message=bool(message))
