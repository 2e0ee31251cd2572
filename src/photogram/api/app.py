"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from photogram.api.explore import router as explore_router
from photogram.api.users import router as users_router
from photogram.app_logging import configure_logging
from photogram.containers import AppContainer
from photogram.errors import PhotogramError, ServerError, ValidationError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)
    app.include_router(explore_router)

    @app.middleware("http")
    async def catch_unexpected(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error",
                extra={"method": request.method, "path": request.url.path},
            )
            return _error_response(ServerError("Server Error"))

    @app.exception_handler(PhotogramError)
    async def handle_photogram_error(
        request: Request, exc: PhotogramError
    ) -> JSONResponse:
        if isinstance(exc, ServerError):
            logger.error(
                "Server error",
                extra={"method": request.method, "path": request.url.path},
            )
            return _error_response(ServerError("Server Error"))
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(ValidationError(_validation_message(exc)))

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(exc: PhotogramError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code or 500,
        content={"message": exc.message or "Server Error", "error": exc.kind},
    )


def _validation_message(exc: RequestValidationError) -> str:
    """Collapse pydantic errors into the single message clients show."""
    for error in exc.errors():
        if error.get("type") in {"missing", "string_too_short"}:
            return "Please provide all fields"
    return "Invalid request body"
