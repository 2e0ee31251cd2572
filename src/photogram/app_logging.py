"""Logging configuration helpers."""

import logging

# Context keys passed through ``extra=`` by the services, routes and client.
CONTEXT_FIELDS = ("action", "kind", "user_id", "photo_id", "method", "path")


class ContextFormatter(logging.Formatter):
    """Formatter that appends known ``extra`` context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        )
        return f"{message} [{context}]" if context else message


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("photogram")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
