"""Logging setup and the per-request access log middleware."""
from __future__ import annotations

import logging
import sys
import time

from starlette.middleware.base import BaseHTTPMiddleware

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("api.access")


def configure_logging(settings: Settings) -> None:
    """Install a single stream handler on the root logger at the configured level."""
    root = logging.getLogger()
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    root.setLevel(level)
    for handler in list(root.handlers):
        if getattr(handler, "_employees_api", False):
            root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._employees_api = True  # type: ignore[attr-defined]
    root.addHandler(handler)


def _target(request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return path


def format_tiny(request, response, elapsed_ms: float) -> str:
    length = response.headers.get("content-length", "-")
    return f"{request.method} {_target(request)} {response.status_code} {length} - {elapsed_ms:.3f} ms"


def format_short(request, response, elapsed_ms: float) -> str:
    client = request.client.host if request.client and request.client.host else "-"
    version = request.scope.get("http_version", "1.1")
    length = response.headers.get("content-length", "-")
    return (
        f"{client} - {request.method} {_target(request)} HTTP/{version} "
        f"{response.status_code} {length} - {elapsed_ms:.3f} ms"
    )


FORMATTERS = {
    "tiny": format_tiny,
    "short": format_short,
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per response whose status code reaches the threshold."""

    def __init__(self, app, *, log_format: str = "tiny", threshold: int = 400) -> None:
        super().__init__(app)
        self._format = FORMATTERS.get(log_format, format_tiny)
        self._threshold = threshold

    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        if response.status_code >= self._threshold:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(self._format(request, response, elapsed_ms))
        return response
