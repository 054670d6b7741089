"""
Basic logging configuration for the application.

``setup_logging`` configures the root logger with a console handler and
an optional file handler.  ``log_requests`` is an HTTP middleware that
writes one access line per request: method, path, status and latency.
"""

import logging
import time
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from fastapi import Request, Response


access_logger = logging.getLogger("beetrail_api.access")

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn's own access log duplicates ``log_requests``.
QUIET_LOGGERS = ("uvicorn.access",)


def _handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the service.

    The level is always applied; handlers are installed only when the
    root logger has none yet, so repeated ``create_app`` calls in tests
    do not stack them.  An unknown level name falls back to ``INFO``.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, handlers=_handlers(logfile))
    root.setLevel(numeric_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    access_logger.info(
        "%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms
    )
    return response
