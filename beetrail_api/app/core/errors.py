"""
Error taxonomy and the exception handlers that render it.

Services raise the exceptions defined here; ``register_exception_handlers``
maps them to HTTP responses so endpoint functions never build error
payloads by hand.

Response bodies follow two shapes:

* field validation failures: ``{"errors": [{"field": ..., "message": ...}]}``
* everything else: ``{"error": "<message>"}``
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class BeeTrailError(Exception):
    """Base class for errors that translate into an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def body(self) -> Dict[str, Any]:
        return {"error": self.message}


class ValidationError(BeeTrailError):
    """Malformed or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[List[Dict[str, str]]] = None) -> None:
        super().__init__(message)
        if errors is None:
            errors = [{"field": field or "", "message": message}]
        self.errors = errors

    def body(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class ConflictError(BeeTrailError):
    """A uniqueness constraint was violated."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthError(BeeTrailError):
    """Missing, malformed or expired token, or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(BeeTrailError):
    """Authenticated, but the role does not allow the operation."""

    status_code = status.HTTP_403_FORBIDDEN


class InternalError(BeeTrailError):
    """Unexpected persistence or runtime failure."""

    def __init__(self, message: str = "Server error") -> None:
        super().__init__(message)


def _field_name(loc: tuple) -> str:
    # ("body", "hiveId") -> "hiveId"; ("body", 9) for malformed JSON -> "body"
    parts = [p for p in loc[1:] if isinstance(p, str)]
    return ".".join(parts) or (str(loc[0]) if loc else "body")


async def beetrail_error_handler(request: Request, exc: BeeTrailError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = exc.headers if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback server-side and return a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    ctx = getattr(request.app.state, "ctx", None)
    detail = str(exc) if ctx is not None and ctx.settings.debug else "Server error"
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": detail})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BeeTrailError, beetrail_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
