# app/core/errors.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """
    Base for errors reported to the caller as-is.
    Services raise these; the API layer never builds status codes itself.
    """

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInput(DomainError, ValueError):
    status_code = 400
    default_detail = "Invalid input."


class InvalidState(DomainError, ValueError):
    status_code = 400
    default_detail = "Operation not allowed in the current state."


class Forbidden(DomainError, PermissionError):
    status_code = 403
    default_detail = "Not permitted."


class NotFound(DomainError, LookupError):
    status_code = 404
    default_detail = "Not found."


class Conflict(DomainError):
    status_code = 409
    default_detail = "Conflict."


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Body/query validation is a caller error, reported as 400 like every other InvalidInput
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": jsonable_encoder(exc.errors())},
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    rid = _request_id(request)
    logger.exception(
        "unhandled error",
        extra={"path": request.url.path, "method": request.method, "request_id": rid},
    )

    settings = get_settings()
    detail = str(exc) if settings.is_development else "Internal server error"
    # runs outside RequestIdMiddleware, so the header has to be set here
    headers = {settings.request_id_header: rid} if rid else None
    return JSONResponse(
        status_code=500,
        content={"detail": detail, "request_id": rid},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
