"""
Domain errors and global exception handlers.

The store and the guards raise the ``AppError`` subclasses below; the
handlers registered here turn them into JSON responses so no stack trace
ever leaks to clients.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


# ── Domain errors ───────────────────────────────────────────────────
class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AppError):
    status_code = 400
    default_detail = "Invalid input"


class InvalidOrExpiredToken(ValidationError):
    default_detail = "Invalid or expired token"


class Unauthenticated(AppError):
    status_code = 401
    default_detail = "Authentication required"


class InvalidCredentials(Unauthenticated):
    default_detail = "Invalid credentials"


class Forbidden(AppError):
    status_code = 403
    default_detail = "Admin access required"


class AccountDisabled(Forbidden):
    default_detail = "Account is deactivated"


class NotFoundError(AppError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_detail = "Already exists"


class InternalFailure(AppError):
    pass


# ── Handlers ────────────────────────────────────────────────────────
def _error_body(detail: object) -> dict:
    # ``message`` is what the web client reads; ``detail`` mirrors FastAPI.
    return {"detail": detail, "message": detail, "success": False}


async def _app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Internal failure: %s", exc.detail)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={**_error_body("Invalid input"), "errors": errors},
    )


async def _rate_limit_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning("Rate limit exceeded: %s", exc.detail)
    return JSONResponse(
        status_code=429,
        content=_error_body("Too many requests, try again later"),
    )


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(status_code=500, content=_error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
