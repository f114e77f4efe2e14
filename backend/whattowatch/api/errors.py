"""
HTTP error taxonomy and the top-level error boundary.

Every error that leaves the API is rendered as
``{"status": int, "message": str, "origin": str}``; validation errors add
``details`` with one entry per offending field.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class HttpError(Exception):
    """Base exception for errors returned to API clients."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None, origin: str = ""):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.origin = origin

    def to_body(self) -> Dict[str, Any]:
        return {
            "status": self.status_code,
            "message": self.message,
            "origin": self.origin,
        }


class ValidationError(HttpError):
    """Malformed or missing input fields (400)."""

    status_code = 400

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None, origin: str = ""):
        super().__init__(message, origin=origin)
        self.details = details or []

    def to_body(self) -> Dict[str, Any]:
        body = super().to_body()
        body["details"] = self.details
        return body


class UnauthorizedError(HttpError):
    """Missing or invalid authentication (401)."""

    status_code = 401


class NotFoundError(HttpError):
    """Referenced entity absent (404, or 422 on creation routes)."""

    status_code = 404


class ConflictError(HttpError):
    """Ownership mismatch or duplicate entity (409)."""

    status_code = 409


class UpstreamError(HttpError):
    """Persistence collaborator failure (503)."""

    status_code = 503


def install_error_handlers(app: FastAPI) -> None:
    """Register the error boundary on ``app``."""

    @app.exception_handler(HttpError)
    async def handle_http_error(request: Request, exc: HttpError) -> JSONResponse:
        logger.warning(
            f"[{exc.origin or 'app'}] {request.method} {request.url.path} -> "
            f"{exc.status_code}: {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def handle_starlette_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        # Unknown path and unknown method on a known path both mean "no such route"
        if exc.status_code in (404, 405):
            error = NotFoundError(
                f"Route {request.method} {request.url.path} not found",
                origin="Router",
            )
        else:
            error = HttpError(str(exc.detail), status_code=exc.status_code, origin="Router")
        return JSONResponse(status_code=error.status_code, content=error.to_body(), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError(
            "Request validation failed",
            details=format_violations(exc.errors()),
            origin="Router",
        )
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(PyMongoError)
    async def handle_database_error(request: Request, exc: PyMongoError) -> JSONResponse:
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        error = UpstreamError("Database is unavailable", origin="Database")
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = HttpError("Internal server error", origin="App")
        return JSONResponse(status_code=error.status_code, content=error.to_body())


def format_violations(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` entries."""
    violations = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        violations.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return violations
