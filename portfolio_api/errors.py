# portfolio_api/errors.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("errors")


class AppError(Exception):
    """Base for every error the API reports through the JSON envelope."""

    status_code = 500
    label = "Internal server error"

    def __init__(self, message: str = "", *, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers

    def __str__(self) -> str:
        return f"{self.label}: {self.message}" if self.message else self.label


class NotFoundError(AppError):
    status_code = 404
    label = "Not found"


class ValidationError(AppError):
    status_code = 400
    label = "Validation error"

    def __init__(self, message: str = "", *, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        # message already reads "Validation failed: ..."
        return self.message or self.label


class UnauthorizedError(AppError):
    status_code = 401
    label = "Unauthorized"

    def __init__(self, message: str = "Invalid or missing authentication token"):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(AppError):
    status_code = 403
    label = "Forbidden"


class BadRequestError(AppError):
    status_code = 400
    label = "Bad request"


class InternalError(AppError):
    status_code = 500
    label = "Internal server error"


class DatabaseError(InternalError):
    label = "Database error"


def error_body(status_code: int, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "success": False,
        "message": message,
        "error_code": str(status_code),
    }
    body.update(extra)
    return body


def _field_name(loc) -> str:
    # ("body", "name") -> "name"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def validation_errors(raw_errors) -> List[Dict[str, str]]:
    return [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in raw_errors
    ]


def format_validation_message(errors: List[Dict[str, str]]) -> str:
    details = "; ".join(f"{e['message']} for field '{e['field']}'" for e in errors)
    return f"Validation failed: {details}" if details else "Validation failed"


# ------------------------------------------------
# Central responders
# ------------------------------------------------
async def _app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc)
    extra = {}
    if isinstance(exc, ValidationError) and exc.errors:
        extra["errors"] = exc.errors
    return JSONResponse(
        error_body(exc.status_code, str(exc), **extra),
        status_code=exc.status_code,
        headers=exc.headers,
    )


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    errors = validation_errors(exc.errors())
    log.info("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        error_body(400, format_validation_message(errors), errors=errors),
        status_code=400,
    )


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        error_body(exc.status_code, message),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _database_error_handler(request: Request, exc: SQLAlchemyError):
    log.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(error_body(500, "Database error"), status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)
