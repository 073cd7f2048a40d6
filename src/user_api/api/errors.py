"""Reusable error primitives for API exception handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import AppError, InternalFaultError

logger = structlog.get_logger(__name__)

ERROR_CODE_HEADER = "X-Error-Code"


@dataclass(slots=True)
class ApiError(Exception):
    """Structured application-level error for HTTP handlers."""

    status_code: int
    code: str
    message: str
    headers: Mapping[str, str] | None = None

    def to_response(self) -> JSONResponse:
        """Materialise the error into a ``JSONResponse`` instance."""

        headers = {ERROR_CODE_HEADER: self.code, **dict(self.headers or {})}
        return JSONResponse(
            status_code=self.status_code,
            content={"error": self.message},
            headers=headers,
        )


_STATUS_BY_CODE: dict[str, int] = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "invalid_identifier": status.HTTP_400_BAD_REQUEST,
    "store_rejected": status.HTTP_400_BAD_REQUEST,
    "not_found": status.HTTP_404_NOT_FOUND,
    "store_unavailable": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "internal_fault": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_MESSAGE_BY_STATUS: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_404_NOT_FOUND: "Not Found",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Server Error",
}


def to_api_error(exc: AppError) -> ApiError:
    """Map a domain error onto its HTTP status and generic message."""

    status_code = _STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return ApiError(status_code, exc.code, _MESSAGE_BY_STATUS[status_code])


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert domain errors raised by handlers and repositories."""

    error = to_api_error(exc)
    logger.warning(
        "request failed",
        method=request.method,
        path=request.url.path,
        code=error.code,
        status_code=error.status_code,
        reason=str(exc),
    )
    return error.to_response()


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed bodies as a validation error instead of FastAPI's 422."""

    error = ApiError(status.HTTP_400_BAD_REQUEST, "validation_error", "Bad Request")
    logger.warning(
        "request validation failed",
        method=request.method,
        path=request.url.path,
        errors=len(exc.errors()),
    )
    return error.to_response()


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled error",
        method=request.method,
        path=request.url.path,
        exc_info=exc,
    )
    return to_api_error(InternalFaultError(str(exc))).to_response()


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error mapping to ``app``."""

    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_handler  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = [
    "ApiError",
    "ERROR_CODE_HEADER",
    "app_error_handler",
    "register_error_handlers",
    "request_validation_handler",
    "to_api_error",
    "unhandled_error_handler",
]
