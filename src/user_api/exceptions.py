"""Domain level exceptions and helpers for repository layers."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, TypeVar

from sqlalchemy import exc as sa_exc

__all__ = [
    "AppError",
    "ValidationFailedError",
    "InvalidIdentifierError",
    "NotFoundError",
    "StoreRejectedError",
    "StoreUnavailableError",
    "InternalFaultError",
    "ensure_found",
    "handle_sqlalchemy_errors",
]

T = TypeVar("T")


class AppError(Exception):
    """Base class for application specific errors.

    Every subclass carries a stable ``code`` that the HTTP layer maps to a
    status code and generic message.
    """

    code = "internal_fault"


class ValidationFailedError(AppError):
    """Raised when request input does not satisfy the record constraints."""

    code = "validation_error"


class InvalidIdentifierError(ValidationFailedError):
    """Raised when a record identifier is not a 24 character hex string."""

    code = "invalid_identifier"


class NotFoundError(AppError):
    """Raised when a record could not be located."""

    code = "not_found"


class StoreRejectedError(AppError):
    """Raised when the store refuses a write (constraint violation)."""

    code = "store_rejected"


class StoreUnavailableError(AppError):
    """Raised for store failures unrelated to the submitted data."""

    code = "store_unavailable"


class InternalFaultError(AppError):
    """Raised for unexpected failures inside the service."""

    code = "internal_fault"


@dataclass(slots=True)
class _EntityContext:
    """Internal helper describing the entity for error messages."""

    entity: str | None = None

    def format(self, message: str) -> str:
        if self.entity:
            return f"{self.entity}: {message}"
        return message


def ensure_found(record: T | None, *, entity: str, identifier: str) -> T:
    """Ensure a record exists, otherwise raise :class:`NotFoundError`."""

    if record is None:
        raise NotFoundError(f"{entity} '{identifier}' not found")
    return record


def _translate_sqlalchemy_error(exc: Exception, *, context: _EntityContext) -> AppError:
    if isinstance(exc, sa_exc.IntegrityError):
        return StoreRejectedError(context.format("integrity constraint violated"))
    if isinstance(exc, sa_exc.DBAPIError):
        return StoreUnavailableError(context.format("database operation failed"))
    return InternalFaultError(context.format(str(exc)))


@contextmanager
def handle_sqlalchemy_errors(*, entity: str | None = None) -> Iterator[None]:
    """Translate SQLAlchemy errors into domain specific ones."""

    context = _EntityContext(entity)
    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        raise _translate_sqlalchemy_error(exc, context=context) from exc
