from __future__ import annotations

import pytest
from sqlalchemy import exc as sa_exc

from user_api.api.errors import to_api_error
from user_api.exceptions import (
    AppError,
    InternalFaultError,
    InvalidIdentifierError,
    NotFoundError,
    StoreRejectedError,
    StoreUnavailableError,
    ValidationFailedError,
    ensure_found,
    handle_sqlalchemy_errors,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "status_code", "message"),
    [
        (ValidationFailedError(), 400, "Bad Request"),
        (InvalidIdentifierError(), 400, "Bad Request"),
        (StoreRejectedError(), 400, "Bad Request"),
        (NotFoundError(), 404, "Not Found"),
        (StoreUnavailableError(), 500, "Internal Server Error"),
        (InternalFaultError(), 500, "Internal Server Error"),
        (AppError(), 500, "Internal Server Error"),
    ],
)
def test_error_kinds_map_to_fixed_statuses(error: AppError, status_code: int, message: str) -> None:
    api_error = to_api_error(error)
    response = api_error.to_response()

    assert api_error.status_code == status_code
    assert response.status_code == status_code
    assert response.body == f'{{"error":"{message}"}}'.encode()
    assert response.headers["x-error-code"] == error.code


@pytest.mark.unit
def test_ensure_found_passes_record_through() -> None:
    record = object()

    assert ensure_found(record, entity="user", identifier="abc") is record


@pytest.mark.unit
def test_ensure_found_raises_not_found() -> None:
    with pytest.raises(NotFoundError, match="user 'abc' not found"):
        ensure_found(None, entity="user", identifier="abc")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raised", "expected"),
    [
        (sa_exc.IntegrityError("INSERT", {}, Exception("unique")), StoreRejectedError),
        (sa_exc.OperationalError("SELECT", {}, Exception("locked")), StoreUnavailableError),
        (sa_exc.InvalidRequestError("bad state"), InternalFaultError),
    ],
)
def test_handle_sqlalchemy_errors_translates(raised: Exception, expected: type) -> None:
    with pytest.raises(expected) as info:
        with handle_sqlalchemy_errors(entity="user"):
            raise raised

    assert info.value.__cause__ is raised
    assert str(info.value).startswith("user: ")


@pytest.mark.unit
def test_handle_sqlalchemy_errors_leaves_other_exceptions() -> None:
    with pytest.raises(KeyError):
        with handle_sqlalchemy_errors(entity="user"):
            raise KeyError("x")
