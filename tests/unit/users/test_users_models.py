from __future__ import annotations

import pytest

from user_api.exceptions import InvalidIdentifierError, ValidationFailedError
from user_api.users.users_models import (
    _ObjectIdGenerator,
    is_valid_object_id,
    new_object_id,
    parse_object_id,
)


@pytest.mark.unit
def test_new_object_id_is_24_hex_chars() -> None:
    value = new_object_id()

    assert len(value) == 24
    assert is_valid_object_id(value)


@pytest.mark.unit
def test_new_object_ids_are_unique() -> None:
    values = [new_object_id() for _ in range(500)]

    assert len(set(values)) == len(values)


@pytest.mark.unit
def test_generator_ids_sort_in_creation_order() -> None:
    generator = _ObjectIdGenerator()
    generator._counter = 0

    values = [generator.next_id() for _ in range(50)]

    assert values == sorted(values)


@pytest.mark.unit
def test_generator_counter_wraps_at_three_bytes() -> None:
    generator = _ObjectIdGenerator()
    generator._counter = 0xFFFFFE

    assert generator.next_id().endswith("ffffff")
    assert generator.next_id().endswith("000000")


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    ["", "123", "zzzzzzzzzzzzzzzzzzzzzzzz", "671223a0c3b5e1f2a4d6e0011", "not-an-id"],
)
def test_parse_object_id_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(InvalidIdentifierError):
        parse_object_id(raw)


@pytest.mark.unit
def test_parse_object_id_normalises_case() -> None:
    assert parse_object_id("671223A0C3B5E1F2A4D6E001") == "671223a0c3b5e1f2a4d6e001"


@pytest.mark.unit
def test_invalid_identifier_is_a_validation_failure() -> None:
    assert issubclass(InvalidIdentifierError, ValidationFailedError)
    assert InvalidIdentifierError.code == "invalid_identifier"


@pytest.mark.unit
def test_generator_counter_starts_in_lower_half() -> None:
    starts = [_ObjectIdGenerator()._counter for _ in range(200)]

    assert all(0 <= start <= 0x7FFFFF for start in starts)
