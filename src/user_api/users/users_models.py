"""User domain dataclass and identifier helpers."""

from __future__ import annotations

import os
import re
import threading
import time
from dataclasses import dataclass
from ..exceptions import InvalidIdentifierError

_OBJECT_ID_RE = re.compile(r"^[0-9a-f]{24}$")
_COUNTER_MAX = 0xFFFFFF
_COUNTER_START_MAX = 0x7FFFFF


class _ObjectIdGenerator:
    """Produce 12-byte ids: seconds timestamp, process nonce, counter.

    The counter starts in the lower half of its range, so it can only wrap
    after more than 2**23 ids. Ids produced by one process therefore sort
    in creation order unless it issues that many within a single second.
    The repository relies on this ordering for listing.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._nonce = os.urandom(5).hex()
        self._counter = int.from_bytes(os.urandom(3), "big") & _COUNTER_START_MAX

    def next_id(self) -> str:
        with self._lock:
            self._counter = (self._counter + 1) & _COUNTER_MAX
            counter = self._counter
        return f"{int(time.time()) & 0xFFFFFFFF:08x}{self._nonce}{counter:06x}"


_generator = _ObjectIdGenerator()


def new_object_id() -> str:
    """Return a fresh 24 character lowercase hex identifier."""
    return _generator.next_id()


def is_valid_object_id(value: str) -> bool:
    return bool(_OBJECT_ID_RE.match(value))


def parse_object_id(value: str) -> str:
    """Normalise ``value`` or raise :class:`InvalidIdentifierError`."""
    candidate = value.strip().lower()
    if not is_valid_object_id(candidate):
        raise InvalidIdentifierError(f"'{value}' is not a valid user id")
    return candidate


@dataclass(slots=True)
class User:
    id: str
    name: str | None = None
    email: str | None = None
    age: int | None = None
