"""User repository backed by SQLAlchemy."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.db_models import UserModel
from ..exceptions import handle_sqlalchemy_errors
from .users_models import User, new_object_id, parse_object_id

WRITABLE_FIELDS = ("name", "email", "age")


class UserRepository:
    """Wrap the four store primitives used by the users router.

    Each call opens its own session, so the repository holds no record
    state between requests. Lookups by id return ``None`` when nothing
    matches; deciding whether that is an error belongs to the caller.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def insert_one(self, fields: Mapping[str, Any]) -> User:
        row = UserModel(id=new_object_id(), **_writable(fields))
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                session.add(row)
                session.commit()
                return self._to_domain(row)

    def find_all(self) -> Sequence[User]:
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                rows = session.scalars(select(UserModel).order_by(UserModel.id)).all()
                return [self._to_domain(row) for row in rows]

    def find_by_id_and_update(
        self, user_id: str, fields: Mapping[str, Any]
    ) -> User | None:
        """Merge ``fields`` into the record and return it after the update."""
        key = parse_object_id(user_id)
        changes = _writable(fields)
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                row = session.get(UserModel, key)
                if row is None:
                    return None
                for name, value in changes.items():
                    setattr(row, name, value)
                session.commit()
                session.refresh(row)
                return self._to_domain(row)

    def find_by_id_and_delete(self, user_id: str) -> User | None:
        """Remove the record and return what was deleted."""
        key = parse_object_id(user_id)
        with handle_sqlalchemy_errors(entity="user"):
            with self._session_factory() as session:
                row = session.get(UserModel, key)
                if row is None:
                    return None
                removed = self._to_domain(row)
                session.delete(row)
                session.commit()
                return removed

    @staticmethod
    def _to_domain(row: UserModel) -> User:
        return User(id=row.id, name=row.name, email=row.email, age=row.age)


def _writable(fields: Mapping[str, Any]) -> dict[str, Any]:
    # the identifier is assigned once and never taken from input
    return {name: fields[name] for name in WRITABLE_FIELDS if name in fields}
