from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")


from collections.abc import Callable, Iterator
from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from user_api.config import build_config, create_store
from user_api.db.db_init import init_db
from user_api.main import create_app


@pytest.fixture
def session_factory() -> Iterator[sessionmaker[Session]]:
    engine, factory = create_store("sqlite:///:memory:")
    init_db(engine)
    yield factory
    engine.dispose()


@pytest.fixture
def make_client(tmp_path) -> Iterator[Callable[..., TestClient]]:
    """Build the full application over a throwaway SQLite file."""
    with ExitStack() as stack:
        counter = iter(range(1_000))

        def _build(*, legacy_not_found: bool = False) -> TestClient:
            config = build_config(
                f"sqlite:///{tmp_path / f'users-{next(counter)}.db'}",
                port=5000,
                legacy_not_found=legacy_not_found,
            )
            return stack.enter_context(TestClient(create_app(config)))

        yield _build
