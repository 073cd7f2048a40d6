"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .db.db_init import init_db

DEFAULT_DATABASE_URL = "sqlite:///users.db"
DEFAULT_PORT = 5000
DOCS_PATH = "/api-docs"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class AppConfig:
    database_url: str
    engine: Engine
    session_factory: sessionmaker[Session]
    host: str
    port: int
    public_url: str
    legacy_not_found: bool = False
    docs_url: str = DOCS_PATH


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def create_store(database_url: str) -> tuple[Engine, sessionmaker[Session]]:
    """Build the shared engine and session factory for ``database_url``."""
    url = make_url(database_url)
    engine_kwargs: dict[str, Any] = {"future": True}
    if url.get_backend_name() == "sqlite":
        # handlers run in the threadpool, so connections cross threads
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            engine_kwargs["poolclass"] = StaticPool
    engine = create_engine(database_url, **engine_kwargs)
    session_factory: sessionmaker[Session] = sessionmaker(bind=engine, expire_on_commit=False)
    return engine, session_factory


def build_config(
    database_url: str,
    *,
    host: str = "0.0.0.0",
    port: int = DEFAULT_PORT,
    public_url: str | None = None,
    legacy_not_found: bool = False,
) -> AppConfig:
    """Connect to the store, create the schema and return the config."""
    engine, session_factory = create_store(database_url)
    init_db(engine)
    return AppConfig(
        database_url=database_url,
        engine=engine,
        session_factory=session_factory,
        host=host,
        port=port,
        public_url=public_url or f"http://localhost:{port}",
        legacy_not_found=legacy_not_found,
    )


def load_config() -> AppConfig:
    """Load configuration from environment (SQLite by default)."""
    load_dotenv(".env", override=False)

    database_url = (
        os.getenv("DATABASE_URL") or os.getenv("MONGO_URI") or DEFAULT_DATABASE_URL
    )
    port = int(os.getenv("PORT", DEFAULT_PORT))
    return build_config(
        database_url,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        public_url=os.getenv("PUBLIC_URL") or None,
        legacy_not_found=_env_flag("LEGACY_NOT_FOUND"),
    )
