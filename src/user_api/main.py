"""FastAPI application entry point."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from . import __version__
from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging

logger = structlog.get_logger(__name__)


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build FastAPI instance with configured dependencies."""
    configure_logging()
    cfg = config or load_config()

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        logger.info("store connected", backend=cfg.engine.url.get_backend_name())
        logger.info(f"Server is running on {cfg.public_url}")
        logger.info(f"API docs available at {cfg.public_url}{cfg.docs_url}")
        try:
            yield
        finally:
            cfg.engine.dispose()

    app = FastAPI(
        title="Users API",
        version=__version__,
        description="A simple CRUD API with OpenAPI documentation",
        servers=[{"url": cfg.public_url}],
        docs_url=cfg.docs_url,
        redoc_url=None,
        lifespan=lifespan,
    )
    include_routers(app, cfg)
    return app


def run() -> None:
    """Serve the application with uvicorn on the configured address."""
    configure_logging()
    config = load_config()
    uvicorn.run(create_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    run()
