"""Dependency wiring helpers."""

from fastapi import FastAPI

from .api.errors import register_error_handlers
from .config import AppConfig
from .users.users_api import router as users_router
from .users.users_repository import UserRepository


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    user_repo = UserRepository(config.session_factory)

    app.state.config = config
    app.state.user_repo = user_repo

    register_error_handlers(app)
    app.include_router(users_router)
