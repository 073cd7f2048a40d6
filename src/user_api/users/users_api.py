"""User CRUD routes."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError

from ..config import AppConfig
from ..exceptions import ValidationFailedError, ensure_found
from .users_repository import UserRepository
from .users_schemas import (
    ErrorResponse,
    UserCreateRequest,
    UserResponse,
    UserUpdateRequest,
)

USER_DELETED_MESSAGE = "User deleted"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

PayloadT = TypeVar("PayloadT", bound=BaseModel)

router = APIRouter(prefix="/users", tags=["users"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Bad Request"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "User not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorResponse,
        "description": "Internal Server Error",
    },
}


def get_user_repo(request: Request) -> UserRepository:
    try:
        return request.app.state.user_repo  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("UserRepository is not configured") from exc


def get_config(request: Request) -> AppConfig:
    try:
        return request.app.state.config  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("AppConfig is not configured") from exc


async def _read_body(request: Request) -> Any:
    """Return the decoded JSON or form-encoded request body."""
    content_type = request.headers.get("content-type", "")
    if content_type.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE:
        form = await request.form()
        return dict(form)
    raw = await request.body()
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ValidationFailedError("request body is not valid JSON") from exc


def _payload(model: type[PayloadT]) -> Callable[[Request], Awaitable[PayloadT]]:
    async def dependency(request: Request) -> PayloadT:
        body = await _read_body(request)
        try:
            return model.model_validate(body)
        except ValidationError as exc:
            raise ValidationFailedError(
                f"invalid {model.__name__}: {exc.error_count()} error(s)"
            ) from exc

    return dependency


def _request_body_doc(model: type[BaseModel]) -> dict[str, Any]:
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                FORM_CONTENT_TYPE: {"schema": schema},
            },
        }
    }


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    description="Adds a new user to the database.",
    responses={
        status.HTTP_400_BAD_REQUEST: _ERROR_RESPONSES[status.HTTP_400_BAD_REQUEST],
        status.HTTP_500_INTERNAL_SERVER_ERROR: _ERROR_RESPONSES[
            status.HTTP_500_INTERNAL_SERVER_ERROR
        ],
    },
    openapi_extra=_request_body_doc(UserCreateRequest),
)
def create_user(
    payload: UserCreateRequest = Depends(_payload(UserCreateRequest)),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserResponse:
    user = user_repo.insert_one(payload.model_dump())
    return UserResponse.from_domain(user)


@router.get(
    "",
    summary="Get all users",
    description="Fetch all users from the database.",
    responses={
        status.HTTP_500_INTERNAL_SERVER_ERROR: _ERROR_RESPONSES[
            status.HTTP_500_INTERNAL_SERVER_ERROR
        ]
    },
)
def list_users(
    user_repo: UserRepository = Depends(get_user_repo),
) -> list[UserResponse]:
    return [UserResponse.from_domain(user) for user in user_repo.find_all()]


@router.put(
    "/{user_id}",
    summary="Update user details",
    description=(
        "Updates an existing user's details by their ID. Only the fields present "
        "in the body are changed."
    ),
    responses=_ERROR_RESPONSES,
    openapi_extra=_request_body_doc(UserUpdateRequest),
)
def update_user(
    user_id: str,
    payload: UserUpdateRequest = Depends(_payload(UserUpdateRequest)),
    user_repo: UserRepository = Depends(get_user_repo),
    config: AppConfig = Depends(get_config),
) -> UserResponse | None:
    updated = user_repo.find_by_id_and_update(user_id, payload.changes())
    if updated is None and config.legacy_not_found:
        return None
    user = ensure_found(updated, entity="user", identifier=user_id)
    return UserResponse.from_domain(user)


@router.delete(
    "/{user_id}",
    response_class=PlainTextResponse,
    summary="Delete a user",
    description="Deletes a user by their ID.",
    responses={
        status.HTTP_200_OK: {"description": "User deleted successfully"},
        **_ERROR_RESPONSES,
    },
)
def delete_user(
    user_id: str,
    user_repo: UserRepository = Depends(get_user_repo),
    config: AppConfig = Depends(get_config),
) -> PlainTextResponse:
    removed = user_repo.find_by_id_and_delete(user_id)
    if not config.legacy_not_found:
        ensure_found(removed, entity="user", identifier=user_id)
    return PlainTextResponse(USER_DELETED_MESSAGE)
