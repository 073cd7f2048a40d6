"""Pydantic schemas for the users API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .users_models import User

NAME_MAX_LENGTH = 100
AGE_MAX = 150


class _UserInput(BaseModel):
    # unknown keys are dropped
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class UserCreateRequest(_UserInput):
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    # email-validator caps addresses at 254 characters
    email: EmailStr
    age: int = Field(..., ge=0, le=AGE_MAX)


class UserUpdateRequest(_UserInput):
    name: str | None = Field(default=None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: EmailStr | None = None
    age: int | None = Field(default=None, ge=0, le=AGE_MAX)

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually sent with a value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", examples=["671223a0c3b5e1f2a4d6e001"])
    name: str | None = None
    email: str | None = None
    age: int | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email, age=user.age)


class ErrorResponse(BaseModel):
    error: str
