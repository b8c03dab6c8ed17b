"""Pydantic schemas for the User resource."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def check_email(value: str, message: str) -> str:
    try:
        return validate_email(value)[1]
    except PydanticCustomError:
        raise ValueError(message)


class UserRead(CamelModel):
    """Public projection of a user. Never carries the password hash."""

    id: int
    full_name: str
    email: str
    phone: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserCreate(CamelModel):
    """Body of ``POST /api/users``."""

    full_name: str
    email: str
    password: str
    phone: str

    @field_validator("full_name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if len(v) < 1:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return check_email(v, "Invalid email format")

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("phone")
    @classmethod
    def phone_required(cls, v: str) -> str:
        if len(v) < 1:
            raise ValueError("Phone number is required")
        return v


def serialize_user(user) -> dict:
    return UserRead.model_validate(user).model_dump(mode="json", by_alias=True)
