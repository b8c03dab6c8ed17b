"""Pydantic schemas for Auth: login, registration, profile update and the sign-up form."""

from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator

from hightribe.domain.schemas.user import CamelModel, check_email


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6)


class RegisterRequest(CamelModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    confirm_password: str = Field(min_length=6)
    phone: str = Field(min_length=10)

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info) -> str:
        # password is absent from info.data when it failed its own checks
        password = info.data.get("password")
        if password is not None and v != password:
            raise ValueError("Passwords do not match")
        return v


class UpdateUserRequest(CamelModel):
    full_name: str = Field(min_length=1)
    email: EmailStr
    password: Optional[str] = Field(default=None, min_length=6)
    phone: str = Field(min_length=10)


class LoginUser(CamelModel):
    id: int
    email: str
    full_name: str

    model_config = {**CamelModel.model_config, "from_attributes": True}


class SignUpForm(CamelModel):
    """Fields collected by the sign-up screen before they are posted as a registration.

    The sign-up screen is the only consumer; no route accepts this shape directly.
    """

    first_name: str
    last_name: str
    phone: str
    email: str
    password: str
    terms: Any = Field(default=None, validate_default=True)

    @field_validator("first_name")
    @classmethod
    def first_name_required(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("First name is required")
        return v

    @field_validator("last_name")
    @classmethod
    def last_name_required(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Last name is required")
        return v

    @field_validator("phone")
    @classmethod
    def phone_required(cls, v: str) -> str:
        if len(v) < 10:
            raise ValueError("Phone number is required")
        return v

    @field_validator("email")
    @classmethod
    def email_format(cls, v: str) -> str:
        return check_email(v, "Invalid email address")

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("terms")
    @classmethod
    def terms_accepted(cls, v: Any) -> bool:
        if v is not True:
            raise ValueError("You must agree to the Terms & Condition")
        return v

    def to_register_request(self) -> RegisterRequest:
        return RegisterRequest(
            full_name=f"{self.first_name} {self.last_name}",
            email=self.email,
            password=self.password,
            confirm_password=self.password,
            phone=self.phone,
        )
