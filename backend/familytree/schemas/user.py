"""User and account schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from familytree.core.datetime_utils import ensure_utc


class UserBase(BaseModel):
    """Base schema for User."""

    email: EmailStr
    full_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserCreate(UserBase):
    """Registration payload."""

    full_name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, description="At least 8 characters.")

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, value: str) -> str:
        """Reject names that are only whitespace."""
        value = value.strip()
        if not value:
            raise ValueError("full_name must not be blank")
        return value


class User(UserBase):
    """User as returned by the API."""

    id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        """SQLite returns naive timestamps; every stored timestamp is UTC."""
        return ensure_utc(value)


class LoginRequest(BaseModel):
    """Email and password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegistrationResult(BaseModel):
    """Result of a successful registration."""

    success: bool = True
    user: User


class Account(BaseModel):
    """Account settings view of the signed-in owner."""

    id: int
    name: Optional[str] = None
    email: EmailStr
    has_password: bool


class AccountUpdate(BaseModel):
    """Editable account fields."""

    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        """Reject names that are only whitespace."""
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class PasswordChange(BaseModel):
    """Password change request."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, description="At least 8 characters.")


class AccountDelete(BaseModel):
    """Account deletion request, confirmed by password."""

    password: str = Field(..., min_length=1)


class AccountDeleteResult(BaseModel):
    """Outcome of an account deletion."""

    success: bool = True
    deleted_trees_count: int
