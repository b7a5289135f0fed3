"""
User Pydantic Schemas
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
ENVIRONMENT_MAX_LENGTH = 20


def _clean_username(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("username must not be blank")
    return value


def _check_email(value: Optional[str]) -> Optional[str]:
    """Validate the address; the value is stored exactly as submitted."""
    if value is None:
        return value
    if len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"invalid email address: {e}") from e
    return value


class CreateUserRequest(BaseModel):
    """Request schema for creating a user."""

    username: str = Field(..., max_length=USERNAME_MAX_LENGTH)
    email: str
    environment: Optional[str] = Field(None, min_length=1, max_length=ENVIRONMENT_MAX_LENGTH)
    active: bool = True

    @field_validator("username")
    @classmethod
    def validate_username(cls, value):
        return _clean_username(value)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value):
        return _check_email(value)


class UpdateUserRequest(BaseModel):
    """
    Request schema for updating a user.

    Only the fields present in the body are applied; ``created_at`` can
    never be changed.
    """

    username: Optional[str] = Field(None, max_length=USERNAME_MAX_LENGTH)
    email: Optional[str] = None
    environment: Optional[str] = Field(None, min_length=1, max_length=ENVIRONMENT_MAX_LENGTH)
    active: Optional[bool] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, value):
        return _clean_username(value)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, value):
        return _check_email(value)


class UserResponse(BaseModel):
    """Response schema for a user."""

    id: int
    username: str
    email: str
    environment: str
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserStatistics(BaseModel):
    """User counts overall and for the running environment."""

    total_users: int
    active_users: int
    users_in_environment: int
    active_users_in_environment: int
    environment: str
