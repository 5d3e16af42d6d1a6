"""
Pydantic models for accounts and authentication.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from carbon_tracker.utils.constants import DEFAULT_WEEKLY_GOAL


class UserCreate(BaseModel):
    """Registration payload."""

    username: str = Field(..., min_length=3, max_length=30, examples=["greenrider"])
    email: EmailStr = Field(..., examples=["rider@example.com"])
    password: str = Field(..., min_length=8, max_length=128)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Username must be at least 3 characters")
        return value

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(BaseModel):
    """Login payload."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class PasswordUpdate(BaseModel):
    """Password change payload."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class ProfileUpdate(BaseModel):
    """Profile fields a user may change."""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    weekly_goal: Optional[Decimal] = Field(None, ge=0)


class UserPydModel(BaseModel):
    """Model for user response. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: str = ""
    weekly_goal: Decimal = Decimal(DEFAULT_WEEKLY_GOAL)
    last_active: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class TokenResponse(BaseModel):
    """Issued access token with the account it belongs to."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: UserPydModel
