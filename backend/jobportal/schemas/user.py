from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from jobportal.models.enums import Role
from jobportal.schemas.common import CamelModel, NonBlank


class RegisterRequest(CamelModel):
    """Schema for user registration."""

    username: str = Field(..., min_length=3, max_length=20)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=40)
    # "admin", "recruiter", anything else means candidate; empty means candidate
    roles: list[str] = []

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be between 3 and 20 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if len(v) > 50:
            raise ValueError("Email must not exceed 50 characters")
        return v.lower()


class LoginRequest(CamelModel):
    """Schema for username/password login."""

    username: NonBlank
    password: str = Field(..., min_length=1)


class JwtResponse(CamelModel):
    """Schema for a successful login."""

    token: str
    type: str = "Bearer"
    id: int
    username: str
    email: str
    roles: list[str]  # authorities, e.g. ["ROLE_CANDIDATE"]


class UserResponse(CamelModel):
    """Schema for user response (without password)."""

    id: int
    username: str
    email: str
    roles: list[str]
    enabled: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserUpdate(CamelModel):
    """Partial account update; only the supplied fields change."""

    username: Optional[str] = Field(None, min_length=3, max_length=20)
    email: Optional[EmailStr] = None
    roles: Optional[list[Role]] = None
    enabled: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) > 50:
            raise ValueError("Email must not exceed 50 characters")
        return v.lower() if v else v


class PasswordChangeRequest(CamelModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=40)


class AvailabilityResponse(CamelModel):
    value: str
    available: bool
