"""Auth and user schemas."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime

from groundbook.models.user import UserRole


class SignupRequest(BaseModel):
    """Schema for creating an account."""

    name: Optional[str] = None
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: Optional[str] = None
    role: UserRole = UserRole.RENTER
    upi_id: Optional[str] = None


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: EmailStr
    password: str


class UserSummary(BaseModel):
    """Public view of a user embedded in other resources."""

    id: int
    name: Optional[str] = None
    email: str
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserPublic(UserSummary):
    """Schema for the current user (never includes the password hash)."""

    role: UserRole
    upi_id: Optional[str] = None
    created_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    """Schema returned by signup and login."""

    token: str
    token_type: str = "bearer"
    user: UserPublic
