"""Pydantic schemas for user data validation."""

from pydantic import BaseModel, EmailStr, Field

from components.user.models import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    role: UserRole = UserRole.STUDENT


class UserCreate(UserBase):
    """Schema for user creation."""
    password: str = Field(..., min_length=6)


class User(UserBase):
    """Schema for user response. Never exposes the password hash."""
    id: int

    class Config:
        from_attributes = True
