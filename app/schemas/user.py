from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Schema for registering a new account."""

    name: str = Field(..., min_length=1, max_length=150, description="Display name")
    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserResponse(BaseModel):
    """Public view of an account; the password hash is never exposed."""

    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    success: bool
    message: str
    user: Optional[UserResponse] = None
