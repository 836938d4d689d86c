"""
Auth API Schemas - JSON bodies of the v2 auth endpoints
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., description="Account email")
    password: str = Field(..., description="Account password")
    remember_me: bool = Field(default=False, description="Issue a long-lived token")


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)


class VerifyEmailRequest(BaseModel):
    verification_code: str = Field(..., description="Code sent by email at registration")
