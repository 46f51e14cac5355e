from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime
from typing import Optional
from lexcase.models import AuthProvider
from lexcase.schemas.common import require_text

class SignupRequest(BaseModel):
    name: str
    email: EmailStr
    password: str

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        return require_text(value, "name")

    @field_validator("password")
    @classmethod
    def password_length(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        return value

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required")
        return value

class GoogleAuthRequest(BaseModel):
    credential: str

    @field_validator("credential")
    @classmethod
    def credential_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Google credential is required")
        return value

class UserSummary(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True

class UserPublic(UserSummary):
    avatar: str = ""
    auth_provider: AuthProvider
    created_at: Optional[datetime] = None

class AuthResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    token: str
    user: UserPublic

class ProfileResponse(BaseModel):
    success: bool = True
    user: UserPublic
