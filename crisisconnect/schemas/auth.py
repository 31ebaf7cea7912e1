"""Request/response schemas for auth and user endpoints."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from crisisconnect.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    normalize_email,
)


def _normalize_email(value: object) -> object:
    """Canonical lower-case form; EmailStr then checks the address itself."""
    return normalize_email(value) if isinstance(value, str) else value


def _validate_name(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("name must be non-empty")
    return stripped


class RegisterRequest(BaseModel):
    """New account details. Registration always creates role 'user'."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _validate_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def canonical_email(cls, v: object) -> object:
        return _normalize_email(v)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Login email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def canonical_email(cls, v: object) -> object:
        return _normalize_email(v)


class UserOut(BaseModel):
    """Public view of a user account (no password hash)."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: str
    avatar: str | None = None
    created_at: datetime | None = None


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserOut


class CurrentUser(BaseModel):
    """Authenticated user (id, name, email, role) for dependency injection."""

    model_config = {"from_attributes": True}

    id: int
    name: str
    email: str
    role: str


class ProfileUpdateRequest(BaseModel):
    """Fields a user may change on their own account; omitted fields stay as they are."""

    name: str | None = Field(default=None, min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return None if v is None else _validate_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def canonical_email(cls, v: object) -> object:
        return _normalize_email(v)


class ProfileUpdateResponse(BaseModel):
    message: str
    user: UserOut


class AvatarResponse(BaseModel):
    """Response after storing a new profile picture."""

    message: str
    avatar: str = Field(..., description="URL path under which the image is served")
    user: UserOut
