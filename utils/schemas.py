"""
Pydantic request / response schemas for the users and articles API.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BCRYPT_MAX_PASSWORD_BYTES = 72


# ═══════════════════════════════════════════════════════════════════════════════
# Users
# ═══════════════════════════════════════════════════════════════════════════════


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=2, max_length=64)
    email: str = Field(..., min_length=5, max_length=255)
    password: str = Field(..., min_length=4, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode()) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes when UTF-8 encoded"
            )
        return v


class UpdateUserRequest(BaseModel):
    username: Optional[str] = Field(None, min_length=2, max_length=64)
    email: Optional[str] = Field(None, min_length=5, max_length=255)


class UserResponse(BaseModel):
    """Outward view of an account; never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    user: UserResponse


# ═══════════════════════════════════════════════════════════════════════════════
# Articles
# ═══════════════════════════════════════════════════════════════════════════════


class CreateArticleRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str
    is_public: Optional[bool] = None


class ArticleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    content: str
    user_id: Optional[uuid.UUID] = None
    is_public: bool = False
    created_at: Optional[datetime] = None
