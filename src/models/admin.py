# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Administrator authentication models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.models.common import AdminRole


class LoginRequest(BaseModel):
    """Admin login credentials."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    """Create a new administrator."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: AdminRole = AdminRole.ADMIN


class PasswordChangeRequest(BaseModel):
    """Change the current administrator's password."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class AdminResponse(BaseModel):
    """Administrator profile without credentials."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str
    is_active: bool
    last_login: datetime | None = None
    created_at: datetime | None = None


class LoginResponse(BaseModel):
    """Issued token plus the authenticated profile."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    user: AdminResponse


class TokenVerifyResponse(BaseModel):
    """Result of verifying the presented token."""

    valid: bool
    user: AdminResponse
