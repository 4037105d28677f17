# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

This module provides administrator authentication:
- JWT access token creation and validation
- Password hashing with bcrypt
- Login, registration and password changes

Exports:
    PasswordHasher: Secure password hashing using bcrypt.
    JWTManager: JWT token creation and validation.
    AdminAuthService: Administrator authentication service.
"""

from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AdminAuthService

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "AdminAuthService",
]
