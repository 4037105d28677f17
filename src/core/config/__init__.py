# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the EduFolio API.

Settings are Pydantic-based and loaded from environment variables
(and an optional ``.env`` file).

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.database.url)
"""

from src.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    JWTSettings,
    RateLimitSettings,
    SeedSettings,
    Settings,
    UploadSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "JWTSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
    "UploadSettings",
    "SeedSettings",
]
