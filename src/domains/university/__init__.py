# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University domain package.

This package provides university management functionality including:
- University CRUD operations
- Public listings, detail pages and search
"""

from src.domains.university.service import (
    UniversityService,
    UniversityServiceError,
    UniversityNotFoundError,
    UniversitySlugExistsError,
    UniversityValidationError,
)

__all__ = [
    "UniversityService",
    "UniversityServiceError",
    "UniversityNotFoundError",
    "UniversitySlugExistsError",
    "UniversityValidationError",
]
