# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Program domain package.

This package provides program management functionality including:
- Program CRUD operations
- Fee range upkeep on the owning university
- Public detail pages, categories and search
"""

from src.domains.program.service import (
    ProgramService,
    ProgramServiceError,
    ProgramNotFoundError,
    ProgramUniversityNotFoundError,
    ProgramSlugExistsError,
)

__all__ = [
    "ProgramService",
    "ProgramServiceError",
    "ProgramNotFoundError",
    "ProgramUniversityNotFoundError",
    "ProgramSlugExistsError",
]
