# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the listing database."""

from src.infrastructure.database.models.admin import Admin
from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.infrastructure.database.models.enquiry import Enquiry
from src.infrastructure.database.models.program import Program
from src.infrastructure.database.models.university import University

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "Admin",
    "Enquiry",
    "Program",
    "University",
]
