# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Administrator table."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.common import AdminRole


class Admin(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """Back-office user.

    ``password`` holds a bcrypt hash, never the plain text.
    """

    __tablename__ = "admins"
    __table_args__ = (
        CheckConstraint(
            "role IN ('superadmin', 'admin', 'editor')",
            name="valid_admin_role",
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=AdminRole.ADMIN.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<Admin {self.email} ({self.role})>"
