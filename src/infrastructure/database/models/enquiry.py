# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enquiry (lead) table."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.common import EnquirySource, EnquiryStatus

if TYPE_CHECKING:
    from src.infrastructure.database.models.admin import Admin
    from src.infrastructure.database.models.program import Program
    from src.infrastructure.database.models.university import University


class Enquiry(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A contact request submitted by a prospective student.

    Program and university references are informational; they are not
    checked on submission and are nulled if the target is deleted.
    """

    __tablename__ = "enquiries"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    program_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("programs.id", ondelete="SET NULL"),
    )
    university_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("universities.id", ondelete="SET NULL"),
    )
    source: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=EnquirySource.WEBSITE.value,
    )
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default=EnquiryStatus.NEW.value,
        index=True,
    )
    notes: Mapped[str | None] = mapped_column(Text)
    assigned_to: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("admins.id", ondelete="SET NULL"),
    )

    program: Mapped["Program | None"] = relationship()
    university: Mapped["University | None"] = relationship()
    assignee: Mapped["Admin | None"] = relationship()

    def __repr__(self) -> str:
        return f"<Enquiry {self.id} {self.status}>"
