# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Program table."""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.common import FeePeriod, StudyMode

if TYPE_CHECKING:
    from src.infrastructure.database.models.university import University


class Program(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A program offered by a university.

    Programs are removed by the database when their university is deleted.
    """

    __tablename__ = "programs"
    __table_args__ = (
        CheckConstraint("fee >= 0", name="program_fee_non_negative"),
    )

    university_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("universities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(300), nullable=False, unique=True, index=True)
    category: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    level: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    duration: Mapped[str] = mapped_column(String(50), nullable=False, default="2 Years")
    mode: Mapped[str] = mapped_column(String(20), nullable=False, default=StudyMode.ONLINE.value)
    fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    fee_period: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=FeePeriod.TOTAL.value,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    eligibility: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="Bachelor's degree from a recognized university",
    )
    image: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    brochure_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    youtube_url: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    syllabus: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    career_options: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    specializations: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    semesters: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    ranking: Mapped[int | None] = mapped_column(Integer)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    meta_title: Mapped[str | None] = mapped_column(String(255))
    meta_description: Mapped[str | None] = mapped_column(Text)

    university: Mapped["University"] = relationship(back_populates="programs")

    def __repr__(self) -> str:
        return f"<Program {self.slug}>"
