# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University table."""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from src.models.common import UniversityRating

if TYPE_CHECKING:
    from src.infrastructure.database.models.program import Program


class University(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """A university listed on the site.

    ``min_fee``/``max_fee`` are derived from the university's active
    programs by the fee range aggregator and are never written from
    client input.
    """

    __tablename__ = "universities"
    __table_args__ = (
        CheckConstraint("min_fee <= max_fee", name="university_fee_range_ordered"),
        CheckConstraint(
            "rating IN ('A++', 'A+', 'A', 'B++', 'B+', 'B', 'C', 'Not Rated')",
            name="valid_university_rating",
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    short_name: Mapped[str | None] = mapped_column(String(100))
    logo: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    banner: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False)
    established_year: Mapped[int | None] = mapped_column(Integer)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text)
    website: Mapped[str | None] = mapped_column(String(500))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    rating: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=UniversityRating.NOT_RATED.value,
    )
    accreditations: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    approvals: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    facilities: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    highlights: Mapped[list[str]] = mapped_column(ARRAY(Text), nullable=False, default=list)
    min_fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    max_fee: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    ranking: Mapped[int | None] = mapped_column(Integer)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    programs: Mapped[list["Program"]] = relationship(
        back_populates="university",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<University {self.slug}>"
