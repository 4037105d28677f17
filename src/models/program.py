# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Program API models."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.common import (
    FeePeriod,
    PaginationMeta,
    ProgramCategory,
    ProgramLevel,
    StudyMode,
    decimal_to_float,
)
from src.models.university import UniversitySummary


class ProgramCreateRequest(BaseModel):
    """Request model for creating a program.

    The slug is always generated from ``name``; client-supplied slugs are
    ignored.
    """

    model_config = ConfigDict(extra="ignore")

    university_id: UUID
    name: str = Field(..., min_length=1, max_length=255)
    category: ProgramCategory
    level: ProgramLevel
    duration: str = Field(default="2 Years", max_length=50)
    mode: StudyMode = StudyMode.ONLINE
    fee: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    fee_period: FeePeriod = FeePeriod.TOTAL
    description: str = Field(..., min_length=1)
    eligibility: str = "Bachelor's degree from a recognized university"
    image: str = Field(default="", max_length=500)
    brochure_url: str = Field(default="", max_length=500)
    youtube_url: str = Field(default="", max_length=500)
    syllabus: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    career_options: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    semesters: int = Field(default=4, ge=0)
    credits: int = Field(default=0, ge=0)
    featured: bool = False
    ranking: int | None = Field(default=None, ge=1)
    is_active: bool = True
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None

    @field_validator("name", "description")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ProgramUpdateRequest(BaseModel):
    """Partial update of a program. Only provided fields are applied."""

    model_config = ConfigDict(extra="ignore")

    university_id: UUID | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    category: ProgramCategory | None = None
    level: ProgramLevel | None = None
    duration: str | None = Field(default=None, max_length=50)
    mode: StudyMode | None = None
    fee: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    fee_period: FeePeriod | None = None
    description: str | None = Field(default=None, min_length=1)
    eligibility: str | None = None
    image: str | None = Field(default=None, max_length=500)
    brochure_url: str | None = Field(default=None, max_length=500)
    youtube_url: str | None = Field(default=None, max_length=500)
    syllabus: list[str] | None = None
    highlights: list[str] | None = None
    career_options: list[str] | None = None
    specializations: list[str] | None = None
    semesters: int | None = Field(default=None, ge=0)
    credits: int | None = Field(default=None, ge=0)
    featured: bool | None = None
    ranking: int | None = Field(default=None, ge=1)
    is_active: bool | None = None
    meta_title: str | None = Field(default=None, max_length=255)
    meta_description: str | None = None


class ProgramSummary(BaseModel):
    """Program projection used inside university detail pages."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    category: str
    level: str
    duration: str
    mode: str
    fee: float
    fee_period: str
    image: str = ""

    @field_validator("fee", mode="before")
    @classmethod
    def fee_as_float(cls, value: object) -> object:
        return decimal_to_float(value)


class ProgramResponse(BaseModel):
    """Full program record with its university summary."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    university_id: str
    university: UniversitySummary | None = None
    name: str
    slug: str
    category: str
    level: str
    duration: str
    mode: str
    fee: float
    fee_period: str
    description: str
    eligibility: str
    image: str
    brochure_url: str
    youtube_url: str
    syllabus: list[str]
    highlights: list[str]
    career_options: list[str]
    specializations: list[str]
    semesters: int
    credits: int
    featured: bool
    ranking: int | None = None
    is_active: bool
    meta_title: str | None = None
    meta_description: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("fee", mode="before")
    @classmethod
    def fee_as_float(cls, value: object) -> object:
        return decimal_to_float(value)


class ProgramListResponse(BaseModel):
    """Paginated program listing."""

    items: list[ProgramResponse]
    pagination: PaginationMeta
