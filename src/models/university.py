# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University API models.

Request models never carry ``min_fee``/``max_fee``; the fee range is derived
from the university's programs and only appears in responses.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.common import PaginationMeta, UniversityRating, decimal_to_float


class UniversityBase(BaseModel):
    """Editable university fields shared by create and update."""

    short_name: str | None = Field(default=None, max_length=100)
    logo: str = Field(default="", max_length=500)
    banner: str = Field(default="", max_length=500)
    established_year: int | None = Field(default=None, ge=1000, le=3000)
    address: str | None = None
    website: str | None = Field(default=None, max_length=500)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    rating: UniversityRating = UniversityRating.NOT_RATED
    accreditations: list[str] = Field(default_factory=list)
    approvals: list[str] = Field(default_factory=list)
    facilities: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    featured: bool = False
    ranking: int | None = Field(default=None, ge=1)
    is_active: bool = True


class UniversityCreateRequest(UniversityBase):
    """Request model for creating a university.

    ``slug`` is derived from ``name`` when omitted.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=255)

    @field_validator("name", "description", "location")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class UniversityUpdateRequest(BaseModel):
    """Partial update of a university. Only provided fields are applied."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    short_name: str | None = Field(default=None, max_length=100)
    logo: str | None = Field(default=None, max_length=500)
    banner: str | None = Field(default=None, max_length=500)
    description: str | None = Field(default=None, min_length=1)
    established_year: int | None = Field(default=None, ge=1000, le=3000)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    website: str | None = Field(default=None, max_length=500)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    rating: UniversityRating | None = None
    accreditations: list[str] | None = None
    approvals: list[str] | None = None
    facilities: list[str] | None = None
    highlights: list[str] | None = None
    featured: bool | None = None
    ranking: int | None = Field(default=None, ge=1)
    is_active: bool | None = None


class UniversitySummary(BaseModel):
    """Compact university projection embedded in program responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    logo: str = ""
    location: str
    rating: str


class UniversityResponse(BaseModel):
    """Full university record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    short_name: str | None = None
    logo: str
    banner: str
    description: str
    established_year: int | None = None
    location: str
    address: str | None = None
    website: str | None = None
    email: str | None = None
    phone: str | None = None
    rating: str
    accreditations: list[str]
    approvals: list[str]
    facilities: list[str]
    highlights: list[str]
    min_fee: float
    max_fee: float
    featured: bool
    ranking: int | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("min_fee", "max_fee", mode="before")
    @classmethod
    def fees_as_float(cls, value: object) -> object:
        return decimal_to_float(value)


class UniversityListResponse(BaseModel):
    """Paginated university listing."""

    items: list[UniversityResponse]
    pagination: PaginationMeta


class UniversityDeleteResponse(BaseModel):
    """Result of deleting a university and its programs."""

    message: str
    programs_deleted: int = Field(..., ge=0)
