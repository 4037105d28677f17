# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enquiry API models.

Contact fields are accepted as plain strings here; the enquiry service
normalizes and validates them so that public and admin submissions share
the same rules.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.models.common import EnquirySource, EnquiryStatus, PaginationMeta


class EnquiryCreateRequest(BaseModel):
    """Public enquiry submission."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    message: str = Field(default="", max_length=5000)
    program_id: UUID | None = None
    university_id: UUID | None = None
    source: EnquirySource = EnquirySource.WEBSITE


class AdminEnquiryCreateRequest(EnquiryCreateRequest):
    """Enquiry recorded by an administrator, e.g. from a phone call."""

    status: EnquiryStatus = EnquiryStatus.NEW
    notes: str | None = None
    assigned_to: UUID | None = None


class EnquiryUpdateRequest(BaseModel):
    """Partial update of an enquiry."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    message: str | None = Field(default=None, max_length=5000)
    program_id: UUID | None = None
    university_id: UUID | None = None
    source: EnquirySource | None = None
    status: EnquiryStatus | None = None
    notes: str | None = None
    assigned_to: UUID | None = None


class EnquiryStatusUpdateRequest(BaseModel):
    """Status-only update."""

    status: EnquiryStatus
    notes: str | None = None


class EnquiryReference(BaseModel):
    """Name and slug of a referenced program or university."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str


class EnquiryResponse(BaseModel):
    """Full enquiry record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    phone: str
    message: str
    program_id: str | None = None
    university_id: str | None = None
    program: EnquiryReference | None = None
    university: EnquiryReference | None = None
    source: str
    status: str
    notes: str | None = None
    assigned_to: str | None = None
    created_at: datetime
    updated_at: datetime


class EnquiryListResponse(BaseModel):
    """Paginated enquiry listing."""

    items: list[EnquiryResponse]
    pagination: PaginationMeta


class EnquiryAcknowledgement(BaseModel):
    """Identity echoed back to a public submitter."""

    id: str
    name: str
    email: str


class EnquirySubmittedResponse(BaseModel):
    """Response to a public enquiry submission."""

    message: str
    enquiry: EnquiryAcknowledgement
