# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard and public landing page models."""

from pydantic import BaseModel

from src.models.enquiry import EnquiryResponse
from src.models.program import ProgramResponse, ProgramSummary
from src.models.university import UniversityResponse, UniversitySummary


class CatalogCounts(BaseModel):
    """Record counts shown on the admin dashboard."""

    universities: int
    active_universities: int
    programs: int
    active_programs: int
    enquiries: int
    new_enquiries: int


class StatusCount(BaseModel):
    status: str
    count: int


class DashboardStatsResponse(BaseModel):
    """Admin dashboard statistics."""

    counts: CatalogCounts
    enquiries_by_status: list[StatusCount]
    recent_enquiries: list[EnquiryResponse]


class PublicStats(BaseModel):
    universities: int
    programs: int
    enquiries: int


class FeaturedResponse(BaseModel):
    """Landing page content."""

    universities: list[UniversityResponse]
    programs: list[ProgramResponse]
    stats: PublicStats


class CategoryCount(BaseModel):
    name: str
    count: int


class SearchResponse(BaseModel):
    """Quick search results across universities and programs."""

    universities: list[UniversitySummary]
    programs: list[ProgramSummary]


class UniversityDetailResponse(UniversityResponse):
    """University page with its active programs."""

    programs: list[ProgramSummary]


class ProgramDetailResponse(BaseModel):
    """Program page with related programs from the same category."""

    program: ProgramResponse
    related_programs: list[ProgramResponse]
