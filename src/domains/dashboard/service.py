# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard service for admin statistics and the public landing page.

Aggregates counts from the university, program and enquiry services
instead of querying tables directly, so listing rules stay in one place.

Example:
    >>> service = DashboardService(db_session)
    >>> stats = await service.get_admin_stats()
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.enquiry.service import EnquiryService
from src.domains.program.service import ProgramService
from src.domains.university.service import UniversityService
from src.models.common import EnquiryStatus
from src.models.dashboard import (
    CatalogCounts,
    DashboardStatsResponse,
    FeaturedResponse,
    PublicStats,
    SearchResponse,
    StatusCount,
)

logger = logging.getLogger(__name__)

FEATURED_UNIVERSITIES_LIMIT = 6
LATEST_PROGRAMS_LIMIT = 8
FEATURED_PROGRAMS_LIMIT = 8
MIN_SEARCH_LENGTH = 2


class DashboardService:
    """Read-only aggregate views over the catalog and enquiries.

    Attributes:
        _universities: University service.
        _programs: Program service.
        _enquiries: Enquiry service.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the dashboard service.

        Args:
            db: Async database session.
        """
        self._universities = UniversityService(db)
        self._programs = ProgramService(db)
        self._enquiries = EnquiryService(db)

    async def get_admin_stats(self) -> DashboardStatsResponse:
        """Counts, enquiries grouped by status and the latest enquiries.

        Every status is reported, with zero where no enquiry has it.
        """
        counts = CatalogCounts(
            universities=await self._universities.count(),
            active_universities=await self._universities.count(active_only=True),
            programs=await self._programs.count(),
            active_programs=await self._programs.count(active_only=True),
            enquiries=await self._enquiries.count(),
            new_enquiries=await self._enquiries.count(status=EnquiryStatus.NEW),
        )

        by_status = await self._enquiries.count_by_status()
        enquiries_by_status = [
            StatusCount(status=status.value, count=by_status.get(status.value, 0))
            for status in EnquiryStatus
        ]

        recent = await self._enquiries.list_recent()

        return DashboardStatsResponse(
            counts=counts,
            enquiries_by_status=enquiries_by_status,
            recent_enquiries=recent,
        )

    async def get_featured(self) -> FeaturedResponse:
        """Landing page: featured universities, latest programs and totals."""
        universities = await self._universities.list_featured(
            limit=FEATURED_UNIVERSITIES_LIMIT
        )
        programs = await self._programs.list_latest(limit=LATEST_PROGRAMS_LIMIT)
        stats = PublicStats(
            universities=await self._universities.count(active_only=True),
            programs=await self._programs.count(active_only=True),
            enquiries=await self._enquiries.count(),
        )
        return FeaturedResponse(universities=universities, programs=programs, stats=stats)

    async def search(self, query: str | None, limit: int = 10) -> SearchResponse:
        """Search active universities and programs.

        Queries shorter than two characters return empty results without
        touching the database.
        """
        text = (query or "").strip()
        if len(text) < MIN_SEARCH_LENGTH:
            return SearchResponse(universities=[], programs=[])

        return SearchResponse(
            universities=await self._universities.search(text, limit=limit),
            programs=await self._programs.search(text, limit=limit),
        )
