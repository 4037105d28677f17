# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for DashboardService."""

from unittest.mock import AsyncMock

import pytest

from src.domains.dashboard.service import DashboardService
from src.models.common import EnquiryStatus
from src.models.program import ProgramSummary
from src.models.university import UniversitySummary


@pytest.fixture
def service(mock_db: AsyncMock) -> DashboardService:
    dashboard = DashboardService(mock_db)
    dashboard._universities = AsyncMock()
    dashboard._programs = AsyncMock()
    dashboard._enquiries = AsyncMock()
    return dashboard


class TestDashboardStats:
    @pytest.mark.asyncio
    async def test_every_status_is_reported(self, service: DashboardService) -> None:
        service._universities.count.side_effect = [4, 3]
        service._programs.count.side_effect = [10, 9]
        service._enquiries.count.side_effect = [5, 2]
        service._enquiries.count_by_status.return_value = {"New": 2, "Converted": 3}
        service._enquiries.list_recent.return_value = []

        stats = await service.get_admin_stats()

        assert stats.counts.universities == 4
        assert stats.counts.active_universities == 3
        assert stats.counts.programs == 10
        assert stats.counts.active_programs == 9
        assert stats.counts.enquiries == 5
        assert stats.counts.new_enquiries == 2
        by_status = {item.status: item.count for item in stats.enquiries_by_status}
        assert list(by_status) == [status.value for status in EnquiryStatus]
        assert by_status["New"] == 2
        assert by_status["Converted"] == 3
        assert by_status["Closed"] == 0
        service._enquiries.count.assert_any_await(status=EnquiryStatus.NEW)


class TestDashboardSearch:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [None, "", " m ", "a"])
    async def test_short_query_returns_nothing(
        self,
        service: DashboardService,
        query: str | None,
    ) -> None:
        result = await service.search(query)

        assert result.universities == []
        assert result.programs == []
        service._universities.search.assert_not_called()
        service._programs.search.assert_not_called()

    @pytest.mark.asyncio
    async def test_search_both_kinds(self, service: DashboardService) -> None:
        service._universities.search.return_value = [
            UniversitySummary(
                id="u1", name="Amity", slug="amity", location="Noida", rating="A+"
            )
        ]
        service._programs.search.return_value = [
            ProgramSummary(
                id="p1",
                name="Online MBA",
                slug="online-mba-abcde",
                category="MBA",
                level="Postgraduate",
                duration="2 Years",
                mode="Online",
                fee=150000,
                fee_period="Total",
            )
        ]

        result = await service.search("  mba ", limit=5)

        service._universities.search.assert_awaited_once_with("mba", limit=5)
        service._programs.search.assert_awaited_once_with("mba", limit=5)
        assert result.universities[0].slug == "amity"
        assert result.programs[0].fee == 150000.0


class TestDashboardFeatured:
    @pytest.mark.asyncio
    async def test_featured_totals(self, service: DashboardService) -> None:
        service._universities.list_featured.return_value = []
        service._programs.list_latest.return_value = []
        service._universities.count.return_value = 3
        service._programs.count.return_value = 9
        service._enquiries.count.return_value = 12

        result = await service.get_featured()

        assert result.stats.universities == 3
        assert result.stats.programs == 9
        assert result.stats.enquiries == 12
        service._universities.count.assert_awaited_with(active_only=True)
