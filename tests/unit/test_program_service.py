# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for ProgramService.

The fee range aggregator is mocked; these tests check when it is asked to
recompute, not the arithmetic (see test_fee_range).
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError

from src.domains.catalog.filters import ListingFilters
from src.domains.program.service import (
    ProgramNotFoundError,
    ProgramService,
    ProgramSlugExistsError,
    ProgramUniversityNotFoundError,
)
from src.infrastructure.database.models import Program
from src.models.program import ProgramCreateRequest, ProgramUpdateRequest
from tests.conftest import create_mock_result


@pytest.fixture
def fee_ranges() -> MagicMock:
    aggregator = MagicMock()
    aggregator.recompute = AsyncMock()
    aggregator.recompute_many = AsyncMock()
    return aggregator


@pytest.fixture
def service(mock_db: AsyncMock, fee_ranges: MagicMock) -> ProgramService:
    return ProgramService(db=mock_db, fee_ranges=fee_ranges)


@pytest.fixture
def create_request(sample_university) -> ProgramCreateRequest:
    return ProgramCreateRequest(
        university_id=sample_university.id,
        name="Online MCA",
        category="MCA",
        level="Postgraduate",
        fee=Decimal("160000"),
        description="Two year MCA.",
    )


class TestProgramServiceCreate:
    """Tests for program creation."""

    @pytest.mark.asyncio
    async def test_create_program_success(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        create_request: ProgramCreateRequest,
        sample_university,
        sample_program: Program,
    ) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(sample_university.id),
            create_mock_result(sample_program),
        ]

        result = await service.create_program(create_request)

        added = mock_db.add.call_args[0][0]
        assert isinstance(added, Program)
        assert added.slug.startswith("online-mca-")
        assert added.fee == Decimal("160000")
        assert added.category == "MCA"
        mock_db.commit.assert_awaited_once()
        fee_ranges.recompute.assert_awaited_once_with(sample_university.id)
        assert result.id == sample_program.id

    @pytest.mark.asyncio
    async def test_create_program_unknown_university(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        create_request: ProgramCreateRequest,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        with pytest.raises(ProgramUniversityNotFoundError):
            await service.create_program(create_request)

        mock_db.add.assert_not_called()
        fee_ranges.recompute.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_program_slug_collision(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        create_request: ProgramCreateRequest,
        sample_university,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_university.id)
        mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(ProgramSlugExistsError):
            await service.create_program(create_request)

        mock_db.rollback.assert_awaited_once()
        fee_ranges.recompute.assert_not_called()


class TestProgramServiceGet:
    """Tests for program retrieval."""

    @pytest.mark.asyncio
    async def test_get_program_success(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        result = await service.get_program(sample_program.id)

        assert result.fee == 175000.0
        assert result.university is not None
        assert result.university.slug == "amity-university-online"

    @pytest.mark.asyncio
    async def test_get_program_not_found(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        with pytest.raises(ProgramNotFoundError):
            await service.get_program("missing")

    @pytest.mark.asyncio
    async def test_get_public_program_with_related(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(sample_program),
            create_mock_result(values=[]),
        ]

        result = await service.get_public_program(sample_program.slug)

        assert result.program.slug == sample_program.slug
        assert result.related_programs == []

    @pytest.mark.asyncio
    async def test_list_programs(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(1),
            create_mock_result(values=[sample_program]),
        ]

        page = await service.list_programs(ListingFilters(category="MBA"), public=True)

        assert page.total == 1
        assert page.items[0].category == "MBA"

    @pytest.mark.asyncio
    async def test_list_categories(self, service: ProgramService, mock_db: AsyncMock) -> None:
        mock_db.execute.return_value = create_mock_result(values=[("MBA", 3), ("MCA", 1)])

        categories = await service.list_categories()

        assert [(c.name, c.count) for c in categories] == [("MBA", 3), ("MCA", 1)]

    @pytest.mark.asyncio
    async def test_list_featured(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(values=[sample_program])

        programs = await service.list_featured(limit=8)

        assert [p.slug for p in programs] == ["online-mba-k3x9q"]
        stmt = mock_db.execute.await_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "programs.featured IS true" in sql


class TestProgramServiceUpdate:
    """Tests for program updates and fee range maintenance."""

    @pytest.mark.asyncio
    async def test_fee_change_recomputes_owner(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)
        university_id = sample_program.university_id

        await service.update_program(sample_program.id, ProgramUpdateRequest(fee=Decimal("99000")))

        assert sample_program.fee == Decimal("99000")
        fee_ranges.recompute_many.assert_awaited_once_with([university_id, university_id])

    @pytest.mark.asyncio
    async def test_description_change_skips_recompute(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        await service.update_program(
            sample_program.id,
            ProgramUpdateRequest(description="Updated."),
        )

        fee_ranges.recompute_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_unchanged_fee_skips_recompute(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        await service.update_program(
            sample_program.id,
            ProgramUpdateRequest(fee=sample_program.fee),
        )

        fee_ranges.recompute_many.assert_not_called()

    @pytest.mark.asyncio
    async def test_move_recomputes_both_universities(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        old_university_id = sample_program.university_id
        new_university_id = str(uuid4())
        mock_db.execute.side_effect = [
            create_mock_result(sample_program),
            create_mock_result(new_university_id),
            create_mock_result(sample_program),
        ]

        await service.update_program(
            sample_program.id,
            ProgramUpdateRequest(university_id=new_university_id),
        )

        fee_ranges.recompute_many.assert_awaited_once_with(
            [old_university_id, new_university_id]
        )

    @pytest.mark.asyncio
    async def test_move_to_unknown_university(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.side_effect = [
            create_mock_result(sample_program),
            create_mock_result(None),
        ]

        with pytest.raises(ProgramUniversityNotFoundError):
            await service.update_program(
                sample_program.id,
                ProgramUpdateRequest(university_id=uuid4()),
            )

        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_rename_regenerates_slug(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        await service.update_program(sample_program.id, ProgramUpdateRequest(name="Global MBA"))

        assert sample_program.slug.startswith("global-mba-")

    @pytest.mark.asyncio
    async def test_explicit_null_is_ignored_for_required_fields(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        await service.update_program(
            sample_program.id,
            ProgramUpdateRequest(name=None, meta_title=None),
        )

        assert sample_program.name == "Online MBA"
        assert sample_program.meta_title is None

    @pytest.mark.asyncio
    async def test_update_not_found(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        with pytest.raises(ProgramNotFoundError):
            await service.update_program("missing", ProgramUpdateRequest(name="X"))


class TestProgramServiceDeleteAndToggle:
    """Tests for deletion and toggles."""

    @pytest.mark.asyncio
    async def test_delete_recomputes_former_owner(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        await service.delete_program(sample_program.id)

        mock_db.delete.assert_awaited_once_with(sample_program)
        mock_db.commit.assert_awaited_once()
        fee_ranges.recompute.assert_awaited_once_with(sample_program.university_id)

    @pytest.mark.asyncio
    async def test_delete_not_found(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        with pytest.raises(ProgramNotFoundError):
            await service.delete_program("missing")

        fee_ranges.recompute.assert_not_called()

    @pytest.mark.asyncio
    async def test_toggle_status_recomputes(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        result = await service.toggle_status(sample_program.id)

        assert result.is_active is False
        fee_ranges.recompute.assert_awaited_once_with(sample_program.university_id)

    @pytest.mark.asyncio
    async def test_toggle_featured_leaves_fee_range(
        self,
        service: ProgramService,
        mock_db: AsyncMock,
        fee_ranges: MagicMock,
        sample_program: Program,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(sample_program)

        result = await service.toggle_featured(sample_program.id)

        assert result.featured is True
        fee_ranges.recompute.assert_not_called()
