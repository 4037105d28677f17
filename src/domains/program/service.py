# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Program service for catalog management.

This module provides the ProgramService that handles:
- Program CRUD operations with generated slugs
- Keeping university fee ranges in sync after every relevant change
- Admin and public listings, detail pages, categories and search

Every mutation that can affect a fee range (create, delete, status toggle,
or an update touching ``fee``, ``is_active`` or ``university_id``) is
committed first and then followed by a fee range recomputation for each
affected university.

Example:
    >>> service = ProgramService(db_session)
    >>> program = await service.create_program(request)
"""

import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.catalog.fee_range import FeeRangeAggregator
from src.domains.catalog.filters import (
    PROGRAM_LISTING,
    ListingFilterBuilder,
    ListingFilters,
    Page,
    escape_like,
    execute_listing,
)
from src.infrastructure.database.models import Program, University
from src.infrastructure.database.models.base import new_uuid
from src.models.dashboard import CategoryCount, ProgramDetailResponse
from src.models.program import (
    ProgramCreateRequest,
    ProgramResponse,
    ProgramSummary,
    ProgramUpdateRequest,
)
from src.utils.slug import program_slug

logger = logging.getLogger(__name__)

RELATED_PROGRAMS_LIMIT = 4

# Changing any of these moves the owning university's fee range.
_FEE_RANGE_FIELDS = frozenset({"fee", "is_active", "university_id"})

_NON_NULLABLE_FIELDS = frozenset(
    {
        "university_id",
        "name",
        "category",
        "level",
        "duration",
        "mode",
        "fee",
        "fee_period",
        "description",
        "eligibility",
        "image",
        "brochure_url",
        "youtube_url",
        "syllabus",
        "highlights",
        "career_options",
        "specializations",
        "semesters",
        "credits",
        "featured",
        "is_active",
    }
)


class ProgramServiceError(Exception):
    """Base exception for program service errors."""

    pass


class ProgramNotFoundError(ProgramServiceError):
    """Raised when a program is not found."""

    pass


class ProgramUniversityNotFoundError(ProgramServiceError):
    """Raised when a program references a university that does not exist."""

    pass


class ProgramSlugExistsError(ProgramServiceError):
    """Raised when a generated program slug collides at commit."""

    pass


class ProgramService:
    """Service for managing programs.

    Attributes:
        _db: Async database session.
        _fee_ranges: Aggregator used after fee-affecting mutations.
    """

    def __init__(
        self,
        db: AsyncSession,
        fee_ranges: FeeRangeAggregator | None = None,
    ) -> None:
        """Initialize the program service.

        Args:
            db: Async database session.
            fee_ranges: Fee range aggregator. Defaults to one bound to ``db``.
        """
        self._db = db
        self._fee_ranges = fee_ranges or FeeRangeAggregator(db)

    async def list_programs(
        self,
        filters: ListingFilters,
        public: bool = False,
    ) -> Page[ProgramResponse]:
        """List programs matching the filters.

        Args:
            filters: Parsed listing filters.
            public: Restrict to active programs.

        Returns:
            Page of program responses with their university summaries.
        """
        query = ListingFilterBuilder(PROGRAM_LISTING).build(filters, public=public)
        page = await execute_listing(self._db, query)
        page.items = [ProgramResponse.model_validate(item) for item in page.items]
        return page

    async def get_program(self, program_id: str) -> ProgramResponse:
        """Get a program by ID.

        Raises:
            ProgramNotFoundError: If the program does not exist.
        """
        program = await self._get_by_id(str(program_id))
        if not program:
            raise ProgramNotFoundError(f"Program {program_id} not found")
        return ProgramResponse.model_validate(program)

    async def get_public_program(self, slug: str) -> ProgramDetailResponse:
        """Get an active program by slug plus related programs.

        Related programs are other active programs in the same category.

        Args:
            slug: Program slug.

        Returns:
            Program detail with up to four related programs.

        Raises:
            ProgramNotFoundError: If missing or inactive.
        """
        stmt = (
            select(Program)
            .options(selectinload(Program.university))
            .where(Program.slug == slug, Program.is_active.is_(True))
        )
        result = await self._db.execute(stmt)
        program = result.scalar_one_or_none()
        if not program:
            raise ProgramNotFoundError(f"Program '{slug}' not found")

        related_stmt = (
            select(Program)
            .options(selectinload(Program.university))
            .where(
                Program.category == program.category,
                Program.id != program.id,
                Program.is_active.is_(True),
            )
            .order_by(Program.featured.desc(), Program.created_at.desc())
            .limit(RELATED_PROGRAMS_LIMIT)
        )
        related_result = await self._db.execute(related_stmt)

        return ProgramDetailResponse(
            program=ProgramResponse.model_validate(program),
            related_programs=[
                ProgramResponse.model_validate(p) for p in related_result.scalars().all()
            ],
        )

    async def create_program(self, request: ProgramCreateRequest) -> ProgramResponse:
        """Create a program and refresh its university's fee range.

        Args:
            request: Program creation request.

        Returns:
            Created program with its university summary.

        Raises:
            ProgramUniversityNotFoundError: If the university does not exist.
            ProgramSlugExistsError: If the generated slug collides.
        """
        university_id = str(request.university_id)
        await self._require_university(university_id)

        data = request.model_dump(exclude={"university_id", "fee"}, mode="json")
        program = Program(
            id=new_uuid(),
            university_id=university_id,
            slug=program_slug(request.name),
            fee=request.fee,
            **data,
        )

        self._db.add(program)
        await self._commit_with_slug(program.slug)

        logger.info(
            "Program created: %s (slug=%s, university=%s)",
            program.id,
            program.slug,
            university_id,
        )

        await self._fee_ranges.recompute(university_id)

        return await self._reload(program.id)

    async def update_program(
        self,
        program_id: str,
        request: ProgramUpdateRequest,
    ) -> ProgramResponse:
        """Apply a partial update to a program.

        A new name regenerates the slug. When the program moves to another
        university both the old and the new owner are recomputed.

        Raises:
            ProgramNotFoundError: If the program does not exist.
            ProgramUniversityNotFoundError: If the new university does not exist.
        """
        program = await self._get_by_id(str(program_id))
        if not program:
            raise ProgramNotFoundError(f"Program {program_id} not found")

        changes = request.model_dump(exclude_unset=True, exclude={"fee"}, mode="json")
        if "fee" in request.model_fields_set and request.fee is not None:
            changes["fee"] = request.fee
        changes = {
            key: value
            for key, value in changes.items()
            if value is not None or key not in _NON_NULLABLE_FIELDS
        }

        old_university_id = program.university_id
        new_university_id = changes.get("university_id", old_university_id)
        if new_university_id != old_university_id:
            await self._require_university(new_university_id)

        if "name" in changes and changes["name"] != program.name:
            program.slug = program_slug(changes["name"])

        affects_fee_range = any(
            key in _FEE_RANGE_FIELDS and getattr(program, key) != value
            for key, value in changes.items()
        )

        for field_name, value in changes.items():
            setattr(program, field_name, value)

        await self._commit_with_slug(program.slug)

        logger.info("Program updated: %s", program.id)

        if affects_fee_range:
            await self._fee_ranges.recompute_many([old_university_id, new_university_id])

        return await self._reload(program.id)

    async def delete_program(self, program_id: str) -> None:
        """Delete a program and refresh its former university's fee range.

        Raises:
            ProgramNotFoundError: If the program does not exist.
        """
        program = await self._get_by_id(str(program_id))
        if not program:
            raise ProgramNotFoundError(f"Program {program_id} not found")

        university_id = program.university_id
        await self._db.delete(program)
        await self._db.commit()

        logger.info("Program deleted: %s (university=%s)", program_id, university_id)

        await self._fee_ranges.recompute(university_id)

    async def toggle_status(self, program_id: str) -> ProgramResponse:
        """Flip ``is_active`` and refresh the fee range.

        Raises:
            ProgramNotFoundError: If the program does not exist.
        """
        program = await self._get_by_id(str(program_id))
        if not program:
            raise ProgramNotFoundError(f"Program {program_id} not found")

        program.is_active = not program.is_active
        await self._db.commit()

        logger.info("Program %s active=%s", program.id, program.is_active)

        await self._fee_ranges.recompute(program.university_id)

        return await self._reload(program.id)

    async def toggle_featured(self, program_id: str) -> ProgramResponse:
        """Flip ``featured``.

        Raises:
            ProgramNotFoundError: If the program does not exist.
        """
        program = await self._get_by_id(str(program_id))
        if not program:
            raise ProgramNotFoundError(f"Program {program_id} not found")

        program.featured = not program.featured
        await self._db.commit()

        logger.info("Program %s featured=%s", program.id, program.featured)

        return await self._reload(program.id)

    async def list_latest(self, limit: int = 8) -> list[ProgramResponse]:
        """Newest active programs, featured first."""
        stmt = (
            select(Program)
            .options(selectinload(Program.university))
            .where(Program.is_active.is_(True))
            .order_by(Program.featured.desc(), Program.created_at.desc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return [ProgramResponse.model_validate(p) for p in result.scalars().all()]

    async def list_featured(self, limit: int = 8) -> list[ProgramResponse]:
        """Active featured programs, newest first."""
        stmt = (
            select(Program)
            .options(selectinload(Program.university))
            .where(Program.is_active.is_(True), Program.featured.is_(True))
            .order_by(Program.created_at.desc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return [ProgramResponse.model_validate(p) for p in result.scalars().all()]

    async def list_categories(self) -> list[CategoryCount]:
        """Categories that have at least one active program, with counts."""
        stmt = (
            select(Program.category, func.count(Program.id))
            .where(Program.is_active.is_(True))
            .group_by(Program.category)
            .order_by(Program.category.asc())
        )
        result = await self._db.execute(stmt)
        return [CategoryCount(name=name, count=count) for name, count in result.all()]

    async def search(self, query: str, limit: int = 10) -> list[ProgramSummary]:
        """Quick search of active programs by name or category."""
        pattern = f"%{escape_like(query)}%"
        stmt = (
            select(Program)
            .where(
                Program.is_active.is_(True),
                or_(
                    Program.name.ilike(pattern, escape="\\"),
                    Program.category.ilike(pattern, escape="\\"),
                ),
            )
            .order_by(Program.name.asc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return [ProgramSummary.model_validate(p) for p in result.scalars().all()]

    async def count(self, active_only: bool = False) -> int:
        stmt = select(func.count()).select_from(Program)
        if active_only:
            stmt = stmt.where(Program.is_active.is_(True))
        result = await self._db.execute(stmt)
        return result.scalar() or 0

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    async def _require_university(self, university_id: str) -> None:
        stmt = select(University.id).where(University.id == university_id)
        result = await self._db.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise ProgramUniversityNotFoundError(f"University {university_id} not found")

    async def _commit_with_slug(self, slug: str) -> None:
        """Commit, mapping a unique-constraint violation to a slug conflict."""
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise ProgramSlugExistsError(f"Program with slug '{slug}' already exists") from e

    async def _get_by_id(self, program_id: str) -> Program | None:
        """Get program by ID with its university."""
        stmt = (
            select(Program)
            .options(selectinload(Program.university))
            .where(Program.id == program_id)
        )
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _reload(self, program_id: str) -> ProgramResponse:
        """Re-read a program after commit so timestamps and owner are current."""
        stmt = (
            select(Program)
            .options(selectinload(Program.university))
            .where(Program.id == program_id)
            .execution_options(populate_existing=True)
        )
        result = await self._db.execute(stmt)
        program = result.scalar_one_or_none()
        if not program:
            raise ProgramNotFoundError(f"Program {program_id} not found")
        return ProgramResponse.model_validate(program)
