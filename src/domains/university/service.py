# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University service for catalog management.

This module provides the UniversityService that handles:
- University CRUD operations with slug uniqueness
- Cascading delete of a university's programs
- Admin and public listings
- Public detail pages and quick search

Example:
    >>> service = UniversityService(db_session)
    >>> university = await service.create_university(request)
    >>> page = await service.list_universities(filters, public=True)
"""

import logging
from decimal import Decimal

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.catalog.filters import (
    UNIVERSITY_LISTING,
    ListingFilterBuilder,
    ListingFilters,
    Page,
    escape_like,
    execute_listing,
)
from src.infrastructure.database.models import Program, University
from src.infrastructure.database.models.base import new_uuid
from src.models.dashboard import UniversityDetailResponse
from src.models.program import ProgramSummary
from src.models.university import (
    UniversityCreateRequest,
    UniversityResponse,
    UniversitySummary,
    UniversityUpdateRequest,
)
from src.utils.slug import slugify

logger = logging.getLogger(__name__)

_NON_NULLABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "location",
        "rating",
        "logo",
        "banner",
        "accreditations",
        "approvals",
        "facilities",
        "highlights",
        "featured",
        "is_active",
    }
)


class UniversityServiceError(Exception):
    """Base exception for university service errors."""

    pass


class UniversityNotFoundError(UniversityServiceError):
    """Raised when a university is not found."""

    pass


class UniversitySlugExistsError(UniversityServiceError):
    """Raised when a university slug is already taken."""

    pass


class UniversityValidationError(UniversityServiceError):
    """Raised when university data cannot be accepted."""

    pass


class UniversityService:
    """Service for managing universities.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the university service.

        Args:
            db: Async database session.
        """
        self._db = db

    async def list_universities(
        self,
        filters: ListingFilters,
        public: bool = False,
    ) -> Page[UniversityResponse]:
        """List universities matching the filters.

        Args:
            filters: Parsed listing filters.
            public: Restrict to active universities.

        Returns:
            Page of university responses.
        """
        query = ListingFilterBuilder(UNIVERSITY_LISTING).build(filters, public=public)
        page = await execute_listing(self._db, query)
        page.items = [UniversityResponse.model_validate(item) for item in page.items]
        return page

    async def get_university(self, university_id: str) -> UniversityResponse:
        """Get a university by ID.

        Raises:
            UniversityNotFoundError: If the university does not exist.
        """
        university = await self._get_by_id(str(university_id))
        if not university:
            raise UniversityNotFoundError(f"University {university_id} not found")
        return UniversityResponse.model_validate(university)

    async def get_public_university(self, slug: str) -> UniversityDetailResponse:
        """Get an active university by slug with its active programs.

        Args:
            slug: University slug.

        Returns:
            University detail with program summaries sorted by name.

        Raises:
            UniversityNotFoundError: If missing or inactive.
        """
        stmt = select(University).where(
            University.slug == slug,
            University.is_active.is_(True),
        )
        result = await self._db.execute(stmt)
        university = result.scalar_one_or_none()
        if not university:
            raise UniversityNotFoundError(f"University '{slug}' not found")

        programs_stmt = (
            select(Program)
            .where(
                Program.university_id == university.id,
                Program.is_active.is_(True),
            )
            .order_by(Program.name.asc())
        )
        programs_result = await self._db.execute(programs_stmt)
        programs = [
            ProgramSummary.model_validate(program)
            for program in programs_result.scalars().all()
        ]

        base = UniversityResponse.model_validate(university)
        return UniversityDetailResponse(**base.model_dump(), programs=programs)

    async def create_university(self, request: UniversityCreateRequest) -> UniversityResponse:
        """Create a new university.

        The slug is normalized from ``request.slug`` or, when absent, from
        the name. The fee range starts at (0, 0).

        Args:
            request: University creation request.

        Returns:
            Created university.

        Raises:
            UniversitySlugExistsError: If the slug is taken.
            UniversityValidationError: If no usable slug can be derived.
        """
        slug = self._normalize_slug(request.slug or request.name)

        existing = await self._get_by_slug(slug)
        if existing:
            raise UniversitySlugExistsError(f"University with slug '{slug}' already exists")

        university = University(
            id=new_uuid(),
            slug=slug,
            min_fee=Decimal("0"),
            max_fee=Decimal("0"),
            **request.model_dump(exclude={"slug"}, mode="json"),
        )

        self._db.add(university)
        await self._commit_with_slug(slug)
        await self._db.refresh(university)

        logger.info("University created: %s (slug=%s)", university.id, university.slug)

        return UniversityResponse.model_validate(university)

    async def update_university(
        self,
        university_id: str,
        request: UniversityUpdateRequest,
    ) -> UniversityResponse:
        """Apply a partial update to a university.

        The slug only changes when one is supplied; it is normalized and
        re-checked for uniqueness. Renaming keeps the existing slug.

        Raises:
            UniversityNotFoundError: If the university does not exist.
            UniversitySlugExistsError: If the new slug is taken.
        """
        university = await self._get_by_id(str(university_id))
        if not university:
            raise UniversityNotFoundError(f"University {university_id} not found")

        changes = request.model_dump(exclude_unset=True, exclude={"slug"}, mode="json")

        new_slug = self._normalize_slug(request.slug) if request.slug else university.slug

        if new_slug != university.slug:
            existing = await self._get_by_slug(new_slug)
            if existing and existing.id != university.id:
                raise UniversitySlugExistsError(
                    f"University with slug '{new_slug}' already exists"
                )
            university.slug = new_slug

        for field_name, value in changes.items():
            if value is None and field_name in _NON_NULLABLE_FIELDS:
                continue
            setattr(university, field_name, value)

        await self._commit_with_slug(new_slug)
        await self._db.refresh(university)

        logger.info("University updated: %s", university.id)

        return UniversityResponse.model_validate(university)

    async def delete_university(self, university_id: str) -> int:
        """Delete a university and all of its programs.

        Args:
            university_id: University identifier.

        Returns:
            Number of programs removed.

        Raises:
            UniversityNotFoundError: If the university does not exist.
        """
        university = await self._get_by_id(str(university_id))
        if not university:
            raise UniversityNotFoundError(f"University {university_id} not found")

        result = await self._db.execute(
            delete(Program).where(Program.university_id == university.id)
        )
        programs_deleted = result.rowcount or 0

        await self._db.delete(university)
        await self._db.commit()

        logger.info(
            "University deleted: %s (programs_deleted=%s)",
            university_id,
            programs_deleted,
        )
        return programs_deleted

    async def toggle_status(self, university_id: str) -> UniversityResponse:
        """Flip ``is_active``.

        Raises:
            UniversityNotFoundError: If the university does not exist.
        """
        university = await self._get_by_id(str(university_id))
        if not university:
            raise UniversityNotFoundError(f"University {university_id} not found")

        university.is_active = not university.is_active
        await self._db.commit()
        await self._db.refresh(university)

        logger.info("University %s active=%s", university.id, university.is_active)
        return UniversityResponse.model_validate(university)

    async def toggle_featured(self, university_id: str) -> UniversityResponse:
        """Flip ``featured``.

        Raises:
            UniversityNotFoundError: If the university does not exist.
        """
        university = await self._get_by_id(str(university_id))
        if not university:
            raise UniversityNotFoundError(f"University {university_id} not found")

        university.featured = not university.featured
        await self._db.commit()
        await self._db.refresh(university)

        logger.info("University %s featured=%s", university.id, university.featured)
        return UniversityResponse.model_validate(university)

    async def list_featured(self, limit: int = 6) -> list[UniversityResponse]:
        """Active featured universities, best ranked first."""
        stmt = (
            select(University)
            .where(University.is_active.is_(True), University.featured.is_(True))
            .order_by(University.ranking.asc().nulls_last(), University.name.asc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return [UniversityResponse.model_validate(u) for u in result.scalars().all()]

    async def search(self, query: str, limit: int = 10) -> list[UniversitySummary]:
        """Quick search of active universities by name or location."""
        pattern = f"%{escape_like(query)}%"
        stmt = (
            select(University)
            .where(
                University.is_active.is_(True),
                or_(
                    University.name.ilike(pattern, escape="\\"),
                    University.location.ilike(pattern, escape="\\"),
                ),
            )
            .order_by(University.name.asc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return [UniversitySummary.model_validate(u) for u in result.scalars().all()]

    async def count(self, active_only: bool = False) -> int:
        stmt = select(func.count()).select_from(University)
        if active_only:
            stmt = stmt.where(University.is_active.is_(True))
        result = await self._db.execute(stmt)
        return result.scalar() or 0

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    @staticmethod
    def _normalize_slug(value: str) -> str:
        slug = slugify(value)
        if not slug:
            raise UniversityValidationError("Slug must contain letters or digits")
        return slug

    async def _commit_with_slug(self, slug: str) -> None:
        """Commit, mapping a unique-constraint race to a slug conflict."""
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise UniversitySlugExistsError(
                f"University with slug '{slug}' already exists"
            ) from e

    async def _get_by_id(self, university_id: str) -> University | None:
        """Get university by ID."""
        stmt = select(University).where(University.id == university_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _get_by_slug(self, slug: str) -> University | None:
        """Get university by slug."""
        stmt = select(University).where(University.slug == slug)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()
