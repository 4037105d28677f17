# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enquiry service for lead capture and follow-up.

This module provides the EnquiryService that handles:
- Public enquiry submission with contact validation
- Admin listing, update, status changes and deletion
- Enquiry counts for dashboards

Status transitions are unrestricted; any status can be set at any time.

Example:
    >>> service = EnquiryService(db_session)
    >>> enquiry = await service.submit(request)
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domains.catalog.filters import (
    ENQUIRY_LISTING,
    ListingFilterBuilder,
    ListingFilters,
    Page,
    execute_listing,
)
from src.domains.enquiry.validation import (
    ContactValidationError,
    normalize_email,
    normalize_name,
    normalize_phone,
)
from src.infrastructure.database.models import Admin, Enquiry, Program, University
from src.infrastructure.database.models.base import new_uuid
from src.models.common import EnquiryStatus
from src.models.enquiry import (
    AdminEnquiryCreateRequest,
    EnquiryCreateRequest,
    EnquiryResponse,
    EnquiryStatusUpdateRequest,
    EnquiryUpdateRequest,
)

logger = logging.getLogger(__name__)

RECENT_ENQUIRIES_LIMIT = 5

_CONTACT_NORMALIZERS = {
    "name": normalize_name,
    "email": normalize_email,
    "phone": normalize_phone,
}


class EnquiryServiceError(Exception):
    """Base exception for enquiry service errors."""

    pass


class EnquiryNotFoundError(EnquiryServiceError):
    """Raised when an enquiry is not found."""

    pass


class EnquiryValidationError(EnquiryServiceError):
    """Raised when enquiry contact details are invalid."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class EnquiryService:
    """Service for managing enquiries.

    Attributes:
        _db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the enquiry service.

        Args:
            db: Async database session.
        """
        self._db = db

    async def submit(self, request: EnquiryCreateRequest) -> Enquiry:
        """Validate and persist a public enquiry with status ``New``.

        Program and university references that do not resolve are stored
        as empty rather than rejecting the submission.

        Args:
            request: Public submission.

        Returns:
            The stored enquiry.

        Raises:
            EnquiryValidationError: If name, email or phone are invalid.
                Nothing is persisted in that case.
        """
        contact = self._validate_contact(
            {"name": request.name, "email": request.email, "phone": request.phone}
        )

        enquiry = Enquiry(
            id=new_uuid(),
            **contact,
            message=request.message.strip(),
            program_id=await self._resolve(Program, request.program_id),
            university_id=await self._resolve(University, request.university_id),
            source=request.source.value,
            status=EnquiryStatus.NEW.value,
        )

        self._db.add(enquiry)
        await self._db.commit()

        logger.info("Enquiry submitted: %s (source=%s)", enquiry.id, enquiry.source)

        return enquiry

    async def create_enquiry(self, request: AdminEnquiryCreateRequest) -> EnquiryResponse:
        """Record an enquiry on behalf of a prospect.

        Raises:
            EnquiryValidationError: If contact details are invalid or the
                assignee does not exist.
        """
        contact = self._validate_contact(
            {"name": request.name, "email": request.email, "phone": request.phone}
        )

        enquiry = Enquiry(
            id=new_uuid(),
            **contact,
            message=request.message.strip(),
            program_id=await self._resolve(Program, request.program_id),
            university_id=await self._resolve(University, request.university_id),
            source=request.source.value,
            status=request.status.value,
            notes=request.notes,
            assigned_to=await self._require_assignee(request.assigned_to),
        )

        self._db.add(enquiry)
        await self._db.commit()

        logger.info("Enquiry created by admin: %s", enquiry.id)

        return await self._reload(enquiry.id)

    async def list_enquiries(self, filters: ListingFilters) -> Page[EnquiryResponse]:
        """List enquiries matching the filters, newest first by default."""
        query = ListingFilterBuilder(ENQUIRY_LISTING).build(filters)
        page = await execute_listing(self._db, query)
        page.items = [EnquiryResponse.model_validate(item) for item in page.items]
        return page

    async def get_enquiry(self, enquiry_id: str) -> EnquiryResponse:
        """Get an enquiry by ID.

        Raises:
            EnquiryNotFoundError: If the enquiry does not exist.
        """
        enquiry = await self._get_by_id(str(enquiry_id))
        if not enquiry:
            raise EnquiryNotFoundError(f"Enquiry {enquiry_id} not found")
        return EnquiryResponse.model_validate(enquiry)

    async def update_enquiry(
        self,
        enquiry_id: str,
        request: EnquiryUpdateRequest,
    ) -> EnquiryResponse:
        """Apply a partial update.

        Changed contact fields go through the same validation as a
        submission.

        Raises:
            EnquiryNotFoundError: If the enquiry does not exist.
            EnquiryValidationError: If contact details are invalid.
        """
        enquiry = await self._get_by_id(str(enquiry_id))
        if not enquiry:
            raise EnquiryNotFoundError(f"Enquiry {enquiry_id} not found")

        changes = request.model_dump(exclude_unset=True, mode="json")

        contact_changes = {
            key: value
            for key, value in changes.items()
            if key in _CONTACT_NORMALIZERS and value is not None
        }
        changes.update(self._validate_contact(contact_changes))

        if "assigned_to" in changes:
            changes["assigned_to"] = await self._require_assignee(changes["assigned_to"])
        if "program_id" in changes:
            changes["program_id"] = await self._resolve(Program, changes["program_id"])
        if "university_id" in changes:
            changes["university_id"] = await self._resolve(University, changes["university_id"])

        for field_name, value in changes.items():
            if value is None and field_name in ("name", "email", "phone", "source", "status"):
                continue
            if field_name == "message" and value is None:
                value = ""
            setattr(enquiry, field_name, value)

        await self._db.commit()

        logger.info("Enquiry updated: %s", enquiry.id)

        return await self._reload(enquiry.id)

    async def update_status(
        self,
        enquiry_id: str,
        request: EnquiryStatusUpdateRequest,
    ) -> EnquiryResponse:
        """Set the status, and optionally notes, of an enquiry.

        Raises:
            EnquiryNotFoundError: If the enquiry does not exist.
        """
        enquiry = await self._get_by_id(str(enquiry_id))
        if not enquiry:
            raise EnquiryNotFoundError(f"Enquiry {enquiry_id} not found")

        previous = enquiry.status
        enquiry.status = request.status.value
        if request.notes is not None:
            enquiry.notes = request.notes

        await self._db.commit()

        logger.info("Enquiry %s status: %s -> %s", enquiry.id, previous, enquiry.status)

        return await self._reload(enquiry.id)

    async def delete_enquiry(self, enquiry_id: str) -> None:
        """Delete an enquiry.

        Raises:
            EnquiryNotFoundError: If the enquiry does not exist.
        """
        enquiry = await self._get_by_id(str(enquiry_id))
        if not enquiry:
            raise EnquiryNotFoundError(f"Enquiry {enquiry_id} not found")

        await self._db.delete(enquiry)
        await self._db.commit()

        logger.info("Enquiry deleted: %s", enquiry_id)

    async def list_recent(self, limit: int = RECENT_ENQUIRIES_LIMIT) -> list[EnquiryResponse]:
        stmt = (
            select(Enquiry)
            .options(selectinload(Enquiry.program), selectinload(Enquiry.university))
            .order_by(Enquiry.created_at.desc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return [EnquiryResponse.model_validate(e) for e in result.scalars().all()]

    async def count_by_status(self) -> dict[str, int]:
        """Count enquiries per status. Statuses without enquiries are omitted."""
        stmt = select(Enquiry.status, func.count(Enquiry.id)).group_by(Enquiry.status)
        result = await self._db.execute(stmt)
        return {status: count for status, count in result.all()}

    async def count(self, status: EnquiryStatus | None = None) -> int:
        stmt = select(func.count()).select_from(Enquiry)
        if status is not None:
            stmt = stmt.where(Enquiry.status == status.value)
        result = await self._db.execute(stmt)
        return result.scalar() or 0

    # =========================================================================
    # Private Helper Methods
    # =========================================================================

    @staticmethod
    def _validate_contact(fields: dict[str, Any]) -> dict[str, str]:
        cleaned: dict[str, str] = {}
        for field_name, value in fields.items():
            try:
                cleaned[field_name] = _CONTACT_NORMALIZERS[field_name](value)
            except ContactValidationError as e:
                raise EnquiryValidationError(e.field, e.message) from e
        return cleaned

    async def _resolve(self, model: type, reference: Any) -> str | None:
        """Return the reference if the target row exists, otherwise None."""
        if not reference:
            return None
        reference = str(reference)
        stmt = select(model.id).where(model.id == reference)
        result = await self._db.execute(stmt)
        if result.scalar_one_or_none() is None:
            logger.info("Dropping unknown %s reference: %s", model.__tablename__, reference)
            return None
        return reference

    async def _require_assignee(self, admin_id: Any) -> str | None:
        if not admin_id:
            return None
        admin_id = str(admin_id)
        stmt = select(Admin.id).where(Admin.id == admin_id)
        result = await self._db.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise EnquiryValidationError("assigned_to", f"Admin {admin_id} not found")
        return admin_id

    async def _get_by_id(self, enquiry_id: str) -> Enquiry | None:
        stmt = (
            select(Enquiry)
            .options(selectinload(Enquiry.program), selectinload(Enquiry.university))
            .where(Enquiry.id == enquiry_id)
        )
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _reload(self, enquiry_id: str) -> EnquiryResponse:
        stmt = (
            select(Enquiry)
            .options(selectinload(Enquiry.program), selectinload(Enquiry.university))
            .where(Enquiry.id == enquiry_id)
            .execution_options(populate_existing=True)
        )
        result = await self._db.execute(stmt)
        enquiry = result.scalar_one_or_none()
        if not enquiry:
            raise EnquiryNotFoundError(f"Enquiry {enquiry_id} not found")
        return EnquiryResponse.model_validate(enquiry)
