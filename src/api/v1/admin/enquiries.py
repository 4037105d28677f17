# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enquiry (lead) management API endpoints.

This module provides endpoints for working the enquiry pipeline:
- GET / - List enquiries with filtering and pagination
- GET /{enquiry_id} - Get enquiry details
- POST / - Record an enquiry on behalf of a prospect
- PUT /{enquiry_id} - Update an enquiry
- PUT /{enquiry_id}/status - Change an enquiry's status
- DELETE /{enquiry_id} - Delete an enquiry

Editors may read and update enquiries; recording and deleting them
requires the superadmin or admin role.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import AuthenticatedAdmin, CatalogAdmin, DbSession, parse_filters
from src.domains.catalog.filters import ENQUIRY_LISTING
from src.domains.enquiry.service import (
    EnquiryNotFoundError,
    EnquiryService,
    EnquiryValidationError,
)
from src.models.common import MessageResponse, PaginationMeta
from src.models.enquiry import (
    AdminEnquiryCreateRequest,
    EnquiryListResponse,
    EnquiryResponse,
    EnquiryStatusUpdateRequest,
    EnquiryUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_enquiry_service(db: AsyncSession) -> EnquiryService:
    return EnquiryService(db=db)


def _not_found(enquiry_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Enquiry {enquiry_id} not found",
    )


def _invalid(error: EnquiryValidationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)


@router.get(
    "",
    response_model=EnquiryListResponse,
    summary="List enquiries",
    description="List enquiries, newest first by default, with filters and pagination.",
)
async def list_enquiries(
    request: Request,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> EnquiryListResponse:
    """List enquiries.

    Query parameters: ``status`` (``all`` for no filter), ``start_date``,
    ``end_date``, ``search``, ``page``, ``limit`` and ``sort``.
    """
    filters = parse_filters(request, ENQUIRY_LISTING)
    page = await _get_enquiry_service(db).list_enquiries(filters)

    return EnquiryListResponse(
        items=page.items,
        pagination=PaginationMeta.build(page.total, page.page, page.limit),
    )


@router.get(
    "/{enquiry_id}",
    response_model=EnquiryResponse,
    summary="Get enquiry",
    description="Get enquiry details with program and university names.",
)
async def get_enquiry(
    enquiry_id: UUID,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> EnquiryResponse:
    """Get enquiry details."""
    try:
        return await _get_enquiry_service(db).get_enquiry(str(enquiry_id))
    except EnquiryNotFoundError:
        raise _not_found(enquiry_id)


@router.post(
    "",
    response_model=EnquiryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create enquiry",
    description="Record an enquiry on behalf of a prospect.",
)
async def create_enquiry(
    data: AdminEnquiryCreateRequest,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> EnquiryResponse:
    """Record an enquiry.

    Raises:
        HTTPException: 400 if contact details or the assignee are invalid.
    """
    try:
        return await _get_enquiry_service(db).create_enquiry(data)
    except EnquiryValidationError as e:
        raise _invalid(e)


@router.put(
    "/{enquiry_id}",
    response_model=EnquiryResponse,
    summary="Update enquiry",
    description="Update status, notes, assignee or contact details of an enquiry.",
)
async def update_enquiry(
    enquiry_id: UUID,
    data: EnquiryUpdateRequest,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> EnquiryResponse:
    """Update an enquiry."""
    try:
        return await _get_enquiry_service(db).update_enquiry(str(enquiry_id), data)
    except EnquiryNotFoundError:
        raise _not_found(enquiry_id)
    except EnquiryValidationError as e:
        raise _invalid(e)


@router.put(
    "/{enquiry_id}/status",
    response_model=EnquiryResponse,
    summary="Update enquiry status",
    description="Move an enquiry to another status, optionally adding notes.",
)
async def update_enquiry_status(
    enquiry_id: UUID,
    data: EnquiryStatusUpdateRequest,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> EnquiryResponse:
    """Change an enquiry's status."""
    try:
        return await _get_enquiry_service(db).update_status(str(enquiry_id), data)
    except EnquiryNotFoundError:
        raise _not_found(enquiry_id)


@router.delete(
    "/{enquiry_id}",
    response_model=MessageResponse,
    summary="Delete enquiry",
    description="Delete an enquiry.",
)
async def delete_enquiry(
    enquiry_id: UUID,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> MessageResponse:
    """Delete an enquiry."""
    logger.info("Deleting enquiry: %s, by=%s", enquiry_id, current_admin.id)

    try:
        await _get_enquiry_service(db).delete_enquiry(str(enquiry_id))
    except EnquiryNotFoundError:
        raise _not_found(enquiry_id)

    return MessageResponse(message="Enquiry deleted successfully")
