# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""University management API endpoints.

This module provides endpoints for university management:
- GET / - List universities with filtering and pagination
- GET /{university_id} - Get university details
- POST / - Create a university
- PUT /{university_id} - Update a university
- DELETE /{university_id} - Delete a university and its programs
- PUT /{university_id}/toggle - Toggle active status
- PUT /{university_id}/featured - Toggle featured flag

Any authenticated admin may read. Creating, updating and toggling
require the superadmin or admin role; deleting requires superadmin.

Example:
    POST /api/v1/admin/universities
    {
        "name": "Amity University Online",
        "description": "UGC-entitled online degrees",
        "location": "Noida, Uttar Pradesh"
    }
"""

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import (
    AuthenticatedAdmin,
    CatalogAdmin,
    DbSession,
    Superadmin,
    parse_filters,
)
from src.domains.catalog.filters import UNIVERSITY_LISTING
from src.domains.university.service import (
    UniversityNotFoundError,
    UniversityService,
    UniversitySlugExistsError,
    UniversityValidationError,
)
from src.models.common import PaginationMeta
from src.models.university import (
    UniversityCreateRequest,
    UniversityDeleteResponse,
    UniversityListResponse,
    UniversityResponse,
    UniversityUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_university_service(db: AsyncSession) -> UniversityService:
    """Get university service instance.

    Args:
        db: Database session.

    Returns:
        Configured UniversityService instance.
    """
    return UniversityService(db=db)


def _not_found(university_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"University {university_id} not found",
    )


@router.get(
    "",
    response_model=UniversityListResponse,
    summary="List universities",
    description="List universities, active or not, with filters and pagination.",
)
async def list_universities(
    request: Request,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> UniversityListResponse:
    """List universities.

    Query parameters: ``search``, ``rating``, ``featured``, ``min_fee``,
    ``max_fee``, ``page``, ``limit`` and ``sort``.
    """
    filters = parse_filters(request, UNIVERSITY_LISTING)
    page = await _get_university_service(db).list_universities(filters)

    return UniversityListResponse(
        items=page.items,
        pagination=PaginationMeta.build(page.total, page.page, page.limit),
    )


@router.get(
    "/{university_id}",
    response_model=UniversityResponse,
    summary="Get university",
    description="Get university details by ID.",
)
async def get_university(
    university_id: UUID,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> UniversityResponse:
    """Get university details."""
    try:
        return await _get_university_service(db).get_university(str(university_id))
    except UniversityNotFoundError:
        raise _not_found(university_id)


@router.post(
    "",
    response_model=UniversityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create university",
    description="Create a university. The slug defaults to the normalized name.",
)
async def create_university(
    data: UniversityCreateRequest,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> UniversityResponse:
    """Create a new university.

    Args:
        data: University creation request.
        current_admin: Authenticated superadmin or admin.
        db: Database session.

    Returns:
        Created university.

    Raises:
        HTTPException: 409 if the slug is taken, 400 if no slug can be derived.
    """
    logger.info("Creating university: name=%s, by=%s", data.name, current_admin.id)

    try:
        return await _get_university_service(db).create_university(data)
    except UniversitySlugExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except UniversityValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put(
    "/{university_id}",
    response_model=UniversityResponse,
    summary="Update university",
    description="Partially update a university. A new slug is re-checked for uniqueness.",
)
async def update_university(
    university_id: UUID,
    data: UniversityUpdateRequest,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> UniversityResponse:
    """Update a university."""
    try:
        return await _get_university_service(db).update_university(str(university_id), data)
    except UniversityNotFoundError:
        raise _not_found(university_id)
    except UniversitySlugExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except UniversityValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete(
    "/{university_id}",
    response_model=UniversityDeleteResponse,
    summary="Delete university",
    description="Delete a university together with all of its programs. Requires superadmin.",
)
async def delete_university(
    university_id: UUID,
    current_admin: Superadmin,
    db: DbSession,
) -> UniversityDeleteResponse:
    """Delete a university and its programs."""
    logger.info("Deleting university: %s, by=%s", university_id, current_admin.id)

    try:
        programs_deleted = await _get_university_service(db).delete_university(
            str(university_id)
        )
    except UniversityNotFoundError:
        raise _not_found(university_id)

    return UniversityDeleteResponse(
        message="University and associated programs deleted successfully",
        programs_deleted=programs_deleted,
    )


@router.put(
    "/{university_id}/toggle",
    response_model=UniversityResponse,
    summary="Toggle university status",
    description="Activate or deactivate a university.",
)
async def toggle_university_status(
    university_id: UUID,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> UniversityResponse:
    """Flip the university's active flag."""
    try:
        return await _get_university_service(db).toggle_status(str(university_id))
    except UniversityNotFoundError:
        raise _not_found(university_id)


@router.put(
    "/{university_id}/featured",
    response_model=UniversityResponse,
    summary="Toggle university featured",
    description="Feature or unfeature a university on the landing page.",
)
async def toggle_university_featured(
    university_id: UUID,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> UniversityResponse:
    """Flip the university's featured flag."""
    try:
        return await _get_university_service(db).toggle_featured(str(university_id))
    except UniversityNotFoundError:
        raise _not_found(university_id)
