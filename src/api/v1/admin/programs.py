# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Program management API endpoints.

This module provides endpoints for program management:
- GET / - List programs with filtering and pagination
- GET /{program_id} - Get program details
- POST / - Create a program
- PUT /{program_id} - Update a program
- DELETE /{program_id} - Delete a program
- PUT /{program_id}/toggle - Toggle active status
- PUT /{program_id}/featured - Toggle featured flag

Every change to a program's fee, active flag or university refreshes the
owning university's fee range before the response is returned.
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
from src.domains.catalog.filters import PROGRAM_LISTING
from src.domains.program.service import (
    ProgramNotFoundError,
    ProgramService,
    ProgramSlugExistsError,
    ProgramUniversityNotFoundError,
)
from src.models.common import MessageResponse, PaginationMeta
from src.models.program import (
    ProgramCreateRequest,
    ProgramListResponse,
    ProgramResponse,
    ProgramUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_program_service(db: AsyncSession) -> ProgramService:
    """Get program service instance.

    Args:
        db: Database session.

    Returns:
        Configured ProgramService instance.
    """
    return ProgramService(db=db)


def _not_found(program_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Program {program_id} not found",
    )


@router.get(
    "",
    response_model=ProgramListResponse,
    summary="List programs",
    description="List programs, active or not, with filters and pagination.",
)
async def list_programs(
    request: Request,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> ProgramListResponse:
    """List programs.

    Query parameters: ``category``, ``level``, ``mode``, ``university_id``,
    ``min_fee``, ``max_fee``, ``search``, ``featured``, ``page``, ``limit``
    and ``sort``.
    """
    filters = parse_filters(request, PROGRAM_LISTING)
    page = await _get_program_service(db).list_programs(filters)

    return ProgramListResponse(
        items=page.items,
        pagination=PaginationMeta.build(page.total, page.page, page.limit),
    )


@router.get(
    "/{program_id}",
    response_model=ProgramResponse,
    summary="Get program",
    description="Get program details by ID, including its university.",
)
async def get_program(
    program_id: UUID,
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> ProgramResponse:
    """Get program details."""
    try:
        return await _get_program_service(db).get_program(str(program_id))
    except ProgramNotFoundError:
        raise _not_found(program_id)


@router.post(
    "",
    response_model=ProgramResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create program",
    description="Create a program under an existing university.",
)
async def create_program(
    data: ProgramCreateRequest,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> ProgramResponse:
    """Create a new program.

    Args:
        data: Program creation request.
        current_admin: Authenticated superadmin or admin.
        db: Database session.

    Returns:
        Created program with its university summary.

    Raises:
        HTTPException: 404 if the university does not exist, 409 if the
            generated slug collides.
    """
    logger.info(
        "Creating program: name=%s, university=%s, by=%s",
        data.name,
        data.university_id,
        current_admin.id,
    )

    try:
        return await _get_program_service(db).create_program(data)
    except ProgramUniversityNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="University not found",
        )
    except ProgramSlugExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.put(
    "/{program_id}",
    response_model=ProgramResponse,
    summary="Update program",
    description="Partially update a program. Renaming regenerates the slug.",
)
async def update_program(
    program_id: UUID,
    data: ProgramUpdateRequest,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> ProgramResponse:
    """Update a program."""
    try:
        return await _get_program_service(db).update_program(str(program_id), data)
    except ProgramNotFoundError:
        raise _not_found(program_id)
    except ProgramUniversityNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="University not found",
        )
    except ProgramSlugExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.delete(
    "/{program_id}",
    response_model=MessageResponse,
    summary="Delete program",
    description="Delete a program. Requires superadmin.",
)
async def delete_program(
    program_id: UUID,
    current_admin: Superadmin,
    db: DbSession,
) -> MessageResponse:
    """Delete a program."""
    logger.info("Deleting program: %s, by=%s", program_id, current_admin.id)

    try:
        await _get_program_service(db).delete_program(str(program_id))
    except ProgramNotFoundError:
        raise _not_found(program_id)

    return MessageResponse(message="Program deleted successfully")


@router.put(
    "/{program_id}/toggle",
    response_model=ProgramResponse,
    summary="Toggle program status",
    description="Activate or deactivate a program.",
)
async def toggle_program_status(
    program_id: UUID,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> ProgramResponse:
    """Flip the program's active flag."""
    try:
        return await _get_program_service(db).toggle_status(str(program_id))
    except ProgramNotFoundError:
        raise _not_found(program_id)


@router.put(
    "/{program_id}/featured",
    response_model=ProgramResponse,
    summary="Toggle program featured",
    description="Feature or unfeature a program.",
)
async def toggle_program_featured(
    program_id: UUID,
    current_admin: CatalogAdmin,
    db: DbSession,
) -> ProgramResponse:
    """Flip the program's featured flag."""
    try:
        return await _get_program_service(db).toggle_featured(str(program_id))
    except ProgramNotFoundError:
        raise _not_found(program_id)
