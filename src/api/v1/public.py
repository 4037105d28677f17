# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Public catalog endpoints (no authentication).

This module provides the read side of the site and lead capture:
- GET /universities - Active universities with filtering and pagination
- GET /universities/{slug} - University page with its active programs
- GET /programs - Active programs with filtering and pagination
- GET /programs/{slug} - Program page with related programs
- GET /featured - Landing page content
- GET /featured/universities - Featured universities
- GET /featured/programs - Featured programs
- GET /categories - Program counts per category
- GET /search - Quick search across universities and programs
- POST /enquiry - Submit an enquiry

Only active records are ever returned here.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Request, status

from src.api.dependencies import DbSession, parse_filters
from src.api.middleware.rate_limit import enquiry_limit, limiter
from src.domains.catalog.filters import PROGRAM_LISTING, UNIVERSITY_LISTING
from src.domains.dashboard.service import (
    FEATURED_PROGRAMS_LIMIT,
    FEATURED_UNIVERSITIES_LIMIT,
    DashboardService,
)
from src.domains.enquiry.service import EnquiryService, EnquiryValidationError
from src.domains.program.service import ProgramNotFoundError, ProgramService
from src.domains.university.service import UniversityNotFoundError, UniversityService
from src.models.common import PaginationMeta
from src.models.dashboard import (
    CategoryCount,
    FeaturedResponse,
    ProgramDetailResponse,
    SearchResponse,
    UniversityDetailResponse,
)
from src.models.enquiry import (
    EnquiryAcknowledgement,
    EnquiryCreateRequest,
    EnquirySubmittedResponse,
)
from src.models.program import ProgramListResponse, ProgramResponse
from src.models.university import UniversityListResponse, UniversityResponse

logger = logging.getLogger(__name__)

router = APIRouter()

ENQUIRY_THANKS = "Thank you! Your enquiry has been submitted successfully."


@router.get(
    "/universities",
    response_model=UniversityListResponse,
    summary="List universities",
    description="List active universities with filters and pagination.",
)
async def list_universities(request: Request, db: DbSession) -> UniversityListResponse:
    """List active universities."""
    filters = parse_filters(request, UNIVERSITY_LISTING)
    page = await UniversityService(db).list_universities(filters, public=True)

    return UniversityListResponse(
        items=page.items,
        pagination=PaginationMeta.build(page.total, page.page, page.limit),
    )


@router.get(
    "/universities/{slug}",
    response_model=UniversityDetailResponse,
    summary="Get university",
    description="Get an active university by slug, with its active programs sorted by name.",
)
async def get_university(slug: str, db: DbSession) -> UniversityDetailResponse:
    try:
        return await UniversityService(db).get_public_university(slug)
    except UniversityNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="University not found",
        )


@router.get(
    "/programs",
    response_model=ProgramListResponse,
    summary="List programs",
    description="List active programs with filters and pagination.",
)
async def list_programs(request: Request, db: DbSession) -> ProgramListResponse:
    """List active programs."""
    filters = parse_filters(request, PROGRAM_LISTING)
    page = await ProgramService(db).list_programs(filters, public=True)

    return ProgramListResponse(
        items=page.items,
        pagination=PaginationMeta.build(page.total, page.page, page.limit),
    )


@router.get(
    "/programs/{slug}",
    response_model=ProgramDetailResponse,
    summary="Get program",
    description="Get an active program by slug, with up to four related programs.",
)
async def get_program(slug: str, db: DbSession) -> ProgramDetailResponse:
    try:
        return await ProgramService(db).get_public_program(slug)
    except ProgramNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Program not found",
        )


@router.get(
    "/featured",
    response_model=FeaturedResponse,
    summary="Landing page content",
    description="Featured universities, latest programs and site totals.",
)
async def get_featured(db: DbSession) -> FeaturedResponse:
    return await DashboardService(db).get_featured()


@router.get(
    "/featured/universities",
    response_model=list[UniversityResponse],
    summary="Featured universities",
)
async def list_featured_universities(db: DbSession) -> list[UniversityResponse]:
    return await UniversityService(db).list_featured(limit=FEATURED_UNIVERSITIES_LIMIT)


@router.get(
    "/featured/programs",
    response_model=list[ProgramResponse],
    summary="Featured programs",
)
async def list_featured_programs(db: DbSession) -> list[ProgramResponse]:
    return await ProgramService(db).list_featured(limit=FEATURED_PROGRAMS_LIMIT)


@router.get(
    "/categories",
    response_model=list[CategoryCount],
    summary="Program categories",
    description="Number of active programs per category.",
)
async def list_categories(db: DbSession) -> list[CategoryCount]:
    return await ProgramService(db).list_categories()


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search",
    description="Search active universities and programs. Queries under two characters return nothing.",
)
async def search(
    db: DbSession,
    q: Annotated[str | None, Query(description="Search text")] = None,
    limit: Annotated[int, Query(ge=1, le=50, description="Maximum results per kind")] = 10,
) -> SearchResponse:
    return await DashboardService(db).search(q, limit=limit)


@router.post(
    "/enquiry",
    response_model=EnquirySubmittedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit enquiry",
    description="Submit a contact request about a program or university.",
)
@limiter.limit(enquiry_limit)
async def submit_enquiry(
    request: Request,
    data: EnquiryCreateRequest,
    db: DbSession,
) -> EnquirySubmittedResponse:
    """Submit an enquiry.

    Args:
        request: HTTP request, used for rate limiting.
        data: Contact details and optional program/university references.
        db: Database session.

    Returns:
        Acknowledgement with the stored enquiry's id, name and email.

    Raises:
        HTTPException: 400 if name, email or phone are invalid.
    """
    try:
        enquiry = await EnquiryService(db).submit(data)
    except EnquiryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return EnquirySubmittedResponse(
        message=ENQUIRY_THANKS,
        enquiry=EnquiryAcknowledgement(id=enquiry.id, name=enquiry.name, email=enquiry.email),
    )
