# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Resolve the authenticated admin and enforce roles
- Get service instances

Example:
    @router.get("/universities")
    async def list_universities(
        db: AsyncSession = Depends(get_db),
        admin: CurrentAdmin = Depends(require_admin),
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import (
    AUTH_FAILURE_DETAILS,
    AuthFailure,
    CurrentAdmin,
)
from src.core.config import get_settings
from src.domains.auth.jwt import JWTManager
from src.domains.auth.service import AdminAuthService
from src.domains.catalog.filters import (
    InvalidFilterError,
    ListingFilters,
    ListingTarget,
    parse_listing_filters,
)
from src.domains.upload.service import UploadService
from src.infrastructure.database.connection import (
    close_database,
    get_session,
    init_database,
)
from src.models.common import AdminRole

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection pool."""
    await init_database(get_settings())


async def close_db() -> None:
    """Close the database connection pool."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for one request.

    Yields:
        AsyncSession bound to the shared engine.
    """
    async with get_session() as session:
        yield session


def get_jwt_manager() -> JWTManager:
    return JWTManager(get_settings().jwt)


def get_upload_service() -> UploadService:
    return UploadService(get_settings().upload)


# =========================================================================
# Authentication Dependencies
# =========================================================================


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_admin(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> CurrentAdmin:
    """Require an authenticated, active administrator.

    Uses the outcome recorded by AuthMiddleware and re-reads the admin so
    that deleted or disabled accounts lose access immediately.

    Args:
        request: HTTP request.
        db: Database session.

    Returns:
        CurrentAdmin, also stored on ``request.state.admin``.

    Raises:
        HTTPException: 401 for a missing, malformed, expired or invalid
            token or an unknown admin; 403 for a disabled admin.
    """
    failure = getattr(request.state, "auth_failure", AuthFailure.MISSING)
    payload = getattr(request.state, "token_payload", None)
    if failure is not None or payload is None:
        raise _unauthorized(AUTH_FAILURE_DETAILS.get(failure, "Not authenticated"))

    service = AdminAuthService(db, get_jwt_manager())
    admin = await service.get_admin(payload.sub)
    if admin is None:
        logger.info("Token for unknown admin: %s", payload.sub)
        raise _unauthorized("Admin not found")

    if not admin.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled",
        )

    current = CurrentAdmin.from_model(admin)
    request.state.admin = current
    return current


class RequireRole:
    """Dependency for requiring specific roles.

    Example:
        @router.delete("/{university_id}")
        async def delete_university(
            admin: CurrentAdmin = Depends(RequireRole("superadmin")),
        ):
            ...
    """

    def __init__(self, *roles: str | AdminRole) -> None:
        """Initialize role requirement.

        Args:
            roles: Allowed role codes (any of these).
        """
        self.roles = tuple(
            role.value if isinstance(role, AdminRole) else role for role in roles
        )

    async def __call__(
        self,
        admin: CurrentAdmin = Depends(require_admin),
    ) -> CurrentAdmin:
        """Check roles and return the admin.

        Raises:
            HTTPException: 403 if the admin's role is not allowed.
        """
        if not admin.has_any_role(*self.roles):
            logger.info(
                "Role denied: admin=%s role=%s required=%s",
                admin.id,
                admin.role,
                ",".join(self.roles),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {', '.join(self.roles)}",
            )
        return admin


require_superadmin = RequireRole(AdminRole.SUPERADMIN)
require_catalog_admin = RequireRole(AdminRole.SUPERADMIN, AdminRole.ADMIN)


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DbSession = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedAdmin = Annotated[CurrentAdmin, Depends(require_admin)]
CatalogAdmin = Annotated[CurrentAdmin, Depends(require_catalog_admin)]
Superadmin = Annotated[CurrentAdmin, Depends(require_superadmin)]


# =========================================================================
# Listing Query Parameters
# =========================================================================


def parse_filters(request: Request, target: ListingTarget) -> ListingFilters:
    """Parse listing query parameters for ``target``.

    Raises:
        HTTPException: 400 naming the offending parameter.
    """
    try:
        return parse_listing_filters(request.query_params, target)
    except InvalidFilterError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
