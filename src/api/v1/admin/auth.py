# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin authentication endpoints.

This module provides authentication endpoints for administrators:
- POST /login - Authenticate and get an access token
- POST /register - Create an administrator (superadmin only)
- GET /me - Current admin profile
- GET /verify - Check the presented token
- PUT /password - Change own password
- GET /stats - Dashboard statistics
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import (
    AuthenticatedAdmin,
    DbSession,
    Superadmin,
    get_db,
    get_jwt_manager,
)
from src.api.middleware.rate_limit import limiter, login_limit
from src.domains.auth.jwt import JWTManager
from src.domains.auth.service import (
    AccountInactiveError,
    AdminAuthService,
    AdminEmailExistsError,
    AdminNotFoundError,
    InvalidCredentialsError,
)
from src.domains.dashboard.service import DashboardService
from src.models.admin import (
    AdminResponse,
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    RegisterRequest,
    TokenVerifyResponse,
)
from src.models.common import MessageResponse
from src.models.dashboard import DashboardStatsResponse

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> AdminAuthService:
    """Get AdminAuthService instance."""
    return AdminAuthService(db, jwt_manager)


async def _load_admin(auth_service: AdminAuthService, admin_id: str) -> AdminResponse:
    admin = await auth_service.get_admin(admin_id)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin not found",
        )
    return AdminResponse.model_validate(admin)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Admin login",
    description="Authenticate an administrator and get an access token.",
)
@limiter.limit(login_limit)
async def login(
    request: Request,
    data: LoginRequest,
    auth_service: AdminAuthService = Depends(get_auth_service),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> LoginResponse:
    """Authenticate an administrator.

    Args:
        request: HTTP request, used for rate limiting.
        data: Login credentials.
        auth_service: Admin auth service.
        jwt_manager: Token manager, for the token lifetime.

    Returns:
        LoginResponse with the token and admin profile.

    Raises:
        HTTPException: 401 on wrong credentials or a disabled account.
    """
    try:
        token, admin = await auth_service.login(email=data.email, password=data.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    except AccountInactiveError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is disabled",
        )

    return LoginResponse(
        token=token,
        expires_in=jwt_manager.expires_in,
        user=AdminResponse.model_validate(admin),
    )


@router.post(
    "/register",
    response_model=AdminResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register admin",
    description="Create a new administrator. Requires superadmin.",
)
async def register(
    data: RegisterRequest,
    current_admin: Superadmin,
    auth_service: AdminAuthService = Depends(get_auth_service),
) -> AdminResponse:
    """Create a new administrator."""
    logger.info(
        "Registering admin: email=%s, role=%s, by=%s",
        data.email,
        data.role.value,
        current_admin.id,
    )

    try:
        admin = await auth_service.register(data)
    except AdminEmailExistsError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    return AdminResponse.model_validate(admin)


@router.get(
    "/me",
    response_model=AdminResponse,
    summary="Current admin",
    description="Get the authenticated administrator's profile.",
)
async def get_me(
    current_admin: AuthenticatedAdmin,
    auth_service: AdminAuthService = Depends(get_auth_service),
) -> AdminResponse:
    """Get the authenticated administrator's profile."""
    return await _load_admin(auth_service, current_admin.id)


@router.get(
    "/verify",
    response_model=TokenVerifyResponse,
    summary="Verify token",
    description="Check that the presented token is valid and the account active.",
)
async def verify_token(
    current_admin: AuthenticatedAdmin,
    auth_service: AdminAuthService = Depends(get_auth_service),
) -> TokenVerifyResponse:
    """Verify the presented token.

    Reaching this handler means the access gate accepted the token.
    """
    return TokenVerifyResponse(
        valid=True,
        user=await _load_admin(auth_service, current_admin.id),
    )


@router.put(
    "/password",
    response_model=MessageResponse,
    summary="Change password",
    description="Change the authenticated administrator's password.",
)
async def change_password(
    data: PasswordChangeRequest,
    current_admin: AuthenticatedAdmin,
    auth_service: AdminAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Change own password after confirming the current one."""
    try:
        await auth_service.change_password(
            admin_id=current_admin.id,
            current_password=data.current_password,
            new_password=data.new_password,
        )
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )
    except AdminNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Admin not found",
        )

    return MessageResponse(message="Password updated successfully")


@router.get(
    "/stats",
    response_model=DashboardStatsResponse,
    summary="Dashboard statistics",
    description="Catalog counts, enquiries by status and the latest enquiries.",
)
async def get_stats(
    current_admin: AuthenticatedAdmin,
    db: DbSession,
) -> DashboardStatsResponse:
    """Get dashboard statistics."""
    return await DashboardService(db).get_admin_stats()
