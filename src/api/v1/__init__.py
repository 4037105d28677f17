# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.

Modules:
    public: Public catalog, search and enquiry submission (no authentication).
    admin: Back office authentication, catalog management, enquiries, uploads.
"""

from fastapi import APIRouter

from src.api.v1 import public
from src.api.v1.admin import router as admin_router

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Public routes (no authentication required)
router.include_router(public.router, prefix="/public", tags=["Public"])

# Back office routes
router.include_router(admin_router)

__all__ = ["router"]
