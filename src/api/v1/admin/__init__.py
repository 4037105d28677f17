# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin API endpoints.

This module provides API routes for the back office:
- /admin - Authentication, profile and dashboard stats
- /admin/universities - University management
- /admin/programs - Program management
- /admin/enquiries - Enquiry pipeline
- /admin/uploads - Image and brochure uploads
"""

from fastapi import APIRouter

from src.api.v1.admin.auth import router as auth_router
from src.api.v1.admin.enquiries import router as enquiries_router
from src.api.v1.admin.programs import router as programs_router
from src.api.v1.admin.universities import router as universities_router
from src.api.v1.admin.uploads import router as uploads_router

router = APIRouter(prefix="/admin")

router.include_router(auth_router, tags=["Admin Auth"])
router.include_router(universities_router, prefix="/universities", tags=["Universities"])
router.include_router(programs_router, prefix="/programs", tags=["Programs"])
router.include_router(enquiries_router, prefix="/enquiries", tags=["Enquiries"])
router.include_router(uploads_router, prefix="/uploads", tags=["Uploads"])

__all__ = ["router"]
