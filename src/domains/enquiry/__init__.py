# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enquiry domain package.

This package provides lead capture and follow-up:
- Public enquiry submission with contact validation
- Admin enquiry management
"""

from src.domains.enquiry.service import (
    EnquiryService,
    EnquiryServiceError,
    EnquiryNotFoundError,
    EnquiryValidationError,
)
from src.domains.enquiry.validation import (
    ContactValidationError,
    normalize_email,
    normalize_phone,
)

__all__ = [
    "EnquiryService",
    "EnquiryServiceError",
    "EnquiryNotFoundError",
    "EnquiryValidationError",
    "ContactValidationError",
    "normalize_email",
    "normalize_phone",
]
