# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Common enumerations and response models shared across the API."""

from decimal import Decimal
from enum import Enum
from math import ceil

from pydantic import BaseModel, Field


class UniversityRating(str, Enum):
    """Accreditation grade shown on a university card."""

    A_PLUS_PLUS = "A++"
    A_PLUS = "A+"
    A = "A"
    B_PLUS_PLUS = "B++"
    B_PLUS = "B+"
    B = "B"
    C = "C"
    NOT_RATED = "Not Rated"


class ProgramCategory(str, Enum):
    """Degree or credential family of a program."""

    MBA = "MBA"
    MCA = "MCA"
    BBA = "BBA"
    BCA = "BCA"
    BCOM = "B.Com"
    MCOM = "M.Com"
    BA = "BA"
    MA = "MA"
    BSC = "B.Sc"
    MSC = "M.Sc"
    BTECH = "B.Tech"
    MTECH = "M.Tech"
    PHD = "PhD"
    DIPLOMA = "Diploma"
    CERTIFICATE = "Certificate"
    OTHER = "Other"


class ProgramLevel(str, Enum):
    """Academic level of a program."""

    UNDERGRADUATE = "Undergraduate"
    POSTGRADUATE = "Postgraduate"
    DOCTORATE = "Doctorate"
    DIPLOMA = "Diploma"
    CERTIFICATE = "Certificate"


class StudyMode(str, Enum):
    """Delivery mode of a program."""

    ONLINE = "Online"
    OFFLINE = "Offline"
    HYBRID = "Hybrid"
    DISTANCE = "Distance"


class FeePeriod(str, Enum):
    """Period the program fee is quoted for."""

    TOTAL = "Total"
    PER_YEAR = "Per Year"
    PER_SEMESTER = "Per Semester"
    PER_MONTH = "Per Month"


class EnquirySource(str, Enum):
    """Where an enquiry was captured."""

    WEBSITE = "Website"
    LANDING_PAGE = "Landing Page"
    CONTACT_FORM = "Contact Form"
    PROGRAM_PAGE = "Program Page"
    UNIVERSITY_PAGE = "University Page"
    ENROLLMENT_FORM = "Enrollment Form"
    OTHER = "Other"


class EnquiryStatus(str, Enum):
    """Follow-up status of an enquiry.

    Transitions are not restricted; any status may be set at any time.
    """

    NEW = "New"
    CONTACTED = "Contacted"
    INTERESTED = "Interested"
    NOT_INTERESTED = "Not Interested"
    CONVERTED = "Converted"
    CLOSED = "Closed"


class AdminRole(str, Enum):
    """Administrator role."""

    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    EDITOR = "editor"


class PaginationMeta(BaseModel):
    """Pagination block returned with every paginated listing."""

    total: int = Field(..., ge=0, description="Total matching records")
    page: int = Field(..., ge=1, description="Current page (1-based)")
    limit: int = Field(..., ge=1, description="Page size")
    pages: int = Field(..., ge=0, description="Total number of pages")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        """Build pagination metadata from a total count."""
        return cls(total=total, page=page, limit=limit, pages=ceil(total / limit))


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


def decimal_to_float(value: object) -> object:
    """Coerce Decimal amounts so fee fields serialize as JSON numbers."""
    if isinstance(value, Decimal):
        return float(value)
    return value
