# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (mocked database session)
- Integration tests (FastAPI app with overridden dependencies)
"""

import os
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Test environment, applied before any application module reads settings.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("API_RUN_MIGRATIONS", "false")
os.environ.setdefault("UPLOAD_DIRECTORY", tempfile.mkdtemp(prefix="edufolio-uploads-"))

import pytest
from pydantic import SecretStr

from src.infrastructure.database.models import Admin, Enquiry, Program, University
from src.models.common import (
    AdminRole,
    EnquirySource,
    EnquiryStatus,
    FeePeriod,
    ProgramCategory,
    ProgramLevel,
    StudyMode,
    UniversityRating,
)


# =============================================================================
# Database Fixtures
# =============================================================================


def create_mock_result(value: Any = None, values: list[Any] | None = None) -> MagicMock:
    """Create a mock SQLAlchemy result.

    Args:
        value: Returned by scalar_one_or_none() and scalar().
        values: Returned by scalars().all().

    Returns:
        Mock result object.
    """
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar.return_value = value
    result.scalars.return_value.all.return_value = values or []
    result.all.return_value = values or []
    return result


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create a mock async database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.add_all = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    db.get = AsyncMock()
    return db


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def jwt_settings() -> MagicMock:
    """Create mock JWT settings."""
    settings = MagicMock()
    settings.secret_key = SecretStr("test-secret-key-for-testing-only")
    settings.algorithm = "HS256"
    settings.expire_minutes = 60
    return settings


@pytest.fixture
def upload_settings(tmp_path: Any) -> MagicMock:
    """Create mock upload settings writing into a temporary directory."""
    settings = MagicMock()
    settings.directory = str(tmp_path / "uploads")
    settings.url_path = "/uploads"
    settings.max_size_bytes = 1024
    settings.max_files = 3
    settings.allowed_extensions = ["jpeg", "jpg", "png", "gif", "webp", "svg", "pdf"]
    return settings


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (in-process app)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Sample Data Fixtures
# =============================================================================

SAMPLE_TIMESTAMP = datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_admin() -> Admin:
    """Sample active superadmin (password hash is not a real bcrypt hash)."""
    return Admin(
        id=str(uuid4()),
        name="Admin",
        email="admin@edufolio.com",
        password="not-a-bcrypt-hash",
        role=AdminRole.SUPERADMIN.value,
        is_active=True,
        last_login=None,
        created_at=SAMPLE_TIMESTAMP,
        updated_at=SAMPLE_TIMESTAMP,
    )


@pytest.fixture
def sample_university() -> University:
    """Sample active university."""
    return University(
        id=str(uuid4()),
        name="Amity University Online",
        slug="amity-university-online",
        short_name="Amity",
        logo="",
        banner="",
        description="Online degrees from Amity.",
        established_year=2005,
        location="Noida, India",
        address=None,
        website="https://amityonline.com",
        email="info@amityonline.com",
        phone="+91 120 4392000",
        rating=UniversityRating.A_PLUS.value,
        accreditations=["UGC", "AICTE"],
        approvals=["UGC-DEB"],
        facilities=["Digital library"],
        highlights=[],
        min_fee=Decimal("150000"),
        max_fee=Decimal("350000"),
        featured=False,
        ranking=32,
        is_active=True,
        created_at=SAMPLE_TIMESTAMP,
        updated_at=SAMPLE_TIMESTAMP,
    )


@pytest.fixture
def sample_program(sample_university: University) -> Program:
    """Sample active program belonging to sample_university."""
    return Program(
        id=str(uuid4()),
        university_id=sample_university.id,
        university=sample_university,
        name="Online MBA",
        slug="online-mba-k3x9q",
        category=ProgramCategory.MBA.value,
        level=ProgramLevel.POSTGRADUATE.value,
        duration="2 Years",
        mode=StudyMode.ONLINE.value,
        fee=Decimal("175000"),
        fee_period=FeePeriod.TOTAL.value,
        description="Two year MBA.",
        eligibility="Graduation",
        image="",
        brochure_url="",
        youtube_url="",
        syllabus=[],
        highlights=[],
        career_options=[],
        specializations=["Finance", "Marketing"],
        semesters=4,
        credits=80,
        featured=False,
        ranking=None,
        is_active=True,
        meta_title=None,
        meta_description=None,
        created_at=SAMPLE_TIMESTAMP,
        updated_at=SAMPLE_TIMESTAMP,
    )


@pytest.fixture
def sample_enquiry(sample_program: Program) -> Enquiry:
    """Sample new enquiry about sample_program."""
    return Enquiry(
        id=str(uuid4()),
        name="Priya Sharma",
        email="priya@example.com",
        phone="+91 98765 43210",
        message="Please share fee details.",
        program_id=sample_program.id,
        program=sample_program,
        university_id=sample_program.university_id,
        university=sample_program.university,
        source=EnquirySource.WEBSITE.value,
        status=EnquiryStatus.NEW.value,
        notes=None,
        assigned_to=None,
        created_at=SAMPLE_TIMESTAMP,
        updated_at=SAMPLE_TIMESTAMP,
    )
