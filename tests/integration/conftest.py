# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fixtures for API integration tests.

The full application is built with create_app(); the database session
dependency is overridden with the shared mock session and services are
patched per test. No database server is needed.
"""

from collections.abc import AsyncGenerator, Callable
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.dependencies import get_db, get_jwt_manager
from src.infrastructure.database.models import Admin
from tests.conftest import create_mock_result


@pytest.fixture
def app(mock_db: AsyncMock) -> FastAPI:
    """Application with the database session replaced by mock_db."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield mock_db

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_token() -> Callable[..., str]:
    """Issue tokens signed with the application's key."""

    def _make(admin: Admin, expires_delta: timedelta | None = None) -> str:
        return get_jwt_manager().create_access_token(
            admin.id,
            role=admin.role,
            expires_delta=expires_delta,
        )

    return _make


@pytest.fixture
def login_as(mock_db: AsyncMock, make_token: Callable[..., str]) -> Callable[..., dict[str, str]]:
    """Authenticate requests as ``admin``.

    The admin lookup done by require_admin returns ``admin``. Returns the
    Authorization header to send.
    """

    def _login(admin: Admin) -> dict[str, str]:
        mock_db.execute.return_value = create_mock_result(admin)
        return {"Authorization": f"Bearer {make_token(admin)}"}

    return _login
