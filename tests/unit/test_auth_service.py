# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for AdminAuthService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import (
    AccountInactiveError,
    AdminAuthService,
    AdminEmailExistsError,
    AdminNotFoundError,
    InvalidCredentialsError,
)
from src.infrastructure.database.models import Admin
from src.models.admin import RegisterRequest
from tests.conftest import create_mock_result


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_manager(jwt_settings: MagicMock) -> JWTManager:
    return JWTManager(jwt_settings)


@pytest.fixture
def service(
    mock_db: AsyncMock,
    jwt_manager: JWTManager,
    hasher: PasswordHasher,
) -> AdminAuthService:
    return AdminAuthService(db=mock_db, jwt_manager=jwt_manager, hasher=hasher)


@pytest.fixture
def admin(sample_admin: Admin, hasher: PasswordHasher) -> Admin:
    sample_admin.password = hasher.hash("admin123")
    return sample_admin


class TestAdminAuthServiceLogin:
    """Tests for admin login."""

    @pytest.mark.asyncio
    async def test_login_success(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        jwt_manager: JWTManager,
        admin: Admin,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(admin)

        token, logged_in = await service.login("Admin@EduFolio.com", "admin123")

        assert logged_in is admin
        assert admin.last_login is not None
        payload = jwt_manager.decode_token(token)
        assert payload.sub == admin.id
        assert payload.role == "superadmin"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_wrong_password(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        admin: Admin,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(admin)

        with pytest.raises(InvalidCredentialsError, match="Invalid email or password"):
            await service.login(admin.email, "wrong-password")

        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_unknown_email(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        with pytest.raises(InvalidCredentialsError, match="Invalid email or password"):
            await service.login("nobody@edufolio.com", "admin123")

    @pytest.mark.asyncio
    async def test_login_disabled_account(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        admin: Admin,
    ) -> None:
        admin.is_active = False
        mock_db.execute.return_value = create_mock_result(admin)

        with pytest.raises(AccountInactiveError):
            await service.login(admin.email, "admin123")

        assert admin.last_login is None


class TestAdminAuthServiceRegister:
    """Tests for admin registration."""

    @pytest.mark.asyncio
    async def test_register_success(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        hasher: PasswordHasher,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        admin = await service.register(
            RegisterRequest(
                name=" Content Editor ",
                email="Editor@EduFolio.com",
                password="editor123",
                role="editor",
            )
        )

        assert admin.name == "Content Editor"
        assert admin.email == "editor@edufolio.com"
        assert admin.role == "editor"
        assert admin.password != "editor123"
        assert hasher.verify("editor123", admin.password)
        mock_db.add.assert_called_once_with(admin)

    @pytest.mark.asyncio
    async def test_register_existing_email(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        admin: Admin,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(admin)

        with pytest.raises(AdminEmailExistsError):
            await service.register(
                RegisterRequest(name="Dup", email=admin.email, password="secret123")
            )

        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_race_on_unique_email(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)
        mock_db.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate"))

        with pytest.raises(AdminEmailExistsError):
            await service.register(
                RegisterRequest(name="Dup", email="dup@edufolio.com", password="secret123")
            )

        mock_db.rollback.assert_awaited_once()


class TestAdminAuthServicePassword:
    """Tests for password change."""

    @pytest.mark.asyncio
    async def test_change_password(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        hasher: PasswordHasher,
        admin: Admin,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(admin)

        await service.change_password(admin.id, "admin123", "new-secret")

        assert hasher.verify("new-secret", admin.password)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
        admin: Admin,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(admin)

        with pytest.raises(InvalidCredentialsError, match="Current password is incorrect"):
            await service.change_password(admin.id, "guess", "new-secret")

        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_change_password_unknown_admin(
        self,
        service: AdminAuthService,
        mock_db: AsyncMock,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        with pytest.raises(AdminNotFoundError):
            await service.change_password("missing", "admin123", "new-secret")
