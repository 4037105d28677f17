# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for administrators.

This module provides the AdminAuthService that orchestrates:
- Email/password login with token issue
- Admin registration
- Password changes
- Admin lookup for the access control gate

Example:
    >>> auth_service = AdminAuthService(db_session, jwt_manager)
    >>> token, admin = await auth_service.login(email, password)
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models import Admin
from src.infrastructure.database.models.base import new_uuid
from src.models.admin import RegisterRequest
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthServiceError):
    """Raised when email or password do not match."""

    pass


class AccountInactiveError(AuthServiceError):
    """Raised when the admin account is disabled."""

    pass


class AdminNotFoundError(AuthServiceError):
    """Raised when an admin is not found."""

    pass


class AdminEmailExistsError(AuthServiceError):
    """Raised when registering an email that is already used."""

    pass


class AdminAuthService:
    """Authentication service for administrators.

    Attributes:
        _db: Database session for queries.
        _jwt_manager: JWT token manager.
        _hasher: Password hasher.
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Async database session.
            jwt_manager: JWT token manager.
            hasher: Password hasher. Defaults to a bcrypt hasher.
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._hasher = hasher or PasswordHasher()

    async def login(self, email: str, password: str) -> tuple[str, Admin]:
        """Authenticate an admin and issue an access token.

        Args:
            email: Admin email (case-insensitive).
            password: Plain text password.

        Returns:
            Tuple of (access token, admin).

        Raises:
            InvalidCredentialsError: If the email or password is wrong.
            AccountInactiveError: If the account is disabled.
        """
        admin = await self.get_by_email(email)
        if admin is None or not self._hasher.verify(password, admin.password):
            logger.info("Failed admin login: %s", email.lower())
            raise InvalidCredentialsError("Invalid email or password")

        if not admin.is_active:
            logger.info("Login attempt on disabled admin: %s", admin.id)
            raise AccountInactiveError("Account is disabled")

        admin.last_login = utc_now()
        await self._db.commit()

        token = self._jwt_manager.create_access_token(admin_id=admin.id, role=admin.role)

        logger.info("Admin logged in: %s (role=%s)", admin.id, admin.role)
        return token, admin

    async def register(self, request: RegisterRequest) -> Admin:
        """Create a new administrator.

        Args:
            request: Registration request.

        Returns:
            Created admin.

        Raises:
            AdminEmailExistsError: If the email is already registered.
        """
        email = request.email.lower()
        if await self.get_by_email(email) is not None:
            raise AdminEmailExistsError(f"Admin with email '{email}' already exists")

        admin = Admin(
            id=new_uuid(),
            name=request.name.strip(),
            email=email,
            password=self._hasher.hash(request.password),
            role=request.role.value,
            is_active=True,
        )
        self._db.add(admin)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise AdminEmailExistsError(f"Admin with email '{email}' already exists") from e
        await self._db.refresh(admin)

        logger.info("Admin registered: %s (role=%s)", admin.id, admin.role)
        return admin

    async def change_password(
        self,
        admin_id: str,
        current_password: str,
        new_password: str,
    ) -> None:
        """Change an admin's password after checking the current one.

        Raises:
            AdminNotFoundError: If the admin does not exist.
            InvalidCredentialsError: If the current password is wrong.
        """
        admin = await self.get_admin(admin_id)
        if admin is None:
            raise AdminNotFoundError(f"Admin {admin_id} not found")

        if not self._hasher.verify(current_password, admin.password):
            raise InvalidCredentialsError("Current password is incorrect")

        admin.password = self._hasher.hash(new_password)
        await self._db.commit()

        logger.info("Admin password changed: %s", admin.id)

    async def get_admin(self, admin_id: str) -> Admin | None:
        """Get an admin by ID."""
        stmt = select(Admin).where(Admin.id == str(admin_id))
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Admin | None:
        """Get an admin by email, ignoring case."""
        stmt = select(Admin).where(func.lower(Admin.email) == email.strip().lower())
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()
