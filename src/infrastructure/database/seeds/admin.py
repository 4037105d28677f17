# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Default administrator seed.

Creates the initial superadmin from ``SeedSettings``. Running it again
resets that account's password and re-enables it.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import SeedSettings
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models import Admin
from src.infrastructure.database.models.base import new_uuid
from src.models.common import AdminRole

logger = logging.getLogger(__name__)


async def seed_default_admin(
    session: AsyncSession,
    seed: SeedSettings,
    hasher: PasswordHasher | None = None,
) -> tuple[Admin, bool]:
    """Create or reset the default superadmin.

    Args:
        session: Database session.
        seed: Seed settings with the admin credentials.
        hasher: Password hasher.

    Returns:
        Tuple of (admin, created). ``created`` is False when an existing
        account was reset.
    """
    hasher = hasher or PasswordHasher()
    email = seed.admin_email.strip().lower()
    password_hash = hasher.hash(seed.admin_password.get_secret_value())

    result = await session.execute(
        select(Admin).where(func.lower(Admin.email) == email)
    )
    admin = result.scalar_one_or_none()

    if admin is not None:
        admin.password = password_hash
        admin.is_active = True
        await session.commit()
        logger.info("Default admin exists, password reset: %s", email)
        return admin, False

    admin = Admin(
        id=new_uuid(),
        name=seed.admin_name,
        email=email,
        password=password_hash,
        role=AdminRole.SUPERADMIN.value,
        is_active=True,
    )
    session.add(admin)
    await session.commit()

    logger.info("Default admin created: %s", email)
    return admin, True
