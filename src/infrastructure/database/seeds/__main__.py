# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Seed command.

Applies pending migrations, creates (or resets) the default admin and,
with ``--sample``, loads the demo catalog.
"""

import argparse
import asyncio

from src.core.config import get_settings
from src.infrastructure.database.connection import close_database, get_sessionmaker, init_database
from src.infrastructure.database.migrations.runner import run_migrations
from src.infrastructure.database.seeds.admin import seed_default_admin
from src.infrastructure.database.seeds.sample import seed_sample_data
from src.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the listing database.")
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Replace the catalog with sample universities, programs and enquiries.",
    )
    parser.add_argument(
        "--skip-migrations",
        action="store_true",
        help="Do not apply pending migrations first.",
    )
    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging(settings)

    if not args.skip_migrations:
        await run_migrations(settings.database.url)

    await init_database(settings)
    try:
        async with get_sessionmaker()() as session:
            admin, created = await seed_default_admin(session, settings.seed)
            logger.info("default_admin_seeded", email=admin.email, created=created)

            if args.sample:
                await seed_sample_data(session)
    finally:
        await close_database()


if __name__ == "__main__":
    asyncio.run(main())
