# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database seed package.

- Default admin: the initial superadmin account
- Sample data: demo universities, programs and enquiries

Run with ``python -m src.infrastructure.database.seeds [--sample]``.
"""

from src.infrastructure.database.seeds.admin import seed_default_admin
from src.infrastructure.database.seeds.sample import seed_sample_data

__all__ = ["seed_default_admin", "seed_sample_data"]
