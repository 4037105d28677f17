# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database migrations package.

Alembic-style revisions live in ``versions`` and are applied by
``runner.run_migrations`` at startup or from the seed command.
"""
