# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schema migrations, applied in the order listed in ``runner.MIGRATIONS``."""
