# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for EduFolio.

This package contains domain services that encapsulate business logic.

Domains:
    auth: Administrator authentication.
    catalog: Fee range aggregation and listing filters.
    dashboard: Admin statistics and landing page aggregates.
    enquiry: Lead capture and follow-up.
    program: Program management.
    university: University management.
    upload: File uploads.
"""
