# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Upload domain package: validation and storage of admin uploads."""

from src.domains.upload.service import (
    StoredFile,
    UploadError,
    UploadService,
    UploadValidationError,
    storage_name,
)

__all__ = [
    "StoredFile",
    "UploadError",
    "UploadService",
    "UploadValidationError",
    "storage_name",
]
