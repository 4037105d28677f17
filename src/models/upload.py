# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Upload response models."""

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    """A stored upload."""

    filename: str = Field(..., description="Name the file is stored under")
    original_name: str
    content_type: str
    size: int = Field(..., ge=0, description="Size in bytes")
    url: str = Field(..., description="Absolute URL the file is served from")


class UploadResponse(BaseModel):
    """Response to a single-file upload."""

    message: str
    file: UploadedFile


class MultipleUploadResponse(BaseModel):
    """Response to a multi-file upload."""

    message: str
    files: list[UploadedFile]
