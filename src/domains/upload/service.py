# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""File upload storage for logos, banners, images and brochures.

Files are written to the configured upload directory under the name
``<epoch-ms>-<original name with whitespace runs as dashes>`` and served
by the application under the upload URL prefix.

Example:
    >>> service = UploadService(get_settings().upload)
    >>> stored = await service.save("campus photo.png", "image/png", data)
    >>> stored.url_path
    '/uploads/1714550400000-campus-photo.png'
"""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path, PurePath

from fastapi import UploadFile

from src.core.config.settings import UploadSettings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class UploadError(Exception):
    """Base exception for upload errors."""

    pass


class UploadValidationError(UploadError):
    """Raised when a file is rejected (type, size or count)."""

    pass


@dataclass(frozen=True)
class StoredFile:
    """A file written to the upload directory."""

    filename: str
    original_name: str
    content_type: str
    size: int
    url_path: str


def storage_name(original_name: str, now_ms: int | None = None) -> str:
    """Build the stored file name for an upload.

    Directory components are dropped from the client-supplied name.

    Args:
        original_name: Name sent by the client.
        now_ms: Timestamp prefix in epoch milliseconds. Defaults to now.

    Returns:
        ``<epoch-ms>-<name>`` with whitespace runs replaced by dashes.
    """
    base = PurePath(original_name.replace("\\", "/")).name
    base = _WHITESPACE.sub("-", base.strip())
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}-{base}"


class UploadService:
    """Validates and stores uploaded files.

    Attributes:
        _settings: Upload settings.
        _directory: Target directory.
    """

    def __init__(self, settings: UploadSettings) -> None:
        self._settings = settings
        self._directory = Path(settings.directory)
        self._allowed = {ext.lower().lstrip(".") for ext in settings.allowed_extensions}

    @property
    def directory(self) -> Path:
        return self._directory

    def validate(self, filename: str | None, content_type: str | None, size: int) -> None:
        """Check a single file against the upload rules.

        Both the extension and the declared MIME type must name an allowed
        format, and the size must not exceed the configured maximum.

        Raises:
            UploadValidationError: If the file is rejected.
        """
        if not filename:
            raise UploadValidationError("No file uploaded")

        extension = PurePath(filename).suffix.lower().lstrip(".")
        mime = (content_type or "").lower()
        if extension not in self._allowed or not any(ext in mime for ext in self._allowed):
            raise UploadValidationError("Only images and PDFs allowed")

        if size > self._settings.max_size_bytes:
            raise self._too_large()

    def _too_large(self) -> UploadValidationError:
        limit_mb = self._settings.max_size_bytes / (1024 * 1024)
        return UploadValidationError(f"File too large. Maximum size is {limit_mb:g}MB")

    async def read(self, upload: UploadFile) -> bytes:
        """Read an uploaded file without going past the size limit.

        A declared size over the limit is rejected before reading. Otherwise
        at most one byte more than the limit is read.

        Raises:
            UploadValidationError: If the file exceeds the maximum size.
        """
        limit = self._settings.max_size_bytes
        if upload.size is not None and upload.size > limit:
            raise self._too_large()
        data = await upload.read(limit + 1)
        if len(data) > limit:
            raise self._too_large()
        return data

    def validate_count(self, count: int) -> None:
        """Check the number of files in a multi-file upload.

        Raises:
            UploadValidationError: If there are none or too many.
        """
        if count == 0:
            raise UploadValidationError("No files uploaded")
        if count > self._settings.max_files:
            raise UploadValidationError(
                f"Too many files. Maximum is {self._settings.max_files}"
            )

    async def save(self, filename: str, content_type: str | None, data: bytes) -> StoredFile:
        """Validate and write one file.

        Args:
            filename: Client-supplied file name.
            content_type: Declared MIME type.
            data: File content.

        Returns:
            Description of the stored file.

        Raises:
            UploadValidationError: If the file is rejected.
        """
        self.validate(filename, content_type, len(data))

        name = storage_name(filename)
        target = self._directory / name

        await asyncio.to_thread(self._write, target, data)

        logger.info("File uploaded: %s (%s bytes)", name, len(data))

        return StoredFile(
            filename=name,
            original_name=filename,
            content_type=content_type or "",
            size=len(data),
            url_path=f"{self._settings.url_path.rstrip('/')}/{name}",
        )

    async def save_many(
        self,
        files: list[tuple[str, str | None, bytes]],
    ) -> list[StoredFile]:
        """Validate every file first, then write them all.

        Nothing is written when any file is rejected.

        Raises:
            UploadValidationError: If the count or any file is rejected.
        """
        self.validate_count(len(files))
        for filename, content_type, data in files:
            self.validate(filename, content_type, len(data))
        return [await self.save(*item) for item in files]

    def _write(self, target: Path, data: bytes) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
