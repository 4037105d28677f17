# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for UploadService."""

from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi import UploadFile

from src.domains.upload.service import UploadService, UploadValidationError, storage_name

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


@pytest.fixture
def service(upload_settings: MagicMock) -> UploadService:
    return UploadService(upload_settings)


class TestStorageName:
    def test_prefixes_timestamp_and_dashes_whitespace(self) -> None:
        assert storage_name("campus photo  2024.png", now_ms=1714557000000) == (
            "1714557000000-campus-photo-2024.png"
        )

    def test_drops_directory_components(self) -> None:
        assert storage_name("../../etc/passwd.pdf", now_ms=1) == "1-passwd.pdf"
        assert storage_name("C:\\Users\\me\\logo.png", now_ms=1) == "1-logo.png"


class TestUploadServiceValidate:
    """Tests for single-file validation."""

    @pytest.mark.parametrize(
        ("filename", "content_type"),
        [
            ("logo.png", "image/png"),
            ("banner.JPG", "image/jpeg"),
            ("brochure.pdf", "application/pdf"),
            ("icon.svg", "image/svg+xml"),
        ],
    )
    def test_accepts_images_and_pdfs(
        self,
        service: UploadService,
        filename: str,
        content_type: str,
    ) -> None:
        service.validate(filename, content_type, 100)

    @pytest.mark.parametrize(
        ("filename", "content_type"),
        [
            ("script.exe", "application/octet-stream"),
            ("logo.png", "text/html"),
            ("notes.txt", "image/png"),
            ("logo.png", None),
        ],
    )
    def test_rejects_other_types(
        self,
        service: UploadService,
        filename: str,
        content_type: str | None,
    ) -> None:
        with pytest.raises(UploadValidationError, match="Only images and PDFs allowed"):
            service.validate(filename, content_type, 100)

    def test_rejects_missing_file(self, service: UploadService) -> None:
        with pytest.raises(UploadValidationError, match="No file uploaded"):
            service.validate("", "image/png", 0)

    def test_rejects_oversized_file(self, service: UploadService) -> None:
        with pytest.raises(UploadValidationError, match="File too large"):
            service.validate("logo.png", "image/png", 1025)

    def test_size_limit_is_inclusive(self, service: UploadService) -> None:
        service.validate("logo.png", "image/png", 1024)

    def test_count_limits(self, service: UploadService) -> None:
        with pytest.raises(UploadValidationError, match="No files uploaded"):
            service.validate_count(0)
        with pytest.raises(UploadValidationError, match="Too many files"):
            service.validate_count(4)
        service.validate_count(3)


class TestUploadServiceSave:
    """Tests for writing files."""

    @pytest.mark.asyncio
    async def test_save_writes_file(self, service: UploadService) -> None:
        stored = await service.save("campus photo.png", "image/png", PNG_BYTES)

        path = Path(service.directory) / stored.filename
        assert path.read_bytes() == PNG_BYTES
        assert stored.filename.endswith("-campus-photo.png")
        assert stored.original_name == "campus photo.png"
        assert stored.size == len(PNG_BYTES)
        assert stored.url_path == f"/uploads/{stored.filename}"

    @pytest.mark.asyncio
    async def test_save_rejected_file_writes_nothing(self, service: UploadService) -> None:
        with pytest.raises(UploadValidationError):
            await service.save("virus.exe", "application/x-msdownload", b"MZ")

        assert not Path(service.directory).exists()

    @pytest.mark.asyncio
    async def test_save_many_is_all_or_nothing(self, service: UploadService) -> None:
        files = [
            ("one.png", "image/png", PNG_BYTES),
            ("two.exe", "application/octet-stream", b"MZ"),
        ]

        with pytest.raises(UploadValidationError):
            await service.save_many(files)

        assert not Path(service.directory).exists()

    @pytest.mark.asyncio
    async def test_save_many(self, service: UploadService) -> None:
        stored = await service.save_many(
            [
                ("one.png", "image/png", PNG_BYTES),
                ("two.pdf", "application/pdf", b"%PDF-1.4"),
            ]
        )

        assert [item.original_name for item in stored] == ["one.png", "two.pdf"]
        assert all((Path(service.directory) / item.filename).exists() for item in stored)


class TestUploadServiceRead:
    """Tests for bounded reads of incoming files."""

    @pytest.mark.asyncio
    async def test_reads_file_within_limit(self, service: UploadService) -> None:
        upload = UploadFile(BytesIO(PNG_BYTES), filename="logo.png")

        assert await service.read(upload) == PNG_BYTES

    @pytest.mark.asyncio
    async def test_limit_is_inclusive(self, service: UploadService) -> None:
        upload = UploadFile(BytesIO(b"x" * 1024), filename="logo.png")

        assert len(await service.read(upload)) == 1024

    @pytest.mark.asyncio
    async def test_rejects_declared_size_without_reading(self, service: UploadService) -> None:
        buffer = BytesIO(b"x" * 16)
        upload = UploadFile(buffer, size=4096, filename="banner.png")

        with pytest.raises(UploadValidationError, match="File too large"):
            await service.read(upload)

        assert buffer.tell() == 0

    @pytest.mark.asyncio
    async def test_stops_one_byte_past_limit(self, service: UploadService) -> None:
        buffer = BytesIO(b"x" * 4096)
        upload = UploadFile(buffer, filename="banner.png")

        with pytest.raises(UploadValidationError, match="File too large"):
            await service.read(upload)

        assert buffer.tell() == 1025
