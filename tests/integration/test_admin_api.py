# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for back office enquiry, program and upload routes."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_upload_service
from src.domains.enquiry.service import EnquiryNotFoundError, EnquiryService
from src.domains.program.service import ProgramService, ProgramUniversityNotFoundError
from src.domains.upload.service import UploadService
from src.infrastructure.database.models import Admin
from src.models.enquiry import EnquiryResponse

ADMIN = "/api/v1/admin"


@pytest.fixture
def authed(sample_admin: Admin, login_as: Callable[..., dict[str, str]]) -> dict[str, str]:
    return login_as(sample_admin)


@pytest.fixture
def upload_client(app: FastAPI, upload_settings: MagicMock) -> TestClient:
    app.dependency_overrides[get_upload_service] = lambda: UploadService(upload_settings)
    return TestClient(app)


class TestEnquiryRoutes:
    def test_update_status(
        self,
        client: TestClient,
        authed: dict[str, str],
        sample_enquiry,
    ) -> None:
        sample_enquiry.status = "Contacted"
        updated = EnquiryResponse.model_validate(sample_enquiry)

        with patch.object(EnquiryService, "update_status", AsyncMock(return_value=updated)) as update:
            response = client.put(
                f"{ADMIN}/enquiries/{sample_enquiry.id}/status",
                json={"status": "Contacted", "notes": "Called back"},
                headers=authed,
            )

        assert response.status_code == 200
        assert response.json()["status"] == "Contacted"
        update.assert_awaited_once()

    def test_unknown_status_is_rejected(
        self,
        client: TestClient,
        authed: dict[str, str],
    ) -> None:
        response = client.put(
            f"{ADMIN}/enquiries/{uuid4()}/status",
            json={"status": "Lost"},
            headers=authed,
        )

        assert response.status_code == 400

    def test_delete_missing_enquiry(
        self,
        client: TestClient,
        authed: dict[str, str],
    ) -> None:
        enquiry_id = uuid4()

        with patch.object(
            EnquiryService,
            "delete_enquiry",
            AsyncMock(side_effect=EnquiryNotFoundError("missing")),
        ):
            response = client.delete(f"{ADMIN}/enquiries/{enquiry_id}", headers=authed)

        assert response.status_code == 404
        assert response.json()["detail"] == f"Enquiry {enquiry_id} not found"

    def test_invalid_status_filter(self, client: TestClient, authed: dict[str, str]) -> None:
        response = client.get(f"{ADMIN}/enquiries", params={"status": "Lost"}, headers=authed)

        assert response.status_code == 400
        assert "status" in response.json()["detail"]


class TestProgramRoutes:
    def test_create_with_unknown_university(
        self,
        client: TestClient,
        authed: dict[str, str],
    ) -> None:
        with patch.object(
            ProgramService,
            "create_program",
            AsyncMock(side_effect=ProgramUniversityNotFoundError("missing")),
        ):
            response = client.post(
                f"{ADMIN}/programs",
                json={
                    "university_id": str(uuid4()),
                    "name": "Online MBA",
                    "category": "MBA",
                    "level": "Postgraduate",
                    "duration": "2 Years",
                    "fee": 175000,
                    "description": "Two year online MBA",
                    "eligibility": "Graduation",
                },
                headers=authed,
            )

        assert response.status_code == 404
        assert response.json()["detail"] == "University not found"

    def test_delete_program(self, client: TestClient, authed: dict[str, str]) -> None:
        with patch.object(ProgramService, "delete_program", AsyncMock(return_value=None)):
            response = client.delete(f"{ADMIN}/programs/{uuid4()}", headers=authed)

        assert response.status_code == 200
        assert response.json() == {"message": "Program deleted successfully"}


class TestUploadRoutes:
    def test_single_upload(
        self,
        upload_client: TestClient,
        authed: dict[str, str],
        upload_settings: MagicMock,
    ) -> None:
        response = upload_client.post(
            f"{ADMIN}/uploads/single",
            files={"file": ("campus photo.png", b"\x89PNG", "image/png")},
            headers=authed,
        )

        assert response.status_code == 200
        stored = response.json()["file"]
        assert stored["filename"].endswith("-campus-photo.png")
        assert stored["url"].startswith("http://testserver/uploads/")
        assert (Path(upload_settings.directory) / stored["filename"]).read_bytes() == b"\x89PNG"

    def test_rejects_other_types(
        self,
        upload_client: TestClient,
        authed: dict[str, str],
    ) -> None:
        response = upload_client.post(
            f"{ADMIN}/uploads/single",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=authed,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Only images and PDFs allowed"

    def test_rejects_oversized_file(
        self,
        upload_client: TestClient,
        authed: dict[str, str],
        upload_settings: MagicMock,
    ) -> None:
        response = upload_client.post(
            f"{ADMIN}/uploads/single",
            files={"file": ("brochure.pdf", b"x" * 2048, "application/pdf")},
            headers=authed,
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("File too large")
        assert not Path(upload_settings.directory).exists()

    def test_multiple_rejects_oversized_file(
        self,
        upload_client: TestClient,
        authed: dict[str, str],
        upload_settings: MagicMock,
    ) -> None:
        response = upload_client.post(
            f"{ADMIN}/uploads/multiple",
            files=[
                ("files", ("a.pdf", b"%PDF", "application/pdf")),
                ("files", ("b.pdf", b"x" * 2048, "application/pdf")),
            ],
            headers=authed,
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("File too large")
        assert not Path(upload_settings.directory).exists()

    def test_multiple_is_all_or_nothing(
        self,
        upload_client: TestClient,
        authed: dict[str, str],
        upload_settings: MagicMock,
    ) -> None:
        response = upload_client.post(
            f"{ADMIN}/uploads/multiple",
            files=[
                ("files", ("a.pdf", b"%PDF", "application/pdf")),
                ("files", ("b.exe", b"MZ", "application/octet-stream")),
            ],
            headers=authed,
        )

        assert response.status_code == 400
        assert not Path(upload_settings.directory).exists()

    def test_no_file(self, upload_client: TestClient, authed: dict[str, str]) -> None:
        response = upload_client.post(f"{ADMIN}/uploads/single", headers=authed)

        assert response.status_code == 400
        assert response.json()["detail"] == "No file uploaded"
