# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""File upload endpoints.

- POST /single - Upload one file (form field ``file``)
- POST /multiple - Upload several files (form field ``files``)

Images and PDFs only. Stored files are served under the uploads mount.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from src.api.dependencies import CatalogAdmin, get_upload_service
from src.domains.upload.service import StoredFile, UploadService, UploadValidationError
from src.models.upload import MultipleUploadResponse, UploadedFile, UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(request: Request, stored: StoredFile) -> UploadedFile:
    base_url = str(request.base_url).rstrip("/")
    return UploadedFile(
        filename=stored.filename,
        original_name=stored.original_name,
        content_type=stored.content_type,
        size=stored.size,
        url=f"{base_url}{stored.url_path}",
    )


@router.post(
    "/single",
    response_model=UploadResponse,
    summary="Upload file",
    description="Upload one image or PDF.",
)
async def upload_single(
    request: Request,
    current_admin: CatalogAdmin,
    file: UploadFile | None = File(default=None),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """Upload a single file.

    Raises:
        HTTPException: 400 if no file is given or the file is rejected.
    """
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    try:
        data = await upload_service.read(file)
        stored = await upload_service.save(file.filename or "", file.content_type, data)
    except UploadValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return UploadResponse(
        message="File uploaded successfully",
        file=_to_response(request, stored),
    )


@router.post(
    "/multiple",
    response_model=MultipleUploadResponse,
    summary="Upload files",
    description="Upload several images or PDFs at once.",
)
async def upload_multiple(
    request: Request,
    current_admin: CatalogAdmin,
    files: list[UploadFile] | None = File(default=None),
    upload_service: UploadService = Depends(get_upload_service),
) -> MultipleUploadResponse:
    """Upload several files. Nothing is stored if any file is rejected."""
    uploads = files or []
    try:
        upload_service.validate_count(len(uploads))
        items = [
            (upload.filename or "", upload.content_type, await upload_service.read(upload))
            for upload in uploads
        ]
        stored = await upload_service.save_many(items)
    except UploadValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return MultipleUploadResponse(
        message=f"{len(stored)} files uploaded successfully",
        files=[_to_response(request, item) for item in stored],
    )
