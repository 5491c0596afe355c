"""Photo upload and stored file endpoints."""

from pathlib import PurePosixPath
from typing import Final

import structlog
from fastapi import APIRouter, HTTPException, Response, UploadFile

from photoprint.api.v1.dependencies import UploadServiceDep, UploadStorageDep
from photoprint.api.v1.schemas import CamelModel
from photoprint.services.storage import InvalidUploadPath, UploadNotFound
from photoprint.services.uploads import InvalidUpload

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["uploads"])

_CONTENT_TYPES: Final[dict[str, str]] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".pdf": "application/pdf",
    ".zip": "application/zip",
    ".rar": "application/x-rar-compressed",
    ".7z": "application/x-7z-compressed",
}

# Stored files never change once written
_CACHE_CONTROL = "public, max-age=31536000, immutable"


class UploadResponse(CamelModel):
    success: bool
    file_name: str
    original_name: str | None


def content_type_for(path: str) -> str:
    return _CONTENT_TYPES.get(PurePosixPath(path).suffix.lower(), "application/octet-stream")


@router.post("/upload", response_model=UploadResponse, operation_id="uploadPhoto")
async def upload_photo(
    service: UploadServiceDep,
    file: UploadFile | None = None,
) -> UploadResponse:
    """Upload one photo. It is converted to JPEG and stored until an order claims it."""
    if file is None:
        raise HTTPException(status_code=400, detail="No file uploaded")

    try:
        if file.size is not None:
            service.check_size(file.size)
        data = await file.read()
        stored = await service.store_photo(data, file.filename)
    except InvalidUpload as e:
        logger.warning("Rejected upload", original_name=file.filename, error=str(e))
        raise HTTPException(status_code=400, detail=f"Upload failed: {e}")

    return UploadResponse(success=True, file_name=stored.file_name, original_name=stored.original_name)


@router.get("/uploads/{file_path:path}", operation_id="getUploadedFile")
async def get_uploaded_file(file_path: str, storage: UploadStorageDep) -> Response:
    """Serve a stored file ("{file}" or "{order_number}/{file}")."""
    try:
        data = await storage.read(file_path)
    except InvalidUploadPath:
        raise HTTPException(status_code=400, detail="Invalid filename")
    except UploadNotFound:
        raise HTTPException(status_code=404, detail="File not found")

    return Response(
        content=data,
        media_type=content_type_for(file_path),
        headers={"Cache-Control": _CACHE_CONTROL},
    )
