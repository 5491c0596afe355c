"""Photo upload package."""

from photoprint.services.uploads.exceptions import InvalidUpload
from photoprint.services.uploads.upload_service import StoredUpload, UploadService, convert_to_jpeg

__all__ = [
    "InvalidUpload",
    "StoredUpload",
    "UploadService",
    "convert_to_jpeg",
]
