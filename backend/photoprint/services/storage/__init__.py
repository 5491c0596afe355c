"""Upload storage package."""

from photoprint.services.storage.exceptions import (
    InvalidUploadPath,
    UploadDirectoryUnavailable,
    UploadNotFound,
)
from photoprint.services.storage.upload_storage import UploadStorage

__all__ = [
    "InvalidUploadPath",
    "UploadDirectoryUnavailable",
    "UploadNotFound",
    "UploadStorage",
]
