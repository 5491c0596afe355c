"""Photo upload processing.

Every upload is normalized to a progressive RGB JPEG (EXIF rotation applied,
transparency flattened onto white) and stored loose in the upload root under
a random name until an order claims it.
"""

import io
import uuid
from dataclasses import dataclass

import structlog
from anyio import to_thread
from PIL import Image, ImageOps, UnidentifiedImageError

from photoprint.config import settings
from photoprint.services.storage import UploadStorage
from photoprint.services.uploads.exceptions import InvalidUpload

logger = structlog.get_logger(__name__)

# Background for images with transparency (PNG, WebP)
FLATTEN_BACKGROUND = (255, 255, 255)


@dataclass
class StoredUpload:
    file_name: str
    original_name: str | None


def convert_to_jpeg(data: bytes, quality: int) -> bytes:
    """Decode any supported image and re-encode it as progressive JPEG."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
                rgba = img.convert("RGBA")
                flattened = Image.new("RGB", rgba.size, FLATTEN_BACKGROUND)
                flattened.paste(rgba, mask=rgba.getchannel("A"))
                img = flattened
            elif img.mode != "RGB":
                img = img.convert("RGB")

            output = io.BytesIO()
            img.save(output, format="JPEG", quality=quality, progressive=True)
            return output.getvalue()
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as e:
        raise InvalidUpload(f"Not a valid image: {e}") from e


class UploadService:
    def __init__(
        self,
        storage: UploadStorage,
        *,
        max_bytes: int | None = None,
        jpeg_quality: int | None = None,
    ):
        self.storage = storage
        self.max_bytes = settings.max_upload_bytes if max_bytes is None else max_bytes
        self.jpeg_quality = settings.jpeg_quality if jpeg_quality is None else jpeg_quality

    def check_size(self, size: int) -> None:
        """Reject uploads over max_bytes. Called with the declared size before the body is read."""
        if size > self.max_bytes:
            raise InvalidUpload(f"File too large ({size} bytes, max {self.max_bytes})")

    async def store_photo(self, data: bytes, original_name: str | None) -> StoredUpload:
        """Convert an uploaded photo and save it as a new loose file."""
        if not data:
            raise InvalidUpload("No file uploaded")
        self.check_size(len(data))

        # Pillow decoding is CPU bound
        jpeg = await to_thread.run_sync(convert_to_jpeg, data, self.jpeg_quality)

        file_name = f"{uuid.uuid4()}.jpg"
        await self.storage.save(file_name, jpeg)

        logger.info(
            "Processed photo upload",
            file_name=file_name,
            original_name=original_name,
            original_size=len(data),
            stored_size=len(jpeg),
        )
        return StoredUpload(file_name=file_name, original_name=original_name)
