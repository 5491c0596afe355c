"""Local filesystem storage for customer uploads.

Layout:
    {upload_dir}/{file}                 loose upload, not yet claimed
    {upload_dir}/{order_number}/{file}  file claimed by an order

Moving a file from the root into an order folder is the only way a file
becomes claimed; nothing here ever moves it back.
"""

import os
from pathlib import Path

import anyio
import structlog

from photoprint.config import settings
from photoprint.services.storage.exceptions import (
    InvalidUploadPath,
    UploadDirectoryUnavailable,
    UploadNotFound,
)

logger = structlog.get_logger(__name__)


class UploadStorage:
    """Upload directory operations (async, via anyio.Path)."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = anyio.Path(root if root is not None else settings.upload_dir)

    async def ensure_root(self) -> None:
        """Create the upload root if it does not exist yet."""
        await self.root.mkdir(parents=True, exist_ok=True)

    async def list_root_entries(self) -> list[str]:
        """List entry names directly under the root (non-recursive)."""
        try:
            return sorted([entry.name async for entry in self.root.iterdir()])
        except OSError as e:
            raise UploadDirectoryUnavailable(str(e)) from e

    async def stat(self, name: str) -> os.stat_result:
        """Stat an entry directly under the root."""
        return await (self.root / name).stat()

    async def ensure_folder(self, folder: str) -> anyio.Path:
        """Create (if needed) a per-order folder under the root."""
        path = self.root / folder
        await path.mkdir(parents=True, exist_ok=True)
        return path

    async def move_into(self, name: str, folder: str) -> str:
        """Rename a root file into an order folder.

        Returns:
            New path relative to the root ("{folder}/{name}")
        """
        await (self.root / name).rename(self.root / folder / name)
        return f"{folder}/{name}"

    async def save(self, name: str, data: bytes) -> str:
        """Write a new loose file into the root and return its name."""
        await self.ensure_root()
        await (self.root / name).write_bytes(data)
        logger.info("Stored upload", filename=name, size=len(data))
        return name

    def resolve(self, relative_path: str) -> anyio.Path:
        """Resolve a relative path inside the root, rejecting traversal."""
        if not relative_path or ".." in relative_path or "\\" in relative_path or relative_path.startswith("/"):
            raise InvalidUploadPath(relative_path)
        return self.root / relative_path

    async def read(self, relative_path: str) -> bytes:
        """Read a stored file by its path relative to the root."""
        path = self.resolve(relative_path)
        if not await path.is_file():
            raise UploadNotFound(relative_path)
        return await path.read_bytes()
