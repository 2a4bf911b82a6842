"""
Capability statement storage.

Uploaded files are written under the configured upload directory with a
generated ``cs-<millis>-<random><ext>`` name and referenced from the user
row by their public path ``/uploads/<name>``.
"""

import random
import time
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiofiles.os
from fastapi import UploadFile

from bizconnect.core.config import Settings
from bizconnect.core.exceptions import PayloadTooLargeException, ValidationException
from bizconnect.core.logging import LoggerMixin

PUBLIC_PREFIX = "/uploads/"
CHUNK_SIZE = 64 * 1024


@dataclass
class StoredFile:
    """Result of a successful upload."""

    file_name: str
    original_name: str
    path: str
    size: int


class CapabilityStatementStore(LoggerMixin):
    """Validates and persists capability statement uploads."""

    def __init__(self, upload_dir: str | Path, max_bytes: int, allowed_extensions: set[str]) -> None:
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.allowed_extensions = allowed_extensions

    @classmethod
    def from_settings(cls, settings: Settings) -> "CapabilityStatementStore":
        return cls(
            upload_dir=settings.upload_dir,
            max_bytes=settings.upload_max_bytes,
            allowed_extensions=settings.allowed_upload_extensions,
        )

    def extension_for(self, filename: str | None) -> str:
        """Return the lowercased extension or raise if it is not allowed."""
        suffix = Path(filename or "").suffix.lower()
        if suffix not in self.allowed_extensions:
            allowed = ", ".join(sorted(self.allowed_extensions))
            raise ValidationException(
                f"Unsupported file type '{suffix or filename}'. Allowed: {allowed}",
                {"file": [f"extension must be one of {allowed}"]},
            )
        return suffix

    @staticmethod
    def generate_name(extension: str) -> str:
        return f"cs-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{extension}"

    async def save(self, upload: UploadFile) -> StoredFile:
        """
        Stream the upload to disk.

        Raises:
            ValidationException: missing file name or disallowed extension
            PayloadTooLargeException: the file exceeds ``max_bytes``; the
                partial file is removed
        """
        if not upload.filename:
            raise ValidationException("No file uploaded", {"file": ["required"]})

        extension = self.extension_for(upload.filename)
        await aiofiles.os.makedirs(self.upload_dir, exist_ok=True)

        file_name = self.generate_name(extension)
        target = self.upload_dir / file_name
        size = 0

        async with aiofiles.open(target, "wb") as out:
            while chunk := await upload.read(CHUNK_SIZE):
                size += len(chunk)
                if size > self.max_bytes:
                    break
                await out.write(chunk)

        if size > self.max_bytes:
            await aiofiles.os.remove(target)
            self.logger.warning(
                "Capability statement rejected, too large",
                original_name=upload.filename,
                limit_bytes=self.max_bytes,
            )
            raise PayloadTooLargeException(self.max_bytes)

        self.logger.info(
            "Capability statement stored",
            file_name=file_name,
            original_name=upload.filename,
            size=size,
        )
        return StoredFile(
            file_name=file_name,
            original_name=upload.filename,
            path=f"{PUBLIC_PREFIX}{file_name}",
            size=size,
        )

    def resolve(self, public_path: str | None) -> Path | None:
        """Map a stored public path back to a file on disk, if it exists."""
        if not public_path:
            return None
        # Only the final component is trusted
        candidate = self.upload_dir / Path(public_path).name
        return candidate if candidate.is_file() else None
