from dataclasses import dataclass
from fastapi import UploadFile
from pathlib import Path
from typing import Iterable, Optional
from uuid import uuid4
import logging

from lexcase.utils.errors import ValidationError

__all__ = ["StoredFile", "StorageService", "format_size"]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def format_size(size: int) -> str:
    """Human-readable byte count: ``10485760`` -> ``10 MB``, ``1536`` -> ``1.5 KB``."""
    for unit, factor in (("MB", 1024 * 1024), ("KB", 1024)):
        if size >= factor:
            return f"{round(size / factor, 2):g} {unit}"
    return f"{size} bytes"


@dataclass
class StoredFile:
    """Where an accepted upload ended up"""
    name: str
    path: str
    url: str
    size: int


class StorageService:
    """Handle document uploads on the local filesystem.

    Files are written under ``upload_dir`` with a generated name and served
    back at ``{public_prefix}/{name}``.
    """

    def __init__(
        self,
        upload_dir: str,
        max_size: int,
        allowed_extensions: Iterable[str],
        allowed_content_types: Iterable[str],
        public_prefix: str = "/uploads",
    ):
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size
        self.allowed_extensions = {e.lower() for e in allowed_extensions}
        self.allowed_content_types = {t.lower() for t in allowed_content_types}
        self.public_prefix = public_prefix.rstrip("/")

    def ensure_directory(self) -> None:
        """Create the upload directory if it doesn't exist"""
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _size_error(self) -> ValidationError:
        return ValidationError(f"File exceeds the {format_size(self.max_size)} limit")

    def validate_file(self, filename: Optional[str], content_type: Optional[str], size: Optional[int] = None) -> None:
        """Validate file before upload"""
        ext = Path(filename or "").suffix.lower()
        media_type = (content_type or "").split(";")[0].strip().lower()

        if ext not in self.allowed_extensions or media_type not in self.allowed_content_types:
            logger.warning(f"[storage] Rejected file type: ext={ext!r} content_type={media_type!r}")
            raise ValidationError("Only documents and images are allowed")

        if size is not None and size > self.max_size:
            logger.warning(f"[storage] File too large: {size} bytes")
            raise self._size_error()

    async def save_upload(self, upload: UploadFile) -> StoredFile:
        """Stream an upload to disk, enforcing the size ceiling while writing.

        A partially written file is removed before any error propagates.
        """
        self.validate_file(upload.filename, upload.content_type, upload.size)
        self.ensure_directory()

        ext = Path(upload.filename).suffix.lower()
        name = f"{uuid4().hex}{ext}"
        path = self.upload_dir / name

        written = 0
        try:
            with open(path, "wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        logger.warning(f"[storage] File too large: more than {self.max_size} bytes")
                        raise self._size_error()
                    out.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info(f"[storage] Saved file: {name} ({written} bytes)")
        return StoredFile(
            name=name,
            path=str(path),
            url=f"{self.public_prefix}/{name}",
            size=written,
        )

    def delete_file(self, file_path: str) -> bool:
        """Delete a stored file; a file that is already gone is not an error."""
        path = Path(file_path)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning(f"[storage] File already missing: {file_path}")
            return False
        logger.info(f"[storage] Deleted file: {file_path}")
        return True
