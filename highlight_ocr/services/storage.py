"""
Transient file storage for uploads and generated highlight images.

Everything lives flat in one directory. Names are millisecond-timestamp based:
  - uploads:    <ms>-<original filename>
  - highlights: highlighted-<ms>.png

Two requests landing in the same millisecond with the same filename (or two
renders in the same millisecond) will collide. That is a known weakness.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from ..errors import UploadTooLargeError

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024
HIGHLIGHT_PREFIX = "highlighted-"


def timestamp_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


def safe_filename(filename: str | None) -> str:
    """Strip any directory components from a client-supplied filename."""
    name = Path((filename or "").replace("\\", "/")).name
    return name or "upload"


@dataclass(frozen=True)
class StoredUpload:
    """One received upload, owned by a single request."""

    original_filename: str
    path: Path
    size: int
    content_type: str | None = None


class UploadStorage:
    """Flat storage directory served under url_prefix."""

    def __init__(self, root: Path, url_prefix: str = "/uploads"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_root(self) -> Path:
        """Create the storage directory if it does not exist."""
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    async def save_upload(self, upload: UploadFile, max_bytes: int) -> StoredUpload:
        """
        Persist an uploaded file as <ms>-<filename>, enforcing max_bytes.

        Args:
            upload: Multipart file from the request
            max_bytes: Largest accepted file size

        Returns:
            StoredUpload describing the written file

        Raises:
            UploadTooLargeError: If the file exceeds max_bytes (nothing is kept)
        """
        if upload.size is not None and upload.size > max_bytes:
            raise UploadTooLargeError(f"File exceeds limit of {max_bytes} bytes")

        self.ensure_root()
        original = safe_filename(upload.filename)
        path = self.root / f"{timestamp_ms()}-{original}"

        size = 0
        try:
            with open(path, "wb") as f:
                while chunk := await upload.read(UPLOAD_CHUNK_SIZE):
                    size += len(chunk)
                    if size > max_bytes:
                        raise UploadTooLargeError(f"File exceeds limit of {max_bytes} bytes")
                    f.write(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise

        logger.info(f"Stored upload {path.name} ({size} bytes)")
        return StoredUpload(
            original_filename=original,
            path=path,
            size=size,
            content_type=upload.content_type,
        )

    def new_highlight_path(self) -> Path:
        """Allocate a path for a new highlighted image."""
        self.ensure_root()
        return self.root / f"{HIGHLIGHT_PREFIX}{timestamp_ms()}.png"

    def url_for(self, path: Path) -> str:
        """Relative URL under which a stored file is served."""
        return f"{self.url_prefix}/{path.name}"

    def discard(self, path: Path) -> bool:
        """Delete a stored file. Failures are logged, not raised."""
        try:
            path.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Failed to delete {path}: {e}")
            return False

    def sweep(self, max_age_seconds: int, now: float | None = None) -> list[Path]:
        """
        Delete highlighted images older than max_age_seconds.

        Pending uploads are left alone; only generated images are swept.

        Returns:
            Paths that were removed
        """
        if not self.root.exists():
            return []

        cutoff = (now if now is not None else time.time()) - max_age_seconds
        removed = []
        for path in sorted(self.root.glob(f"{HIGHLIGHT_PREFIX}*.png")):
            try:
                if path.stat().st_mtime < cutoff and self.discard(path):
                    removed.append(path)
            except FileNotFoundError:
                continue

        if removed:
            logger.info(f"Swept {len(removed)} highlighted images older than {max_age_seconds}s")
        return removed
