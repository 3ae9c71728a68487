# Path: core/indexing/scanner.py
# Purpose: List uploaded image files with lightweight metadata.
# Layer: core/indexing.
# Details: Acts as the upload collaborator for ingestion runs and basic search.

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

from core.errors import EnumerationError
from core.models.domain import ImageRecord

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp"}


class ImageScanner:
    """Scan the upload folder for supported image files."""

    def __init__(self, root: Path, public_prefix: str = "/uploads") -> None:
        self.root = Path(root)
        self.public_prefix = public_prefix.rstrip("/")

    def scan(self) -> List[ImageRecord]:
        """Return discovered images sorted by filename.

        Raises EnumerationError when the folder cannot be listed.
        """

        try:
            return [self._to_record(path) for path in sorted(self._iter_image_files())]
        except OSError as exc:
            raise EnumerationError(f"Cannot list images in {self.root}: {exc}") from exc

    def public_path(self, image_id: str) -> str:
        return f"{self.public_prefix}/{image_id}"

    def _to_record(self, path: Path) -> ImageRecord:
        stats = path.stat()
        return ImageRecord(
            id=path.name,
            path=self.public_path(path.name),
            size=stats.st_size,
            uploaded_at=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
            file_path=path,
        )

    @staticmethod
    def _is_image(path: Path) -> bool:
        return path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS

    def _iter_image_files(self) -> Iterable[Path]:
        """Yield image files directly inside the root directory."""

        if not self.root.is_dir():
            raise NotADirectoryError(f"{self.root} is not a directory")
        for path in self.root.iterdir():
            if self._is_image(path):
                yield path
