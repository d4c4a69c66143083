import re
import time
from pathlib import Path

from field_mapper.annotations.models import Process
from field_mapper.uploads.exceptions import EmptyUploadError, UploadTooLargeError

UPLOADS_URL_PREFIX = "/uploads"
_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")


def stored_filename(original_name: str, millis: int | None = None) -> str:
    """Build the on-disk name: {epoch millis}-{sanitized original name}."""
    if millis is None:
        millis = int(time.time() * 1000)
    return f"{millis}-{_UNSAFE_CHARS.sub('_', original_name)}"


class UploadStorage:
    """Writes uploaded documents under one directory and reads them back."""

    def __init__(self, uploads_dir: Path, max_bytes: int | None = None) -> None:
        self._uploads_dir = Path(uploads_dir)
        self._max_bytes = max_bytes
        self._uploads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def uploads_dir(self) -> Path:
        return self._uploads_dir

    def save(self, original_name: str, data: bytes) -> tuple[str, str]:
        """Store bytes and return (filename, retrieval path).

        Raises:
            EmptyUploadError: if data is empty.
            UploadTooLargeError: if data exceeds the size limit.
        """
        if not data:
            raise EmptyUploadError("No file uploaded")
        if self._max_bytes is not None and len(data) > self._max_bytes:
            raise UploadTooLargeError(
                f"Upload of {len(data)} bytes exceeds limit of {self._max_bytes}"
            )
        filename = stored_filename(original_name)
        (self._uploads_dir / filename).write_bytes(data)
        return filename, f"{UPLOADS_URL_PREFIX}/{filename}"

    def load(self, process: Process) -> bytes:
        """Read the stored document of a process.

        Raises:
            FileNotFoundError: if the file does not exist at the resolved path.
        """
        path = self._uploads_dir / Path(process.filename).name
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_bytes()
