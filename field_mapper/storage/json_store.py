import json
import os
import tempfile
from pathlib import Path

from field_mapper.logging.logger import Log
from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.exceptions import StorageIOError
from field_mapper.storage.models import Snapshot


class JsonFileSnapshotStore(BaseSnapshotStore):
    """Keeps the snapshot in one JSON file, rewritten whole on every mutation.

    Writes go to a temp file in the same directory which is then renamed over
    the target, so a reader sees either the old or the new file, never a mix.
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self._path = Path(path)
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self.replace(Snapshot())
            Log.info(f"Created empty snapshot at {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> Snapshot:
        try:
            raw = self._path.read_text(encoding="utf-8")
            return Snapshot.from_dict(json.loads(raw))
        except (OSError, ValueError) as exc:
            raise StorageIOError(f"Cannot read snapshot {self._path}: {exc}") from exc

    def replace(self, snapshot: Snapshot) -> None:
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(snapshot.to_dict(), tmp, indent=2, ensure_ascii=False)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._path)
        except (OSError, TypeError, ValueError) as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageIOError(f"Cannot write snapshot {self._path}: {exc}") from exc
