from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.models import Snapshot


class InMemorySnapshotStore(BaseSnapshotStore):
    """Process-local store. Useful for tests and throwaway local runs."""

    def __init__(self, snapshot: Snapshot | None = None) -> None:
        super().__init__()
        self._snapshot = snapshot.copy() if snapshot is not None else Snapshot()

    def read(self) -> Snapshot:
        return self._snapshot.copy()

    def replace(self, snapshot: Snapshot) -> None:
        # Rebinding a reference is atomic for readers.
        self._snapshot = snapshot.copy()
