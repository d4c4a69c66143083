import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from field_mapper.storage.models import Snapshot


class BaseSnapshotStore(ABC):
    """Contract for the document store holding the whole snapshot.

    Reads may run concurrently and must never observe a partial write.
    Mutations go through ``mutate()``, which holds a single writer lock for the
    full read-modify-write cycle so no update is lost.
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()

    @abstractmethod
    def read(self) -> Snapshot:
        """Return a private copy of the current snapshot.

        Raises:
            StorageIOError: if the snapshot cannot be read or decoded.
        """

    @abstractmethod
    def replace(self, snapshot: Snapshot) -> None:
        """Atomically replace the stored snapshot.

        Raises:
            StorageIOError: if the snapshot cannot be written.
        """

    @contextmanager
    def mutate(self) -> Iterator[Snapshot]:
        """Yield the current snapshot for in-place changes, then write it back.

        Nothing is written if the block raises.
        """
        with self._write_lock:
            snapshot = self.read()
            yield snapshot
            self.replace(snapshot)
