from field_mapper.annotations.exceptions import ProcessNotFoundError
from field_mapper.annotations.models import Process
from field_mapper.database.identity import new_id, utc_timestamp
from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.models import Snapshot


def process_ids(snapshot: Snapshot) -> set[str]:
    """Ids of every process in a snapshot, as strings."""
    return {str(p.get("id")) for p in snapshot.processes}


class ProcessRepository:
    """Operations on the processes collection. Processes are never deleted."""

    def __init__(self, store: BaseSnapshotStore) -> None:
        self._store = store

    def create(self, original_name: str, filename: str, path: str) -> Process:
        process = Process(
            id=new_id(),
            original_name=original_name,
            filename=filename,
            path=path,
            created_at=utc_timestamp(),
        )
        with self._store.mutate() as snapshot:
            snapshot.processes.append(process.to_dict())
        return process

    def list_all(self) -> list[Process]:
        return [Process.from_dict(p) for p in self._store.read().processes]

    def find_by_id(self, process_id: str) -> Process:
        """Find a process by id.

        Raises:
            ProcessNotFoundError: if no process with this id exists.
        """
        for raw in self._store.read().processes:
            if str(raw.get("id")) == str(process_id):
                return Process.from_dict(raw)
        raise ProcessNotFoundError(f"Process {process_id} not found")

    def ids(self) -> set[str]:
        return process_ids(self._store.read())
