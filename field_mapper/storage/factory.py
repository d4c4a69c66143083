from pathlib import Path

from field_mapper.config.settings import Settings
from field_mapper.database.connection import init_pool
from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.json_store import JsonFileSnapshotStore
from field_mapper.storage.memory_store import InMemorySnapshotStore
from field_mapper.storage.postgres_store import PostgresSnapshotStore


class SnapshotStoreFactory:
    """Creates the snapshot store selected by settings.storage_backend."""

    BACKENDS = ("json", "memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseSnapshotStore:
        backend = settings.storage_backend.lower()
        if backend == "json":
            return JsonFileSnapshotStore(Path(settings.db_path))
        if backend == "memory":
            return InMemorySnapshotStore()
        if backend == "postgres":
            init_pool(settings)
            return PostgresSnapshotStore(name=settings.snapshot_name)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
