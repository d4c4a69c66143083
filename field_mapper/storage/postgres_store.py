from collections.abc import Iterator
from contextlib import contextmanager

import psycopg
from psycopg.types.json import Jsonb

from field_mapper.database.connection import get_connection
from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.exceptions import StorageIOError
from field_mapper.storage.models import Snapshot


class PostgresSnapshotStore(BaseSnapshotStore):
    """Keeps each snapshot as one JSONB row in field_mapper_snapshots.

    Mutations lock that row with SELECT ... FOR UPDATE, which serializes
    writers across processes as well as threads.
    """

    def __init__(self, name: str = "default") -> None:
        super().__init__()
        self._name = name
        self.ensure_schema()

    def ensure_schema(self) -> None:
        """Create the table and the named row if they do not exist yet."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS field_mapper_snapshots (
                        name TEXT PRIMARY KEY,
                        document JSONB NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                    )
                    """
                )
                conn.execute(
                    """
                    INSERT INTO field_mapper_snapshots (name, document)
                    VALUES (%s, %s)
                    ON CONFLICT (name) DO NOTHING
                    """,
                    (self._name, Jsonb(Snapshot().to_dict())),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise StorageIOError(f"Cannot prepare snapshot table: {exc}") from exc

    def read(self) -> Snapshot:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT document FROM field_mapper_snapshots WHERE name = %s",
                        (self._name,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StorageIOError(f"Cannot read snapshot '{self._name}': {exc}") from exc
        return self._decode(row)

    def replace(self, snapshot: Snapshot) -> None:
        try:
            with get_connection() as conn:
                self._write(conn, snapshot)
                conn.commit()
        except psycopg.Error as exc:
            raise StorageIOError(f"Cannot write snapshot '{self._name}': {exc}") from exc

    @contextmanager
    def mutate(self) -> Iterator[Snapshot]:
        with self._write_lock:
            try:
                with get_connection() as conn:
                    with conn.cursor() as cur:
                        cur.execute(
                            """
                            SELECT document FROM field_mapper_snapshots
                            WHERE name = %s
                            FOR UPDATE
                            """,
                            (self._name,),
                        )
                        row = cur.fetchone()
                    snapshot = self._decode(row)
                    yield snapshot
                    self._write(conn, snapshot)
                    conn.commit()
            except psycopg.Error as exc:
                raise StorageIOError(
                    f"Cannot update snapshot '{self._name}': {exc}"
                ) from exc

    def _write(self, conn: psycopg.Connection, snapshot: Snapshot) -> None:  # type: ignore[type-arg]
        with conn.cursor() as cur:
            cur.execute(
                """
                UPDATE field_mapper_snapshots
                SET document = %s, updated_at = NOW()
                WHERE name = %s
                """,
                (Jsonb(snapshot.to_dict()), self._name),
            )
            if cur.rowcount == 0:
                raise StorageIOError(f"Snapshot '{self._name}' row is missing")

    def _decode(self, row: tuple | None) -> Snapshot:  # type: ignore[type-arg]
        if row is None:
            raise StorageIOError(f"Snapshot '{self._name}' row is missing")
        try:
            return Snapshot.from_dict(row[0])
        except ValueError as exc:
            raise StorageIOError(f"Snapshot '{self._name}' is malformed: {exc}") from exc
