import dataclasses
from collections.abc import Iterator
from contextlib import contextmanager

from field_mapper.annotations.models import Annotation, FormRef
from field_mapper.database.identity import new_id, utc_timestamp
from field_mapper.database.repositories.process_repository import process_ids
from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.models import Snapshot


class AnnotationBatch:
    """Appends into one open snapshot; written back when the batch closes."""

    def __init__(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self.process_ids = process_ids(snapshot)

    def append(self, annotation: Annotation) -> Annotation:
        """Assign identity and creation time, then add to the collection."""
        stored = dataclasses.replace(annotation, id=new_id(), created_at=utc_timestamp())
        self._snapshot.annotations.append(stored.to_dict())
        return stored


class AnnotationRepository:
    """Operations on the annotations collection.

    Every call reads the full snapshot; mutating calls write the full snapshot
    back through the store's single-writer ``mutate()``.
    """

    def __init__(self, store: BaseSnapshotStore) -> None:
        self._store = store

    @contextmanager
    def batch(self) -> Iterator[AnnotationBatch]:
        with self._store.mutate() as snapshot:
            yield AnnotationBatch(snapshot)

    def append(self, annotation: Annotation) -> Annotation:
        with self.batch() as batch:
            return batch.append(annotation)

    def append_many(self, annotations: list[Annotation]) -> list[Annotation]:
        with self.batch() as batch:
            return [batch.append(a) for a in annotations]

    def list_by_process(self, process_id: str) -> list[Annotation]:
        return [
            Annotation.from_dict(raw)
            for raw in self._store.read().annotations
            if str(raw.get("process")) == str(process_id)
        ]

    def list_by_process_and_form(
        self, process_id: str, form_id: FormRef | None = None
    ) -> list[Annotation]:
        annotations = self.list_by_process(process_id)
        if form_id is None:
            return annotations
        return [a for a in annotations if str(a.form_id) == str(form_id)]

    def clear_by_process(self, process_id: str) -> int:
        """Remove every annotation of a process. Returns how many were removed."""
        with self._store.mutate() as snapshot:
            kept = [
                raw for raw in snapshot.annotations
                if str(raw.get("process")) != str(process_id)
            ]
            removed = len(snapshot.annotations) - len(kept)
            snapshot.annotations = kept
        return removed
