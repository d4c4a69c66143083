from typing import Any

from field_mapper.annotations.models import Annotation, BulkSaveResult, ItemError
from field_mapper.annotations.validator import INVALID_ANNOTATION, validate
from field_mapper.database.repositories.annotation_repository import AnnotationRepository
from field_mapper.logging.logger import Log


class BulkIngestPipeline:
    """Validate-then-persist for a batch of candidate annotations.

    The batch is evaluated against one snapshot and written back once. A bad
    item is reported with its index and skipped; it never stops the others.
    Storage failures propagate and abort the whole call.
    """

    def __init__(self, annotation_repo: AnnotationRepository) -> None:
        self._annotation_repo = annotation_repo

    def ingest(self, items: list[Any]) -> BulkSaveResult:
        result = BulkSaveResult()
        with self._annotation_repo.batch() as batch:
            for index, item in enumerate(items):
                error = validate(item, batch.process_ids)
                if error is None:
                    try:
                        annotation = Annotation.from_dict(item)
                    except (TypeError, ValueError) as exc:
                        Log.warning(f"Batch item {index} could not be normalized: {exc}")
                        error = INVALID_ANNOTATION
                if error is not None:
                    Log.warning(f"Rejected batch item {index}: {error}")
                    result.errors.append(ItemError(index=index, error=error))
                    continue
                result.saved.append(batch.append(annotation))

        Log.info(
            f"Bulk save: {result.saved_count} saved, {len(result.errors)} rejected "
            f"of {len(items)}"
        )
        return result
