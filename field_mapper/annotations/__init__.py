from field_mapper.annotations.drafts import DraftBoard
from field_mapper.annotations.models import (
    Annotation,
    BulkSaveResult,
    ItemError,
    NormalizedBox,
    PixelBox,
    Process,
)
from field_mapper.annotations.reconciler import reconcile
from field_mapper.annotations.validator import validate

__all__ = [
    "Annotation",
    "BulkSaveResult",
    "DraftBoard",
    "ItemError",
    "NormalizedBox",
    "PixelBox",
    "Process",
    "reconcile",
    "validate",
]
