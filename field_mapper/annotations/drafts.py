import dataclasses
import time
from collections.abc import Iterable
from typing import Any

from field_mapper.annotations.exceptions import DraftError
from field_mapper.annotations.models import (
    Annotation,
    BulkSaveResult,
    FormRef,
    NormalizedBox,
    Process,
)
from field_mapper.annotations.reconciler import reconcile
from field_mapper.geometry.bbox import (
    MIN_BOX_SIZE_PX,
    Point,
    is_degenerate,
    rect_from_drag,
    to_normalized,
)
from field_mapper.logging.logger import Log
from field_mapper.pdf.models import PageFrame

EDITABLE_FIELDS = frozenset({"field_name", "field_header", "field_type", "form_id", "metadata"})
DEFAULT_DRAFT_FIELD_TYPE = "CharField"


def default_field_name() -> str:
    return f"field_{int(time.time() * 1000)}"


class DraftBoard:
    """Client-held annotations of one process: persisted records plus drafts.

    Drafts are drawn on the page currently shown (``page``, rendered at
    ``frame``), edited in place, and sent in bulk. After a save the server's
    response is folded back in with the reconciler.
    """

    def __init__(
        self,
        process: Process,
        frame: PageFrame,
        form_id: FormRef | None = None,
        min_box_size: float = MIN_BOX_SIZE_PX,
    ) -> None:
        self.process = process
        self.frame = frame
        self.form_id = form_id
        self._min_box_size = min_box_size
        self._annotations: list[Annotation] = []

    @property
    def page(self) -> int:
        return self.frame.page

    @property
    def annotations(self) -> list[Annotation]:
        return list(self._annotations)

    def show_page(self, frame: PageFrame) -> None:
        """Switch the page (and its rendered frame) new drafts are drawn on."""
        self.frame = frame

    def load(self, records: Iterable[Annotation]) -> None:
        """Replace local state with records fetched from the server."""
        self._annotations = list(records)

    def draw(self, start: Point, end: Point) -> Annotation | None:
        """Turn a mouse drag into a draft; too-small drags are dropped."""
        pixel = rect_from_drag(start, end)
        if is_degenerate(pixel, self._min_box_size):
            Log.debug(f"Ignored {pixel.width}x{pixel.height}px box on page {self.page}")
            return None
        draft = Annotation(
            process=self.process.id,
            form_id=self.form_id,
            field_name=default_field_name(),
            geometry=NormalizedBox(
                norm=to_normalized(pixel, self.frame.width, self.frame.height),
                pixel=pixel,
            ),
            page=self.page,
            scale=self.frame.scale,
            field_type=DEFAULT_DRAFT_FIELD_TYPE,
            metadata={"required": False},
        )
        self._annotations.append(draft)
        return draft

    def update(self, index: int, **changes: Any) -> Annotation:
        """Edit label fields of the draft at ``index``.

        Raises:
            DraftError: bad index, a persisted record, or a non-editable field.
        """
        current = self._draft_at(index)
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise DraftError(f"Fields not editable: {sorted(unknown)}")
        if "metadata" in changes:
            changes["metadata"] = dict(changes["metadata"] or {})
        updated = dataclasses.replace(current, **changes)
        self._annotations[index] = updated
        return updated

    def set_required(self, index: int, required: bool) -> Annotation:
        current = self._draft_at(index)
        return self.update(index, metadata={**current.metadata, "required": required})

    def on_page(self, page: int) -> list[Annotation]:
        return [a for a in self._annotations if a.page == page]

    def pending(self) -> list[Annotation]:
        return [a for a in self._annotations if a.is_draft]

    def payload(self) -> list[dict[str, Any]]:
        """Bulk-save body for every unsaved draft, in board order."""
        return [a.to_payload() for a in self.pending()]

    def apply_saved(self, result: BulkSaveResult) -> list[Annotation]:
        """Fold a bulk-save response into the board. Returns the new list."""
        draft_positions = [i for i, a in enumerate(self._annotations) if a.is_draft]
        drafts = [self._annotations[i] for i in draft_positions]
        for position, merged in zip(draft_positions, reconcile(drafts, result.saved)):
            self._annotations[position] = merged
        Log.info(
            f"Saved {result.saved_count} mappings, {len(result.errors)} errors; "
            f"{len(self.pending())} drafts still unsaved"
        )
        return self.annotations

    def _draft_at(self, index: int) -> Annotation:
        if not 0 <= index < len(self._annotations):
            raise DraftError(f"No annotation at index {index}")
        current = self._annotations[index]
        if not current.is_draft:
            raise DraftError(f"Annotation {current.id} is already saved")
        return current
