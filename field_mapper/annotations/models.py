from dataclasses import dataclass, field
from typing import Any

from field_mapper.geometry.bbox import Rect

FormRef = str | int


@dataclass(frozen=True)
class Process:
    """One uploaded document. Wire keys follow the upload API (camelCase)."""

    id: str
    original_name: str
    filename: str
    path: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "originalName": self.original_name,
            "filename": self.filename,
            "path": self.path,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Process":
        return cls(
            id=str(data["id"]),
            original_name=data.get("originalName", ""),
            filename=data.get("filename", ""),
            path=data.get("path", ""),
            created_at=data.get("createdAt", ""),
        )


@dataclass(frozen=True)
class NormalizedBox:
    """Box stored as frame fractions; may also carry the pixel capture."""

    norm: Rect
    pixel: Rect | None = None
    kind: str = "normalized"


@dataclass(frozen=True)
class PixelBox:
    """Box known only in pixels of the frame it was drawn on."""

    pixel: Rect
    kind: str = "pixel"


BoxGeometry = NormalizedBox | PixelBox


def geometry_from_lists(
    bbox_norm: list[Any] | None, bbox_pixel: list[Any] | None
) -> BoxGeometry:
    """Pick the preferred representation; normalized wins when both exist."""
    pixel = Rect.from_list(bbox_pixel) if isinstance(bbox_pixel, list) else None
    if isinstance(bbox_norm, list):
        return NormalizedBox(norm=Rect.from_list(bbox_norm), pixel=pixel)
    if pixel is not None:
        return PixelBox(pixel=pixel)
    raise ValueError("Either bbox_norm or bbox_pixel is required")


@dataclass(frozen=True)
class Annotation:
    """A labeled region on one page of a process.

    A record without ``id`` is a draft that only exists on the client.
    """

    process: str
    field_name: str
    page: int
    geometry: BoxGeometry
    id: str | None = None
    form_id: FormRef | None = None
    field_id: FormRef | None = None
    field_header: str = ""
    scale: float = 1.0
    field_type: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None

    @property
    def is_draft(self) -> bool:
        return self.id is None

    @property
    def bbox_norm(self) -> list[float] | None:
        if isinstance(self.geometry, NormalizedBox):
            return self.geometry.norm.as_list()
        return None

    @property
    def bbox_pixel(self) -> list[float] | None:
        pixel = self.geometry.pixel
        return pixel.as_list() if pixel is not None else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "process": self.process,
            "form_id": self.form_id,
            "field_id": self.field_id,
            "field_name": self.field_name,
            "field_header": self.field_header,
            "bbox_pixel": self.bbox_pixel,
            "bbox_norm": self.bbox_norm,
            "page": self.page,
            "scale": self.scale,
            "field_type": self.field_type,
            "metadata": dict(self.metadata),
            "createdAt": self.created_at,
        }

    def to_payload(self) -> dict[str, Any]:
        """Wire form of a bulk-save candidate (no server identity)."""
        data = self.to_dict()
        del data["id"]
        del data["createdAt"]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Annotation":
        """Build a record from wire data, applying every optional-field default.

        Expects input that already passed validation (or a stored record).
        """
        return cls(
            id=data.get("id"),
            process=str(data["process"]),
            form_id=data.get("form_id") or None,
            field_id=data.get("field_id") or None,
            field_name=data["field_name"],
            field_header=data.get("field_header") or "",
            geometry=geometry_from_lists(data.get("bbox_norm"), data.get("bbox_pixel")),
            page=int(float(data["page"])),
            scale=float(data.get("scale") or 1),
            field_type=data.get("field_type") or "",
            metadata=dict(data.get("metadata") or {}),
            created_at=data.get("createdAt"),
        )


@dataclass(frozen=True)
class ItemError:
    """Rejected batch item, keyed by its position in the submitted batch."""

    index: int
    error: str


@dataclass
class BulkSaveResult:
    saved: list[Annotation] = field(default_factory=list)
    errors: list[ItemError] = field(default_factory=list)

    @property
    def saved_count(self) -> int:
        return len(self.saved)

    def to_dict(self) -> dict[str, Any]:
        return {
            "saved_count": self.saved_count,
            "saved": [a.to_dict() for a in self.saved],
            "errors": [{"index": e.index, "error": e.error} for e in self.errors],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BulkSaveResult":
        return cls(
            saved=[Annotation.from_dict(a) for a in data.get("saved") or []],
            errors=[ItemError(index=e["index"], error=e["error"]) for e in data.get("errors") or []],
        )
