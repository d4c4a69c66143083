"""Field-definition view of stored annotations for the external table builder.

The view is fully derived: projecting the same stored record always yields the
same output.
"""

import json
from dataclasses import asdict, dataclass
from typing import Any

from field_mapper.annotations.models import Annotation, FormRef
from field_mapper.database.repositories.annotation_repository import AnnotationRepository

DEFAULT_FIELD_TYPE = "CharField"
DEFAULT_TYPES = "text"


@dataclass(frozen=True)
class FieldAnnotation:
    bbox: dict[str, float]
    page: int
    field_id: FormRef | None
    field_name: str
    field_header: str
    process: str
    form_id: FormRef | None


@dataclass(frozen=True)
class FieldDefinition:
    id: str | None
    annotation: FieldAnnotation
    table_name: str
    field_name: str
    field_type: str
    max_length: Any
    relation_type: str
    related_table_name: str
    related_field: str
    group: int
    field_header: str
    placeholder: str
    required: bool
    field_options: str
    types: str
    validation_code: None
    required_if: None
    regex_ptn: None
    form_id: FormRef | None
    process_id: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def table_name(process_id: str) -> str:
    return f"table_{process_id}_qc"


def bbox_view(annotation: Annotation) -> dict[str, float]:
    coords = annotation.bbox_norm or annotation.bbox_pixel
    if coords is None:
        return {}
    x1, y1, x2, y2 = coords
    return {"x1": x1, "y1": y1, "x2": x2, "y2": y2}


def project_one(annotation: Annotation) -> FieldDefinition:
    metadata = annotation.metadata or {}
    return FieldDefinition(
        id=annotation.id,
        annotation=FieldAnnotation(
            bbox=bbox_view(annotation),
            page=annotation.page,
            field_id=annotation.field_id or annotation.id,
            field_name=annotation.field_name,
            field_header=annotation.field_header or "",
            process=annotation.process,
            form_id=annotation.form_id,
        ),
        table_name=table_name(annotation.process),
        field_name=annotation.field_name,
        field_type=annotation.field_type or DEFAULT_FIELD_TYPE,
        max_length=metadata.get("max_length") or 0,
        relation_type="",
        related_table_name="",
        related_field="",
        group=1,
        field_header=annotation.field_header or "",
        placeholder=annotation.field_name,
        required=bool(metadata.get("required")),
        field_options=json.dumps(metadata.get("options") or [], separators=(",", ":")),
        types=annotation.field_type or DEFAULT_TYPES,
        validation_code=None,
        required_if=None,
        regex_ptn=None,
        form_id=annotation.form_id,
        process_id=annotation.process,
    )


def project(annotations: list[Annotation]) -> list[FieldDefinition]:
    return [project_one(a) for a in annotations]


class FieldDefinitionService:
    """Read-side entry point: stored annotations of a process -> field definitions."""

    def __init__(self, annotation_repo: AnnotationRepository) -> None:
        self._annotation_repo = annotation_repo

    def fetch(self, process_id: str, form_id: FormRef | None = None) -> list[FieldDefinition]:
        annotations = self._annotation_repo.list_by_process_and_form(process_id, form_id)
        return project(annotations)
