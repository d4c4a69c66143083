import json
from unittest.mock import MagicMock

from field_mapper.annotations.models import Annotation, NormalizedBox, PixelBox
from field_mapper.annotations.projector import (
    DEFAULT_FIELD_TYPE,
    DEFAULT_TYPES,
    FieldDefinitionService,
    bbox_view,
    project,
    project_one,
    table_name,
)
from field_mapper.geometry.bbox import Rect


def _make_annotation(**overrides: object) -> Annotation:
    values: dict[str, object] = {
        "id": "a1",
        "process": "p1",
        "field_name": "invoice_number",
        "page": 1,
        "geometry": NormalizedBox(norm=Rect(0.1, 0.1, 0.3, 0.2)),
        "created_at": "2025-01-10T09:30:00.000Z",
    }
    values.update(overrides)
    return Annotation(**values)  # type: ignore[arg-type]


class TestProjectOne:
    def test_defaults_for_sparse_record(self) -> None:
        definition = project_one(_make_annotation())

        assert definition.id == "a1"
        assert definition.table_name == "table_p1_qc"
        assert definition.field_type == DEFAULT_FIELD_TYPE
        assert definition.types == DEFAULT_TYPES
        assert definition.max_length == 0
        assert definition.required is False
        assert definition.field_options == "[]"
        assert definition.placeholder == "invoice_number"
        assert definition.group == 1
        assert definition.process_id == "p1"
        assert definition.annotation.field_id == "a1"
        assert definition.annotation.bbox == {"x1": 0.1, "y1": 0.1, "x2": 0.3, "y2": 0.2}

    def test_metadata_driven_values(self) -> None:
        definition = project_one(
            _make_annotation(
                field_type="ChoiceField",
                field_id="f9",
                form_id=4,
                metadata={"max_length": 64, "required": True, "options": ["A", "B"]},
            )
        )

        assert definition.field_type == "ChoiceField"
        assert definition.types == "ChoiceField"
        assert definition.max_length == 64
        assert definition.required is True
        assert json.loads(definition.field_options) == ["A", "B"]
        assert definition.field_options == '["A","B"]'
        assert definition.annotation.field_id == "f9"
        assert definition.form_id == 4

    def test_is_idempotent(self) -> None:
        annotation = _make_annotation(metadata={"options": [1, 2]})
        assert project_one(annotation).to_dict() == project_one(annotation).to_dict()

    def test_to_dict_nests_annotation(self) -> None:
        data = project_one(_make_annotation()).to_dict()
        assert data["annotation"]["page"] == 1
        assert data["validation_code"] is None
        assert data["required_if"] is None
        assert data["regex_ptn"] is None


class TestBboxView:
    def test_falls_back_to_pixel(self) -> None:
        annotation = _make_annotation(geometry=PixelBox(pixel=Rect(10, 20, 30, 40)))
        assert bbox_view(annotation) == {"x1": 10, "y1": 20, "x2": 30, "y2": 40}


class TestTableName:
    def test_format(self) -> None:
        assert table_name("abc") == "table_abc_qc"


class TestFieldDefinitionService:
    def test_fetch_projects_repository_rows(self) -> None:
        repo = MagicMock()
        repo.list_by_process_and_form.return_value = [
            _make_annotation(id="a1"),
            _make_annotation(id="a2"),
        ]

        definitions = FieldDefinitionService(repo).fetch("p1", form_id="7")

        repo.list_by_process_and_form.assert_called_once_with("p1", "7")
        assert [d.id for d in definitions] == ["a1", "a2"]

    def test_empty_process(self) -> None:
        repo = MagicMock()
        repo.list_by_process_and_form.return_value = []
        assert FieldDefinitionService(repo).fetch("unknown") == []
        assert project([]) == []
