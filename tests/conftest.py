import io
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from field_mapper.api.app import create_app
from field_mapper.config.settings import Settings
from field_mapper.services import Services, build_services
from field_mapper.storage.json_store import JsonFileSnapshotStore
from field_mapper.storage.memory_store import InMemorySnapshotStore
from field_mapper.storage.models import Snapshot


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page letter-size PDF (612x792 points)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Invoice number")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF: letter, then landscape letter."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.setPageSize((792, 612))
    c.drawString(72, 500, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def snapshot_with_process() -> Snapshot:
    return Snapshot(
        processes=[
            {
                "id": "p1",
                "originalName": "form.pdf",
                "filename": "1700000000000-form.pdf",
                "path": "/uploads/1700000000000-form.pdf",
                "createdAt": "2025-01-10T09:30:00.000Z",
            }
        ],
    )


@pytest.fixture()
def memory_store(snapshot_with_process: Snapshot) -> InMemorySnapshotStore:
    return InMemorySnapshotStore(snapshot_with_process)


@pytest.fixture()
def json_store(tmp_path: Path) -> JsonFileSnapshotStore:
    return JsonFileSnapshotStore(tmp_path / "db.json")


@pytest.fixture()
def app_settings(tmp_path: Path) -> Settings:
    return Settings(
        storage_backend="json",
        db_path=str(tmp_path / "db.json"),
        uploads_dir=str(tmp_path / "uploads"),
        pdf_engine="pdfplumber",
        cors_origins=["http://localhost:5173"],
    )


@pytest.fixture()
def services(app_settings: Settings) -> Services:
    return build_services(app_settings)


@pytest.fixture()
def api_client(services: Services) -> Generator[TestClient, None, None]:
    with TestClient(create_app(services)) as client:
        yield client
