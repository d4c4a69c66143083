from dataclasses import dataclass
from pathlib import Path

from field_mapper.annotations.ingest import BulkIngestPipeline
from field_mapper.annotations.models import Process
from field_mapper.annotations.projector import FieldDefinitionService
from field_mapper.config.settings import Settings
from field_mapper.database.repositories.annotation_repository import AnnotationRepository
from field_mapper.database.repositories.process_repository import ProcessRepository
from field_mapper.logging.logger import Log
from field_mapper.pdf.base import BasePageInspector
from field_mapper.pdf.factory import PageInspectorFactory
from field_mapper.pdf.models import PageFrame
from field_mapper.storage.base import BaseSnapshotStore
from field_mapper.storage.factory import SnapshotStoreFactory
from field_mapper.uploads.file_store import UploadStorage


class ProcessService:
    """Upload handling and page geometry for processes."""

    def __init__(
        self,
        process_repo: ProcessRepository,
        upload_storage: UploadStorage,
        page_inspector: BasePageInspector,
    ) -> None:
        self._process_repo = process_repo
        self._upload_storage = upload_storage
        self._page_inspector = page_inspector

    def upload(self, original_name: str, data: bytes) -> Process:
        """Store an uploaded document and register it as a new process."""
        filename, path = self._upload_storage.save(original_name, data)
        process = self._process_repo.create(
            original_name=original_name, filename=filename, path=path
        )
        Log.info(f"Uploaded '{original_name}' ({len(data)} bytes) as process {process.id}")
        return process

    def list_processes(self) -> list[Process]:
        return self._process_repo.list_all()

    def get(self, process_id: str) -> Process:
        return self._process_repo.find_by_id(process_id)

    def page_frames(self, process_id: str, scale: float = 1.0) -> list[PageFrame]:
        """Frame size of every page of the process document at ``scale``.

        Raises:
            ProcessNotFoundError: if the process does not exist.
            FileNotFoundError: if its document is missing from upload storage.
            PdfInspectionError: if the document cannot be parsed.
        """
        process = self._process_repo.find_by_id(process_id)
        pdf_bytes = self._upload_storage.load(process)
        return self._page_inspector.page_frames(pdf_bytes, scale=scale)


@dataclass
class Services:
    """Everything the HTTP layer needs, built once per application."""

    settings: Settings
    store: BaseSnapshotStore
    processes: ProcessService
    annotations: AnnotationRepository
    ingest: BulkIngestPipeline
    field_definitions: FieldDefinitionService
    upload_storage: UploadStorage


def build_services(
    settings: Settings,
    store: BaseSnapshotStore | None = None,
    page_inspector: BasePageInspector | None = None,
) -> Services:
    """Build the service graph from settings; store and inspector may be injected."""
    if store is None:
        store = SnapshotStoreFactory.create(settings)
    if page_inspector is None:
        page_inspector = PageInspectorFactory.create(settings)
    upload_storage = UploadStorage(
        Path(settings.uploads_dir), max_bytes=settings.max_upload_bytes
    )
    process_repo = ProcessRepository(store)
    annotation_repo = AnnotationRepository(store)
    return Services(
        settings=settings,
        store=store,
        processes=ProcessService(process_repo, upload_storage, page_inspector),
        annotations=annotation_repo,
        ingest=BulkIngestPipeline(annotation_repo),
        field_definitions=FieldDefinitionService(annotation_repo),
        upload_storage=upload_storage,
    )
