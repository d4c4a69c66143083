from typing import Any

import httpx

from field_mapper.annotations.drafts import DraftBoard
from field_mapper.annotations.exceptions import ProcessNotFoundError
from field_mapper.annotations.models import Annotation, BulkSaveResult, FormRef, Process
from field_mapper.logging.logger import Log
from field_mapper.pdf.models import PageFrame


class FieldMapperClientError(Exception):
    """Raised when the mapping service answers with an unexpected status."""


class FieldMapperClient:
    """Thin client for the mapping HTTP API.

    Pass ``http_client`` to reuse a configured ``httpx.Client`` (a FastAPI
    ``TestClient`` works too); otherwise one is created for ``base_url``.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:4000",
        http_client: httpx.Client | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout_seconds)

    def close(self) -> None:
        self._http.close()

    def upload(self, filename: str, data: bytes) -> Process:
        response = self._http.post(
            "/api/upload", files={"file": (filename, data, "application/pdf")}
        )
        return Process.from_dict(self._json(response))

    def list_processes(self) -> list[Process]:
        return [Process.from_dict(p) for p in self._json(self._http.get("/api/processes"))]

    def get_process(self, process_id: str) -> Process:
        """Fetch one process.

        Raises:
            ProcessNotFoundError: if the service answers 404.
        """
        response = self._http.get(f"/api/processes/{process_id}")
        if response.status_code == 404:
            raise ProcessNotFoundError(f"Process {process_id} not found")
        return Process.from_dict(self._json(response))

    def page_frames(self, process_id: str, scale: float | None = None) -> list[PageFrame]:
        params = {"scale": scale} if scale is not None else None
        response = self._http.get(f"/api/processes/{process_id}/pages", params=params)
        return [PageFrame(**frame) for frame in self._json(response)]

    def bulk_save(self, candidates: list[dict[str, Any]]) -> BulkSaveResult:
        response = self._http.post("/api/pdf-annotation-mappings/bulk", json=candidates)
        return BulkSaveResult.from_dict(self._json(response))

    def list_annotations(self, process_id: str) -> list[Annotation]:
        response = self._http.get(f"/api/annotations/{process_id}")
        return [Annotation.from_dict(a) for a in self._json(response)]

    def clear_annotations(self, process_id: str) -> None:
        self._json(self._http.delete(f"/api/annotations/clear/{process_id}"))

    def field_definitions(
        self, process_id: str, form_id: FormRef | None = None
    ) -> list[dict[str, Any]]:
        params = {"form_id": str(form_id)} if form_id is not None else None
        response = self._http.get(f"/api/field-definitions/{process_id}", params=params)
        return self._json(response)

    def save_board(self, board: DraftBoard) -> BulkSaveResult:
        """Bulk-save the board's unsaved drafts and reconcile the response."""
        payload = board.payload()
        if not payload:
            Log.info("No drafts to save")
            return BulkSaveResult()
        result = self.bulk_save(payload)
        board.apply_saved(result)
        return result

    def reload_board(self, board: DraftBoard) -> None:
        """Replace the board's contents with the server's records."""
        board.load(self.list_annotations(board.process.id))

    def _json(self, response: httpx.Response) -> Any:
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error", response.text) if isinstance(body, dict) else response.text
            raise FieldMapperClientError(
                f"{response.request.method} {response.request.url.path} "
                f"failed with {response.status_code}: {message}"
            )
        return response.json()
