from typing import Any

from fastapi import APIRouter, Body, Depends, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse

from field_mapper.logging.logger import Log
from field_mapper.services import Services
from field_mapper.uploads.exceptions import EmptyUploadError, UploadTooLargeError


def get_services(request: Request) -> Services:
    return request.app.state.services


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


api_router = APIRouter(prefix="/api", tags=["annotations"])
admin_router = APIRouter(prefix="/app_admin/api", tags=["field-definitions"])


@api_router.post("/upload")
def upload(
    file: UploadFile | None = File(None),
    services: Services = Depends(get_services),
) -> Any:
    if file is None:
        return error_response(400, "No file uploaded")
    data = file.file.read()
    try:
        process = services.processes.upload(file.filename or "upload.pdf", data)
    except EmptyUploadError as exc:
        return error_response(400, str(exc))
    except UploadTooLargeError as exc:
        return error_response(413, str(exc))
    return process.to_dict()


@api_router.get("/processes")
def list_processes(services: Services = Depends(get_services)) -> Any:
    return [p.to_dict() for p in services.processes.list_processes()]


@api_router.get("/processes/{process_id}")
def get_process(process_id: str, services: Services = Depends(get_services)) -> Any:
    return services.processes.get(process_id).to_dict()


@api_router.get("/processes/{process_id}/pages")
def page_frames(
    process_id: str,
    scale: float | None = Query(None, gt=0),
    services: Services = Depends(get_services),
) -> Any:
    if scale is None:
        scale = services.settings.render_scale
    frames = services.processes.page_frames(process_id, scale=scale)
    return [f.to_dict() for f in frames]


@api_router.post("/pdf-annotation-mappings/bulk")
def bulk_save(
    items: Any = Body(None),
    services: Services = Depends(get_services),
) -> Any:
    if not isinstance(items, list):
        return error_response(400, "Expected array")
    return services.ingest.ingest(items).to_dict()


@api_router.get("/annotations/{process_id}")
def list_annotations(process_id: str, services: Services = Depends(get_services)) -> Any:
    return [a.to_dict() for a in services.annotations.list_by_process(process_id)]


@api_router.delete("/annotations/clear/{process_id}")
def clear_annotations(process_id: str, services: Services = Depends(get_services)) -> Any:
    removed = services.annotations.clear_by_process(process_id)
    Log.info(f"Cleared {removed} annotations for process {process_id}")
    return {"ok": True}


@api_router.get("/field-definitions/{process_id}")
def field_definitions(
    process_id: str,
    form_id: str | None = Query(None),
    services: Services = Depends(get_services),
) -> Any:
    return [d.to_dict() for d in services.field_definitions.fetch(process_id, form_id)]


@admin_router.post("/fetch-create-table")
def fetch_create_table(
    payload: Any = Body(None),
    services: Services = Depends(get_services),
) -> Any:
    body = payload if isinstance(payload, dict) else {}
    process_id = body.get("process_id")
    definitions = services.field_definitions.fetch(str(process_id), body.get("form_id"))
    return [d.to_dict() for d in definitions]
