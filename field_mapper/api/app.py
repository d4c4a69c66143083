from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from field_mapper.annotations.exceptions import ProcessNotFoundError
from field_mapper.api.routes import admin_router, api_router, error_response
from field_mapper.logging.logger import Log
from field_mapper.pdf.exceptions import PdfInspectionError
from field_mapper.services import Services
from field_mapper.storage.exceptions import StorageIOError
from field_mapper.uploads.file_store import UPLOADS_URL_PREFIX


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ProcessNotFoundError)
    def process_not_found(_request: Request, exc: ProcessNotFoundError) -> JSONResponse:
        Log.info(str(exc))
        return error_response(404, "Not found")

    @app.exception_handler(FileNotFoundError)
    def document_missing(_request: Request, exc: FileNotFoundError) -> JSONResponse:
        Log.error(f"Uploaded document missing: {exc}")
        return error_response(404, "Document file not found")

    @app.exception_handler(PdfInspectionError)
    def unreadable_document(_request: Request, exc: PdfInspectionError) -> JSONResponse:
        Log.warning(str(exc))
        return error_response(422, str(exc))

    @app.exception_handler(StorageIOError)
    def storage_failure(_request: Request, exc: StorageIOError) -> JSONResponse:
        Log.error(f"Storage failure: {exc}")
        return error_response(500, f"Storage error: {exc}")


def create_app(services: Services) -> FastAPI:
    """Build the HTTP application around an already wired service graph."""
    app = FastAPI(title="Field Mapper")
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=services.settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)
    app.include_router(api_router)
    app.include_router(admin_router)
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=services.upload_storage.uploads_dir),
        name="uploads",
    )
    return app
