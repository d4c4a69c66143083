import uvicorn

from field_mapper.api.app import create_app
from field_mapper.config.settings import Settings
from field_mapper.database.connection import close_pool
from field_mapper.logging.logger import Log
from field_mapper.services import build_services


def main() -> None:
    """Entry point: load settings -> build services -> serve HTTP."""
    settings = Settings()
    Log.configure(settings.log_level)

    try:
        services = build_services(settings)
        app = create_app(services)
        Log.info(
            f"Field mapper listening on http://{settings.host}:{settings.port} "
            f"(storage: {settings.storage_backend})"
        )
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
