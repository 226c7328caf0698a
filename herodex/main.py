# herodex/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .catalog import CharacterCatalog, catalog_router
from .catalog.schemas import HealthStatus
from .catalog.store import load_catalog
from .config import Settings, load_settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(
    catalog: Optional[CharacterCatalog] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API around ``catalog`` (loaded from ``settings.data_file`` when omitted)."""
    settings = settings or load_settings()
    if catalog is None:
        catalog = load_catalog(settings.data_file)

    app = FastAPI(
        title="Herodex",
        description=(
            "Read-only catalogue of characters with search, race filters, "
            "dotted path filters, sorting and pagination."
        ),
        version="1.0.0",
    )
    app.state.catalog = catalog
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    @app.get("/api/health", response_model=HealthStatus, include_in_schema=False)
    @app.get("/health", response_model=HealthStatus)
    def health_check():
        return HealthStatus()

    app.include_router(catalog_router)
    app.include_router(catalog_router, prefix="/api", include_in_schema=False)

    # Mounted last so that API routes take precedence.
    if settings.static_dir is not None and settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.static_dir), html=True), name="static")
        logger.info("Serving static files from %s", settings.static_dir)

    return app


def run() -> None:
    import uvicorn

    settings = load_settings()
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    logger.info("Herodex is running at http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
