"""OCR highlight API service."""

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from highlight_ocr.backends import TesseractBackend
from highlight_ocr.config import Settings, get_settings
from highlight_ocr.errors import ServiceError
from highlight_ocr.models import HealthResponse
from highlight_ocr.routers import ocr
from highlight_ocr.services import UploadStorage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def cleanup_task(storage: UploadStorage, max_age_seconds: int, interval_seconds: int):
    """Periodically delete expired highlighted images."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            storage.sweep(max_age_seconds)
        except OSError as e:
            logger.error(f"Highlight cleanup failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    storage: UploadStorage = app.state.storage

    storage.ensure_root()
    logger.info(f"Starting OCR service in {settings.environment} mode")
    logger.info(f"Configuration: {settings.display()}")

    sweeper = None
    if settings.retention_enabled:
        sweeper = asyncio.create_task(
            cleanup_task(storage, settings.highlight_ttl_seconds, settings.cleanup_interval_seconds)
        )
        logger.info(f"Highlighted images expire after {settings.highlight_ttl_seconds}s")

    yield

    logger.info("Shutting down OCR service")
    if sweeper is not None:
        sweeper.cancel()
        with suppress(asyncio.CancelledError):
            await sweeper


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render service errors as a flat {"error", "details"} body."""
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.error}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    storage = UploadStorage(settings.upload_dir)

    app = FastAPI(
        title="OCR Highlight API",
        description="Upload an image, get recognized words and a highlighted copy",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.storage = storage
    app.state.ocr_backend = TesseractBackend(settings.ocr_language, settings.tesseract_cmd)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, service_error_handler)

    app.include_router(ocr.router, prefix="/api", tags=["ocr"])

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            environment=settings.environment,
            ocr_language=settings.ocr_language,
        )

    # Generated images (and not-yet-deleted uploads)
    app.mount("/uploads", StaticFiles(directory=storage.root, check_dir=False), name="uploads")

    # Static site, if present. Mounted last so it does not shadow the API.
    if settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="public")

    return app


app = create_app()


def run():
    """Run the service with uvicorn on HOST:PORT."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
