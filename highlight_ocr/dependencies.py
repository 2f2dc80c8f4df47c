"""FastAPI dependencies for storage, OCR backend and pipeline access."""

from typing import Annotated

from fastapi import Depends, Request

from highlight_ocr.backends import OCRBackend
from highlight_ocr.config import Settings
from highlight_ocr.services import HighlightRenderer, OcrPipeline, UploadStorage


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_storage(request: Request) -> UploadStorage:
    return request.app.state.storage


def get_ocr_backend(request: Request) -> OCRBackend:
    return request.app.state.ocr_backend


def get_pipeline(
    settings: Annotated[Settings, Depends(get_app_settings)],
    storage: Annotated[UploadStorage, Depends(get_storage)],
    backend: Annotated[OCRBackend, Depends(get_ocr_backend)],
) -> OcrPipeline:
    """Build a pipeline for one request."""
    return OcrPipeline(
        backend=backend,
        renderer=HighlightRenderer(storage),
        storage=storage,
        delete_upload_on_failure=settings.delete_upload_on_failure,
    )


AppSettings = Annotated[Settings, Depends(get_app_settings)]
Storage = Annotated[UploadStorage, Depends(get_storage)]
Pipeline = Annotated[OcrPipeline, Depends(get_pipeline)]
