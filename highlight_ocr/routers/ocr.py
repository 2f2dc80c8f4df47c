"""OCR upload endpoint."""

import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from highlight_ocr.dependencies import AppSettings, Pipeline, Storage
from highlight_ocr.errors import NoFileUploadedError
from highlight_ocr.models import ErrorResponse, OcrResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/ocr",
    response_model=OcrResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No file uploaded"},
        413: {"model": ErrorResponse, "description": "File too large"},
        500: {"model": ErrorResponse, "description": "OCR or rendering failed"},
    },
)
async def run_ocr(
    settings: AppSettings,
    storage: Storage,
    pipeline: Pipeline,
    file: UploadFile | None = File(None),
):
    """
    Recognize words in an uploaded image and highlight them.

    Returns every recognized word with its confidence and bounding box, plus
    the URL of a PNG copy of the image with each word boxed. Results are
    all-or-nothing: any OCR or rendering failure returns 500 with no words.
    """
    if file is None:
        raise NoFileUploadedError()

    upload = await storage.save_upload(file, settings.max_upload_bytes)
    outcome = await pipeline.run(upload)

    if not outcome.ok:
        return JSONResponse(status_code=outcome.error.status_code, content=outcome.error.to_body())

    return OcrResponse.from_words(outcome.words, storage.url_for(outcome.highlighted_path))
