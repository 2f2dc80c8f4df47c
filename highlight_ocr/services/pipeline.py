"""
Per-request OCR pipeline: recognize -> render -> clean up.

Each stage runs in the default executor so blocking OCR and image work does
not stall other requests. Stage failures are returned as a PipelineOutcome
instead of propagating, so callers decide how to report them.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..backends import OCRBackend
from ..errors import PipelineError, RecognitionError, RenderingError
from ..models import OcrWord
from .highlight import HighlightRenderer
from .storage import StoredUpload, UploadStorage

logger = logging.getLogger(__name__)


@dataclass
class PipelineOutcome:
    """Result of one pipeline run. Either highlighted_path or error is set."""

    words: list[OcrWord] = field(default_factory=list)
    highlighted_path: Path | None = None
    error: PipelineError | None = None
    leaked_upload: Path | None = None  # upload left on disk after a failure

    @property
    def ok(self) -> bool:
        return self.error is None


def as_stage_error(exc: Exception, stage_error: type[PipelineError]) -> PipelineError:
    """Wrap an unexpected exception in the error type of the stage it came from."""
    if isinstance(exc, PipelineError):
        return exc
    wrapped = stage_error(str(exc))
    wrapped.__cause__ = exc
    return wrapped


class OcrPipeline:
    """Runs OCR and highlight rendering for one stored upload at a time."""

    def __init__(
        self,
        backend: OCRBackend,
        renderer: HighlightRenderer,
        storage: UploadStorage,
        delete_upload_on_failure: bool = False,
    ):
        self.backend = backend
        self.renderer = renderer
        self.storage = storage
        self.delete_upload_on_failure = delete_upload_on_failure

    async def run(self, upload: StoredUpload) -> PipelineOutcome:
        """
        Process a stored upload.

        On success the upload is deleted and the outcome carries the words and
        the highlighted image path. On failure no words are returned; the
        upload stays on disk unless delete_upload_on_failure is set.
        """
        loop = asyncio.get_event_loop()

        try:
            words = await loop.run_in_executor(None, self.backend.recognize, upload.path)
        except Exception as e:
            return self._failed(upload, as_stage_error(e, RecognitionError))

        try:
            highlighted = await loop.run_in_executor(None, self.renderer.render, upload.path, words)
        except Exception as e:
            return self._failed(upload, as_stage_error(e, RenderingError))

        self.storage.discard(upload.path)
        return PipelineOutcome(words=words, highlighted_path=highlighted)

    def _failed(self, upload: StoredUpload, error: PipelineError) -> PipelineOutcome:
        logger.error(f"OCR Error ({error.stage}) for {upload.path.name}: {error}", exc_info=error)

        leaked = None
        if self.delete_upload_on_failure:
            self.storage.discard(upload.path)
        else:
            leaked = upload.path
        return PipelineOutcome(error=error, leaked_upload=leaked)
