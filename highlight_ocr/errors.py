"""Error types shared by the upload, OCR and rendering stages."""


class ServiceError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, details: str | None = None):
        super().__init__(details or self.error)
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ClientInputError(ServiceError):
    """The request itself is unusable. Nothing is processed."""

    status_code = 400


class NoFileUploadedError(ClientInputError):
    error = "No file uploaded"


class UploadTooLargeError(ClientInputError):
    status_code = 413
    error = "File too large"


class PipelineError(ServiceError):
    """A stage failed after the upload was stored."""

    error = "OCR failed"
    stage = "pipeline"


class RecognitionError(PipelineError):
    """OCR engine could not start or could not read the image."""

    stage = "recognition"


class RenderingError(PipelineError):
    """Highlighted image could not be decoded, drawn or written."""

    stage = "rendering"
