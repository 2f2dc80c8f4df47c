"""OCR models for the upload endpoint."""

from pydantic import BaseModel, ConfigDict


# =============================================================================
# Recognition Models
# =============================================================================


class BoundingBox(BaseModel):
    """Word bounding box in source-image pixels (left, top, right, bottom)."""

    model_config = ConfigDict(frozen=True)

    x0: int
    y0: int
    x1: int
    y1: int


class OcrWord(BaseModel):
    """One recognized word. Confidence is on the engine's own scale."""

    model_config = ConfigDict(frozen=True)

    text: str
    confidence: float
    bbox: BoundingBox


# =============================================================================
# API Models (camelCase for frontend)
# =============================================================================


class OcrResponse(BaseModel):
    """Successful OCR response."""

    success: bool = True
    totalWords: int
    results: list[OcrWord]
    highlightedImage: str

    @classmethod
    def from_words(cls, words: list[OcrWord], highlighted_url: str) -> "OcrResponse":
        """Build a response whose word count always matches its results."""
        return cls(
            totalWords=len(words),
            results=list(words),
            highlightedImage=highlighted_url,
        )


class ErrorResponse(BaseModel):
    """Error body returned for 4xx/5xx responses."""

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    environment: str
    ocr_language: str
