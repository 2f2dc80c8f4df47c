from .ocr import BoundingBox, ErrorResponse, HealthResponse, OcrResponse, OcrWord

__all__ = [
    "BoundingBox",
    "OcrWord",
    "OcrResponse",
    "ErrorResponse",
    "HealthResponse",
]
