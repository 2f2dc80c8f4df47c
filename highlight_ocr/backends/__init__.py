from .base import OCRBackend, OCREngine
from .tesseract import TesseractBackend, TesseractEngine, words_from_tesseract_data

__all__ = [
    "OCRBackend",
    "OCREngine",
    "TesseractBackend",
    "TesseractEngine",
    "words_from_tesseract_data",
]
