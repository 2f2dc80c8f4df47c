"""Tesseract OCR backend using pytesseract."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pytesseract
from PIL import Image

from ..models import BoundingBox, OcrWord
from .base import OCRBackend, OCREngine

logger = logging.getLogger(__name__)

# Tesseract TSV levels: 1 page, 2 block, 3 paragraph, 4 line, 5 word
WORD_LEVEL = 5


def words_from_tesseract_data(data: dict) -> list[OcrWord]:
    """Convert pytesseract image_to_data output into word results.

    Tesseract returns parallel lists keyed by column name. Only word-level
    rows are kept, in the order Tesseract emitted them. Text is passed
    through as-is, including empty or garbled words.

    Args:
        data: Dict from image_to_data(..., output_type=Output.DICT)

    Returns:
        List of OcrWord with left/top/right/bottom pixel boxes
    """
    words = []
    for i, level in enumerate(data["level"]):
        if int(level) != WORD_LEVEL:
            continue

        left = int(data["left"][i])
        top = int(data["top"][i])
        bbox = BoundingBox(
            x0=left,
            y0=top,
            x1=left + int(data["width"][i]),
            y1=top + int(data["height"][i]),
        )
        words.append(
            OcrWord(
                text=str(data["text"][i]),
                confidence=float(data["conf"][i]),
                bbox=bbox,
            )
        )
    return words


class TesseractEngine(OCREngine):
    """Engine bound to one language for the lifetime of a session."""

    def __init__(self, language: str):
        self.language = language
        self.released = False

    def recognize(self, image_path: Path) -> list[OcrWord]:
        if self.released:
            raise RuntimeError("Tesseract engine used after release")

        with Image.open(image_path) as image:
            image.load()
            data = pytesseract.image_to_data(
                image, lang=self.language, output_type=pytesseract.Output.DICT
            )
        return words_from_tesseract_data(data)

    def release(self) -> None:
        self.released = True


class TesseractBackend(OCRBackend):
    """Tesseract backend configured for a single language.

    No page segmentation or orientation hints are passed, so Tesseract
    uses its defaults for whole-image recognition.
    """

    def __init__(self, language: str = "eng", tesseract_cmd: str | None = None):
        self.language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @contextmanager
    def session(self) -> Iterator[TesseractEngine]:
        # Raises TesseractNotFoundError when the binary is missing
        available = pytesseract.get_languages(config="")
        if self.language not in available:
            raise RuntimeError(
                f"Tesseract language '{self.language}' is not installed. "
                f"Available: {', '.join(sorted(available)) or 'none'}"
            )

        engine = TesseractEngine(self.language)
        try:
            yield engine
        finally:
            engine.release()
            logger.debug(f"Released tesseract engine ({self.language})")
