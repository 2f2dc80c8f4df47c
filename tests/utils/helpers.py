"""Test utilities: fixture images, word builders and a fake OCR backend."""

import io
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator

from PIL import Image

from highlight_ocr.backends import OCRBackend, OCREngine
from highlight_ocr.models import BoundingBox, OcrWord


def make_png(size: tuple[int, int] = (120, 60), color=(255, 255, 255), mode: str = "RGB") -> bytes:
    """Encode a solid-colour image as PNG bytes."""
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def word(text: str, x0: int, y0: int, x1: int, y1: int, confidence: float = 90.0) -> OcrWord:
    """Build an OcrWord from plain coordinates."""
    return OcrWord(text=text, confidence=confidence, bbox=BoundingBox(x0=x0, y0=y0, x1=x1, y1=y1))


class FakeEngine(OCREngine):
    def __init__(self, recognize_fn: Callable[[Path], list[OcrWord]]):
        self.recognize_fn = recognize_fn
        self.released = False

    def recognize(self, image_path: Path) -> list[OcrWord]:
        return self.recognize_fn(image_path)


class FakeBackend(OCRBackend):
    """Backend that returns canned words and records every call.

    Pass recognize_fn to compute words from the image instead of using
    the canned list.
    """

    def __init__(
        self,
        words: list[OcrWord] | None = None,
        error: Exception | None = None,
        recognize_fn: Callable[[Path], list[OcrWord]] | None = None,
    ):
        self.language = "eng"
        self.words = words or []
        self.error = error
        self.recognize_fn = recognize_fn
        self.calls: list[Path] = []
        self.engines: list[FakeEngine] = []

    def _recognize(self, image_path: Path) -> list[OcrWord]:
        self.calls.append(image_path)
        if self.error is not None:
            raise self.error
        if self.recognize_fn is not None:
            return self.recognize_fn(image_path)
        return list(self.words)

    @contextmanager
    def session(self) -> Iterator[FakeEngine]:
        engine = FakeEngine(self._recognize)
        self.engines.append(engine)
        try:
            yield engine
        finally:
            engine.released = True


class RecordingRenderer:
    """Stand-in for HighlightRenderer that records the words it was given."""

    def __init__(self, output_path: Path, error: Exception | None = None):
        self.output_path = output_path
        self.error = error
        self.calls: list[tuple[Path, list[OcrWord]]] = []

    def render(self, image_path: Path, words) -> Path:
        self.calls.append((image_path, list(words)))
        if self.error is not None:
            raise self.error
        self.output_path.write_bytes(b"png")
        return self.output_path
