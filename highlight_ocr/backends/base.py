"""Abstract base classes for OCR backends."""

import logging
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from pathlib import Path

from ..errors import RecognitionError
from ..models import OcrWord

logger = logging.getLogger(__name__)


class OCREngine(ABC):
    """A live engine instance. Only valid inside its backend's session."""

    @abstractmethod
    def recognize(self, image_path: Path) -> list[OcrWord]:
        """Recognize words in a single image, in the engine's reading order."""
        ...


class OCRBackend(ABC):
    """Abstract base class for OCR backends. Backends process SINGLE images only."""

    language: str

    @abstractmethod
    def session(self) -> AbstractContextManager[OCREngine]:
        """Acquire an engine for self.language. The engine is released on exit."""
        ...

    def recognize(self, image_path: Path) -> list[OcrWord]:
        """Run whole-image word recognition on a stored file.

        Args:
            image_path: Path to a readable image file

        Returns:
            Word results in reading order (may be empty)

        Raises:
            RecognitionError: If the engine cannot start or the image cannot be read
        """
        try:
            with self.session() as engine:
                words = engine.recognize(image_path)
        except RecognitionError:
            raise
        except Exception as e:
            raise RecognitionError(str(e)) from e

        logger.info(f"Recognized {len(words)} words in {image_path.name}")
        return words
