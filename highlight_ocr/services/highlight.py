"""Highlight rendering for recognized words."""

import logging
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageDraw

from ..errors import RenderingError
from ..models import BoundingBox, OcrWord
from .storage import UploadStorage

logger = logging.getLogger(__name__)

HIGHLIGHT_COLOR = (0, 255, 0)  # lime
STROKE_WIDTH = 2
FILL_OPACITY = 0.15
FILL_ALPHA = round(255 * FILL_OPACITY)


SIXTEEN_BIT_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N")


def has_alpha(image: Image.Image) -> bool:
    """Whether the image carries transparency that must survive rendering."""
    return image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info


def to_8bit(image: Image.Image) -> Image.Image:
    """Scale 16-bit grayscale down to 8-bit so RGBA conversion does not clamp it."""
    if image.mode in SIXTEEN_BIT_MODES:
        return image.convert("I").point(lambda v: v * (1 / 257)).convert("L")
    return image


def order_box(bbox: BoundingBox) -> tuple[int, int, int, int]:
    """Box corners as (left, top, right, bottom), whichever way round they came."""
    x0, x1 = sorted((bbox.x0, bbox.x1))
    y0, y1 = sorted((bbox.y0, bbox.y1))
    return x0, y0, x1, y1


def clip_box(bbox: BoundingBox, width: int, height: int) -> tuple[int, int, int, int] | None:
    """Order and clip a box to the image. Returns None if no area is left."""
    x0, y0, x1, y1 = order_box(bbox)
    x0, x1 = max(0, x0), min(width, x1)
    y0, y1 = max(0, y0), min(height, y1)
    if x1 <= x0 or y1 <= y0:
        return None
    return x0, y0, x1, y1


def draw_highlights(image: Image.Image, words: Sequence[OcrWord]) -> Image.Image:
    """
    Draw one outlined, translucent rectangle per word onto a copy of image.

    Words are drawn in sequence order, so later boxes composite over earlier
    ones. The stroke straddles the box edge (one pixel outside, one inside)
    and is drawn unclipped, so edges past the image border fall off-image and
    zero-width or zero-height boxes still show as a line. The fill covers the
    part of the box interior that lies inside the image.

    Args:
        image: Decoded source image (left untouched)
        words: Word results whose boxes are highlighted

    Returns:
        New RGBA image with the same size as the source
    """
    surface = to_8bit(image).convert("RGBA")
    width, height = surface.size
    stroke = (*HIGHLIGHT_COLOR, 255)
    fill = (*HIGHLIGHT_COLOR, FILL_ALPHA)

    for word in words:
        x0, y0, x1, y1 = order_box(word.bbox)
        ImageDraw.Draw(surface).rectangle(
            [x0 - 1, y0 - 1, x1, y1], outline=stroke, width=STROKE_WIDTH
        )

        box = clip_box(word.bbox, width, height)
        if box is None:
            continue
        x0, y0, x1, y1 = box
        surface.alpha_composite(Image.new("RGBA", (x1 - x0, y1 - y0), fill), dest=(x0, y0))

    return surface


def render_highlighted_image(image_path: Path, words: Sequence[OcrWord], output_path: Path) -> Path:
    """
    Render highlights for words over image_path and write a PNG to output_path.

    Raises:
        RenderingError: If the source cannot be decoded or the output cannot be
            written. A partially written output file is removed.
    """
    try:
        with Image.open(image_path) as source:
            source.load()
            keep_alpha = has_alpha(source)
            surface = draw_highlights(source, words)

        if not keep_alpha:
            surface = surface.convert("RGB")
        surface.save(output_path, format="PNG")
    except Exception as e:
        Path(output_path).unlink(missing_ok=True)
        raise RenderingError(str(e)) from e

    logger.info(f"Rendered {len(words)} highlights to {Path(output_path).name}")
    return Path(output_path)


class HighlightRenderer:
    """Writes highlighted images into storage under fresh names."""

    def __init__(self, storage: UploadStorage):
        self.storage = storage

    def render(self, image_path: Path, words: Sequence[OcrWord]) -> Path:
        try:
            output_path = self.storage.new_highlight_path()
        except OSError as e:
            raise RenderingError(str(e)) from e
        return render_highlighted_image(image_path, words, output_path)
