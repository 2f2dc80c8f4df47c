from .highlight import HighlightRenderer, draw_highlights, render_highlighted_image
from .pipeline import OcrPipeline, PipelineOutcome
from .storage import StoredUpload, UploadStorage

__all__ = [
    "UploadStorage",
    "StoredUpload",
    "HighlightRenderer",
    "draw_highlights",
    "render_highlighted_image",
    "OcrPipeline",
    "PipelineOutcome",
]
