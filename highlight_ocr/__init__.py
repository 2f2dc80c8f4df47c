"""OCR upload service: recognized words plus a highlighted copy of the image."""

__version__ = "0.1.0"
