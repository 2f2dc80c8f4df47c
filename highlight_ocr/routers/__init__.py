from . import ocr

__all__ = ["ocr"]
