"""Text extractors for ingestion layer."""

import os

from .base import TextExtractor
from .pdf import PdfExtractor
from .text import PlainTextExtractor

_TEXT_SUFFIXES = (".txt", ".md", ".markdown", ".text", ".csv")


def extractor_for(name: str) -> TextExtractor:
    """Pick an extractor from the document name's suffix (PDF by default)."""
    suffix = os.path.splitext(name or "")[1].lower()
    if suffix in _TEXT_SUFFIXES:
        return PlainTextExtractor()
    return PdfExtractor()


__all__ = ["TextExtractor", "PdfExtractor", "PlainTextExtractor", "extractor_for"]
