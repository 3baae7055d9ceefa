"""Ingestion layer.

Handles text extraction and segmentation.

Rules:
- MUST NOT do embedding, storage, or search
- MUST NOT import embedding, retrieval, storage, api
"""

from .parsers import PdfExtractor, PlainTextExtractor, TextExtractor, extractor_for
from .segmentation import TextSegmenter, clean_text, split_text

__all__ = [
    # Extractors
    "TextExtractor",
    "PdfExtractor",
    "PlainTextExtractor",
    "extractor_for",
    # Segmentation
    "TextSegmenter",
    "clean_text",
    "split_text",
]
