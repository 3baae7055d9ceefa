"""Text extractor capability."""

from typing import Protocol


class TextExtractor(Protocol):
    """Turns raw document bytes into plain text.

    Implementations raise ``ExtractionFailed`` when the bytes cannot be read.
    """

    def extract(self, data: bytes) -> str:
        ...


__all__ = ["TextExtractor"]
