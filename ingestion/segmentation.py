"""Text normalization and overlapping fixed-size segmentation."""

import re
from typing import List

from shared.config import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE

_HORIZONTAL_WS = re.compile(r"[ \t]+")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def clean_text(text: str) -> str:
    """Normalize raw extracted text.

    Drops carriage returns, collapses runs of spaces/tabs to one space,
    collapses three or more newlines to a blank line, and trims.
    """
    if not text:
        return ""
    text = text.replace("\r", "")
    text = _HORIZONTAL_WS.sub(" ", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def _check_window(size: int, overlap: int) -> None:
    if size < 1:
        raise ValueError(f"size must be >= 1, got {size}")
    if overlap < 0:
        raise ValueError(f"overlap must be >= 0, got {overlap}")
    if size - overlap < 1:
        raise ValueError(f"overlap ({overlap}) must be smaller than size ({size})")


class TextSegmenter:
    """
    Split normalized text into overlapping windows.

    The window start advances by ``size - overlap`` characters; slices that
    are empty once trimmed are discarded.
    """

    def __init__(self, size: int = DEFAULT_CHUNK_SIZE, overlap: int = DEFAULT_CHUNK_OVERLAP):
        """
        Initialize TextSegmenter.

        Args:
            size: Maximum characters per segment
            overlap: Characters shared by consecutive segments

        Raises:
            ValueError: If the window would not advance
        """
        _check_window(size, overlap)
        self.size = size
        self.overlap = overlap

    @property
    def step(self) -> int:
        return self.size - self.overlap

    def segment(self, text: str) -> List[str]:
        """
        Segment text.

        Args:
            text: Raw text (normalized here)

        Returns:
            Segments in document order; empty for blank input
        """
        normalized = clean_text(text)
        if not normalized:
            return []
        out: List[str] = []
        for start in range(0, len(normalized), self.step):
            piece = normalized[start : start + self.size].strip()
            if piece:
                out.append(piece)
        return out


def split_text(
    text: str,
    size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> List[str]:
    """Functional shortcut for ``TextSegmenter(size, overlap).segment(text)``."""
    return TextSegmenter(size, overlap).segment(text)


__all__ = ["TextSegmenter", "clean_text", "split_text"]
