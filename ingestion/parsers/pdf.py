"""PDF text extraction with fallback strategies."""

import io
import logging
import os
import shutil
import subprocess
import tempfile
from typing import Optional

from shared.exceptions import ExtractionFailed

logger = logging.getLogger(__name__)


class PdfExtractor:
    """Extract text from PDF bytes while falling back between multiple strategies."""

    def extract(self, data: bytes) -> str:
        """
        Extract text from an in-memory PDF.

        Tries multiple strategies:
        1. pdfminer.six library
        2. pdftotext command-line tool (if available)

        Args:
            data: Raw PDF bytes

        Returns:
            Extracted text (may be empty for image-only PDFs)

        Raises:
            ExtractionFailed: If the input is not a PDF or no strategy could read it
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ExtractionFailed(f"expected bytes, got {type(data).__name__}")
        if not bytes(data[:1024]).lstrip().startswith(b"%PDF"):
            raise ExtractionFailed("input is not a PDF document")

        errors = []

        # Strategy 1: pdfminer.six
        try:
            from pdfminer.high_level import extract_text as _extract

            text = _extract(io.BytesIO(bytes(data)))
            if text and text.strip():
                return text
        except Exception as exc:
            errors.append(f"pdfminer: {exc}")
            logger.debug("pdfminer extraction failed: %s", exc)

        # Strategy 2: pdftotext command
        text = self._extract_with_pdftotext(bytes(data), errors)
        if text is not None:
            return text

        if errors:
            raise ExtractionFailed("; ".join(errors))
        return ""

    @staticmethod
    def _extract_with_pdftotext(data: bytes, errors: list) -> Optional[str]:
        if not shutil.which("pdftotext"):
            return None
        with tempfile.TemporaryDirectory() as tmp:
            pdf_path = os.path.join(tmp, "input.pdf")
            txt_path = os.path.join(tmp, "output.txt")
            with open(pdf_path, "wb") as handle:
                handle.write(data)
            try:
                subprocess.run(
                    ["pdftotext", "-layout", pdf_path, txt_path],
                    check=True,
                    capture_output=True,
                )
            except (OSError, subprocess.CalledProcessError) as exc:
                errors.append(f"pdftotext: {exc}")
                return None
            with open(txt_path, "r", encoding="utf-8", errors="ignore") as handle:
                text = handle.read()
        return text if text.strip() else None

    @staticmethod
    def is_low_text_density(text: str, min_len: int = 500, min_ratio: float = 0.2) -> bool:
        """
        Check if extracted text has low density (likely a scanned PDF).

        Args:
            text: Extracted text
            min_len: Minimum text length to consider valid
            min_ratio: Minimum ratio of alphanumeric characters

        Returns:
            True if text density is low
        """
        if not text or len(text.strip()) < min_len:
            return True
        letters = sum(ch.isalnum() for ch in text)
        ratio = letters / max(1, len(text))
        return ratio < min_ratio


__all__ = ["PdfExtractor"]
