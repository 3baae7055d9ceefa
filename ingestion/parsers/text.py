"""Plain text / markdown extraction."""

from shared.exceptions import ExtractionFailed


class PlainTextExtractor:
    """Decode text documents, tolerating a UTF-8 BOM and stray bytes."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def extract(self, data: bytes) -> str:
        if not isinstance(data, (bytes, bytearray)):
            raise ExtractionFailed(f"expected bytes, got {type(data).__name__}")
        text = bytes(data).decode(self.encoding, errors="replace")
        return text.lstrip("\ufeff")


__all__ = ["PlainTextExtractor"]
