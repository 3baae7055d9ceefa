"""Domain entities for the RAG engine.

Entities know how to convert themselves to and from the persisted JSON
shapes; they never touch the filesystem.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Dict, List, Optional


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Document:
    """A registered source document.

    Attributes:
        name: Unique key in the registry
        size: Byte size of the raw source document
        created_at: ISO-8601 timestamp of first ingestion
    """

    name: str
    size: int
    created_at: str = field(default_factory=utc_now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "size": self.size, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return cls(
            name=str(data.get("name") or data.get("file") or ""),
            size=int(data.get("size") or 0),
            created_at=str(data.get("createdAt") or ""),
        )


@dataclass
class Segment:
    """An embedded slice of a document's normalized text.

    Attributes:
        id: Synthetic id, unique per ingestion run ("<ms timestamp>_<index>")
        doc: Owning document name
        chunk_index: Zero-based position within the document
        text: Segment text
        embedding: Fixed-dimension vector
        model: Embedding model tag, None for untagged records
    """

    id: str
    doc: str
    chunk_index: int
    text: str
    embedding: List[float]
    model: Optional[str] = None

    @property
    def dimension(self) -> int:
        return len(self.embedding)

    def validate(self) -> None:
        """Raise ValueError if the segment cannot be stored or ranked."""
        if not self.id:
            raise ValueError("Segment id is required")
        if not self.doc:
            raise ValueError("Segment doc is required")
        if self.chunk_index < 0:
            raise ValueError(f"chunk_index must be >= 0, got {self.chunk_index}")
        if not self.text.strip():
            raise ValueError("Segment text must not be empty")
        if not self.embedding:
            raise ValueError("Segment embedding must not be empty")

    def to_record(self) -> Dict[str, Any]:
        record: Dict[str, Any] = {
            "id": self.id,
            "doc": self.doc,
            "chunkIndex": self.chunk_index,
            "text": self.text,
            "embedding": self.embedding,
        }
        if self.model:
            record["model"] = self.model
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Segment":
        """Build a segment from one parsed index line.

        Raises:
            ValueError / KeyError / TypeError: when the record is malformed
        """
        if not isinstance(record, dict):
            raise TypeError(f"record must be an object, got {type(record).__name__}")
        embedding = record["embedding"]
        if not isinstance(embedding, list) or not embedding:
            raise ValueError("embedding must be a non-empty array")
        if not all(isinstance(x, Real) and not isinstance(x, bool) for x in embedding):
            raise ValueError("embedding must contain only numbers")
        try:
            values = [float(x) for x in embedding]
        except OverflowError as exc:
            raise ValueError(f"embedding value out of range: {exc}") from exc
        if not all(math.isfinite(x) for x in values):
            raise ValueError("embedding must contain only finite numbers")
        chunk_index = record["chunkIndex"]
        if not isinstance(chunk_index, int) or isinstance(chunk_index, bool):
            raise ValueError("chunkIndex must be an integer")
        text = record["text"]
        if not isinstance(text, str):
            raise ValueError("text must be a string")
        model = record.get("model")
        return cls(
            id=str(record["id"]),
            doc=str(record["doc"]),
            chunk_index=chunk_index,
            text=text,
            embedding=values,
            model=str(model) if model else None,
        )


@dataclass
class SearchHit:
    """A ranked segment. Ephemeral, never persisted."""

    score: float
    segment: Segment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "id": self.segment.id,
            "doc": self.segment.doc,
            "chunkIndex": self.segment.chunk_index,
            "text": self.segment.text,
        }


__all__ = ["Document", "SearchHit", "Segment", "utc_now_iso"]
