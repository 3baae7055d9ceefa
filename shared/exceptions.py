"""Error taxonomy shared by every layer.

Each error carries a short ``kind`` plus the underlying message so callers
can render a user-facing line without inspecting the cause chain.
"""


class RagError(Exception):
    """Base class for ingestion and retrieval failures."""

    kind = "rag_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class ExtractionFailed(RagError):
    """The text extractor could not turn a source document into text."""

    kind = "extraction_failed"


class EmbeddingUnavailable(RagError):
    """Embedding provider unreachable or returned an unusable response.

    Transient: callers may retry with backoff. The core never retries.
    """

    kind = "embedding_unavailable"


class IngestionFailed(RagError):
    """Embedding or storage failed while ingesting a document."""

    kind = "ingestion_failed"


class RetrievalFailed(RagError):
    """The query string could not be embedded."""

    kind = "retrieval_failed"


class StoreUnavailable(RagError):
    """The store files exist but could not be read."""

    kind = "store_unavailable"


class DimensionMismatch(RagError, ValueError):
    """Two vectors of different length were compared."""

    kind = "dimension_mismatch"


__all__ = [
    "DimensionMismatch",
    "EmbeddingUnavailable",
    "ExtractionFailed",
    "IngestionFailed",
    "RagError",
    "RetrievalFailed",
    "StoreUnavailable",
]
