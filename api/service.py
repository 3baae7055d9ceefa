"""Facade exposed to the command layer.

One ``RagService`` per store; callers serialize ``ingest*`` calls.
"""

from typing import Optional

from embedding import EmbeddingClientProtocol, EmbeddingProviderFactory
from ingestion import TextExtractor
from retrieval import RankerProtocol, RetrievalResult
from shared.config import RagConfig, load_config
from storage import DocumentRepository, SegmentRepository, StoreSchemaManager

from .use_cases import IngestResult, IngestUseCase, SearchUseCase, StatsUseCase, StoreStats


class RagService:
    """Ingest, query and inspect one document store."""

    def __init__(
        self,
        embeddings_client: EmbeddingClientProtocol,
        config: RagConfig,
        ranker: Optional[RankerProtocol] = None,
    ):
        self.config = config
        schema = StoreSchemaManager(config)
        schema.ensure_store()
        segments = SegmentRepository(config, schema)
        documents = DocumentRepository(config, schema)
        self._ingest = IngestUseCase(embeddings_client, config, segments=segments, documents=documents)
        self._search = SearchUseCase(embeddings_client, config, segments=segments, ranker=ranker)
        self._stats = StatsUseCase(config, segments=segments, documents=documents)

    @classmethod
    def from_config(cls, config: Optional[RagConfig] = None) -> "RagService":
        """Build a service with the configured embedding provider."""
        cfg = config or load_config()
        return cls(EmbeddingProviderFactory.create(cfg), cfg)

    def ingest(self, name: str, raw_text: str) -> IngestResult:
        return self._ingest.execute(name, raw_text)

    def ingest_bytes(self, name: str, data: bytes, extractor: Optional[TextExtractor] = None) -> IngestResult:
        return self._ingest.ingest_bytes(name, data, extractor)

    def ingest_file(self, path: str) -> IngestResult:
        return self._ingest.ingest_file(path)

    def ingest_url(self, url: str) -> IngestResult:
        return self._ingest.ingest_url(url)

    def query(self, text: str, top_k: Optional[int] = None) -> RetrievalResult:
        return self._search.execute(text, top_k)

    def stats(self) -> StoreStats:
        return self._stats.execute()


__all__ = ["RagService"]
