"""Retrieval pipeline orchestration.

Coordinates query embedding, the store scan, ranking and context assembly.

Rules:
- MAY import domain, storage, embedding, shared
- MUST NOT mutate the store
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from domain import SearchHit, Segment
from embedding import EmbeddingClientProtocol
from shared.config import RagConfig
from shared.exceptions import EmbeddingUnavailable, RetrievalFailed
from storage import SegmentRepository

from .context import build_context, source_documents
from .search import ExactScanRanker, RankerProtocol

logger = logging.getLogger(__name__)


@dataclass
class RetrievalResult:
    """Answer to one query.

    Attributes:
        context_text: Hits rendered in ranked order, separator-joined
        source_documents: Distinct document names among the hits
        hits: Ranked hits, best first
    """

    context_text: str = ""
    source_documents: List[str] = field(default_factory=list)
    hits: List[SearchHit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.hits


class RetrievalPipeline:
    """Orchestrates the query pipeline.

    Pipeline stages:
    1. Embed the query string (one provider call)
    2. Scan the segment store, skipping incomparable records
    3. Rank with the configured ranker
    4. Assemble context and sources

    Example:
        >>> pipeline = RetrievalPipeline(embeddings_client, config)
        >>> result = pipeline.retrieve("hydratation avant effort", top_k=8)
    """

    def __init__(
        self,
        embeddings_client: EmbeddingClientProtocol,
        config: RagConfig,
        segments: Optional[SegmentRepository] = None,
        ranker: Optional[RankerProtocol] = None,
    ):
        self.config = config
        self.embeddings_client = embeddings_client
        self.segments = segments or SegmentRepository(config)
        self.ranker = ranker or ExactScanRanker()

    def _embed_query(self, text: str) -> List[float]:
        try:
            vectors = self.embeddings_client.embed([text], self.config.embedding_dim)
        except EmbeddingUnavailable as exc:
            raise RetrievalFailed(exc.message) from exc
        if not vectors:
            raise RetrievalFailed("embedding provider returned no vector for the query")
        return vectors[0]

    def _comparable(self, dimension: int, skipped: dict) -> Iterator[Segment]:
        model_tag = self.config.model_tag
        for segment in self.segments.scan_all():
            if segment.dimension != dimension:
                skipped["dimension"] += 1
                continue
            if model_tag and segment.model and segment.model != model_tag:
                skipped["model"] += 1
                continue
            yield segment

    def retrieve(self, text: str, top_k: Optional[int] = None) -> RetrievalResult:
        """
        Execute a similarity query.

        Args:
            text: Query text
            top_k: Maximum number of hits (defaults to config.top_k)

        Returns:
            RetrievalResult; empty for blank queries or an empty/unreadable store

        Raises:
            RetrievalFailed: If the query cannot be embedded
        """
        query = (text or "").strip()
        if not query:
            return RetrievalResult()
        k = self.config.top_k if top_k is None else top_k

        query_embedding = self._embed_query(query)

        skipped = {"dimension": 0, "model": 0}
        try:
            hits = self.ranker.rank(query_embedding, self._comparable(len(query_embedding), skipped), k)
        except OSError as exc:
            logger.warning("Segment store unreadable, returning no results: %s", exc)
            return RetrievalResult()

        if skipped["dimension"] or skipped["model"]:
            logger.warning(
                "Skipped %d segments with another dimension and %d from another model",
                skipped["dimension"],
                skipped["model"],
            )
        logger.debug("Query matched %d hits (top_k=%d)", len(hits), k)
        return RetrievalResult(
            context_text=build_context(hits),
            source_documents=source_documents(hits),
            hits=hits,
        )


__all__ = ["RetrievalPipeline", "RetrievalResult"]
