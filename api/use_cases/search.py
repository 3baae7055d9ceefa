"""Search use case orchestration."""

from typing import Optional

from embedding import EmbeddingClientProtocol
from retrieval import RankerProtocol, RetrievalPipeline, RetrievalResult
from shared.config import RagConfig
from storage import SegmentRepository


class SearchUseCase:
    """Runs one similarity query through the retrieval pipeline.

    Example:
        >>> use_case = SearchUseCase(embeddings_client, config)
        >>> result = use_case.execute("hydratation avant effort")
        >>> print(result.context_text)
    """

    def __init__(
        self,
        embeddings_client: EmbeddingClientProtocol,
        config: RagConfig,
        segments: Optional[SegmentRepository] = None,
        ranker: Optional[RankerProtocol] = None,
    ):
        self.config = config
        self.pipeline = RetrievalPipeline(embeddings_client, config, segments=segments, ranker=ranker)

    def execute(self, query: str, top_k: Optional[int] = None) -> RetrievalResult:
        """Raises RetrievalFailed if the query cannot be embedded."""
        return self.pipeline.retrieve(query, top_k)


__all__ = ["SearchUseCase"]
