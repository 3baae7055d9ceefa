"""Embedding provider abstraction.

The core only depends on ``EmbeddingClientProtocol``; concrete providers are
built by ``EmbeddingProviderFactory`` from configuration.
"""

import logging
from typing import Any, List, Optional, Protocol, Sequence

from shared.config import RagConfig
from shared.exceptions import EmbeddingUnavailable

logger = logging.getLogger(__name__)


class EmbeddingClientProtocol(Protocol):
    """Capability: one fixed-length vector per input string, in input order."""

    def embed(self, texts: Sequence[str], dimension: int) -> List[List[float]]:
        ...


def _as_vector(value: Any) -> Optional[List[float]]:
    if isinstance(value, dict):
        value = value.get("values")
    elif value is not None and not isinstance(value, (list, tuple)):
        value = getattr(value, "values", None)
    if not isinstance(value, (list, tuple)) or not value:
        return None
    if not all(isinstance(x, (int, float)) and not isinstance(x, bool) for x in value):
        return None
    return [float(x) for x in value]


def _field(response: Any, name: str) -> Any:
    if isinstance(response, dict):
        return response.get(name)
    return getattr(response, name, None)


def extract_vectors(response: Any, expected: int) -> List[List[float]]:
    """Interpret an embedding response as ``expected`` vectors.

    Accepts a per-input vector list (``embeddings`` or a nested ``embedding``)
    or, when a single input was sent, a single aggregate vector.

    Raises:
        EmbeddingUnavailable: If the response has neither shape
    """
    batch = _field(response, "embeddings")
    if isinstance(batch, (list, tuple)) and batch:
        vectors = [_as_vector(item) for item in batch]
        if all(v is not None for v in vectors):
            return vectors  # type: ignore[return-value]

    single = _field(response, "embedding")
    if isinstance(single, (list, tuple)) and single and isinstance(single[0], (list, tuple, dict)):
        vectors = [_as_vector(item) for item in single]
        if all(v is not None for v in vectors):
            return vectors  # type: ignore[return-value]

    vector = _as_vector(single)
    if vector is not None and expected == 1:
        return [vector]

    raise EmbeddingUnavailable("embedding response not recognized")


class GeminiEmbeddings:
    """Thin adapter around Google Gemini embedding endpoints."""

    def __init__(
        self,
        model: str = "gemini-embedding-001",
        api_key: Optional[str] = None,
        max_items_per_request: int = 100,
    ):
        import google.generativeai as genai  # type: ignore

        if not api_key:
            raise EmbeddingUnavailable("GOOGLE_API_KEY (or GEMINI_API_KEY) is required for Gemini embeddings")
        genai.configure(api_key=api_key)
        self._genai = genai
        self._model = model
        self._max_items = max(1, max_items_per_request)

    @property
    def model(self) -> str:
        return self._model

    def _embed_batch(self, texts: List[str], dimension: int) -> List[List[float]]:
        try:
            response = self._genai.embed_content(
                model=self._model,
                content=texts,
                output_dimensionality=dimension,
            )
        except Exception as exc:
            raise EmbeddingUnavailable(f"Gemini embed_content failed: {exc}") from exc
        return extract_vectors(response, len(texts))

    def embed(self, texts: Sequence[str], dimension: int) -> List[List[float]]:
        """Embed a batch of texts, splitting into provider-sized requests."""
        items = list(texts)
        if not items:
            raise ValueError("embed() requires at least one text")

        vectors: List[List[float]] = []
        for start in range(0, len(items), self._max_items):
            vectors.extend(self._embed_batch(items[start : start + self._max_items], dimension))

        if len(vectors) != len(items):
            raise EmbeddingUnavailable(
                f"expected {len(items)} embeddings, received {len(vectors)}"
            )
        for vector in vectors:
            if len(vector) != dimension:
                raise EmbeddingUnavailable(
                    f"EMBEDDING_DIM mismatch for {self._model}: expected {dimension}, received {len(vector)}"
                )
        logger.debug("Embedded %d texts with %s", len(items), self._model)
        return vectors

    def embed_query(self, text: str, dimension: int) -> List[float]:
        """Embed a query string."""
        return self.embed([text], dimension)[0]


class EmbeddingProviderFactory:
    """Factory for producing embedding clients based on configuration."""

    @staticmethod
    def create(config: RagConfig) -> EmbeddingClientProtocol:
        """
        Create embedding client based on config.

        Args:
            config: RagConfig with provider settings

        Returns:
            Embedding client

        Raises:
            ValueError: For unknown provider names
            EmbeddingUnavailable: When the provider cannot be initialized
        """
        if config.embedding_provider == "gemini":
            return GeminiEmbeddings(
                model=config.gemini_model,
                api_key=config.api_key,
                max_items_per_request=config.max_items_per_request,
            )
        raise ValueError(f"Unknown EMBEDDING_PROVIDER: {config.embedding_provider!r}")


__all__ = [
    "EmbeddingClientProtocol",
    "EmbeddingProviderFactory",
    "GeminiEmbeddings",
    "extract_vectors",
]
