"""Embedding layer: provider adapters behind a narrow capability interface."""

from .provider import (
    EmbeddingClientProtocol,
    EmbeddingProviderFactory,
    GeminiEmbeddings,
    extract_vectors,
)

__all__ = [
    "EmbeddingClientProtocol",
    "EmbeddingProviderFactory",
    "GeminiEmbeddings",
    "extract_vectors",
]
