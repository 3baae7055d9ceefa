"""Retrieval layer: similarity ranking and the query pipeline."""

from .context import build_context, format_hit, source_documents
from .pipeline import RetrievalPipeline, RetrievalResult
from .search import EPSILON, ExactScanRanker, RankerProtocol, cosine_similarity, vector_norm

__all__ = [
    "EPSILON",
    "ExactScanRanker",
    "RankerProtocol",
    "RetrievalPipeline",
    "RetrievalResult",
    "build_context",
    "cosine_similarity",
    "format_hit",
    "source_documents",
    "vector_norm",
]
