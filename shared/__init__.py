"""Shared utilities and configuration for the RAG engine."""

from .config import RagConfig, load_config
from .exceptions import (
    DimensionMismatch,
    EmbeddingUnavailable,
    ExtractionFailed,
    IngestionFailed,
    RagError,
    RetrievalFailed,
    StoreUnavailable,
)
from .log_utils import configure_logging

__all__ = [
    "RagConfig",
    "load_config",
    "RagError",
    "ExtractionFailed",
    "EmbeddingUnavailable",
    "IngestionFailed",
    "RetrievalFailed",
    "DimensionMismatch",
    "StoreUnavailable",
    "configure_logging",
]
