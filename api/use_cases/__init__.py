"""Use case orchestration for the RAG engine."""

from .ingest import IngestResult, IngestUseCase
from .search import SearchUseCase
from .stats import StatsUseCase, StoreStats

__all__ = ["IngestResult", "IngestUseCase", "SearchUseCase", "StatsUseCase", "StoreStats"]
