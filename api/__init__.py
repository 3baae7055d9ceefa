"""API layer: use cases, service facade and CLI.

Rules:
- MAY import every other layer
- MUST NOT implement ranking or persistence directly
"""

from .service import RagService
from .use_cases import IngestResult, IngestUseCase, SearchUseCase, StatsUseCase, StoreStats

__all__ = [
    "IngestResult",
    "IngestUseCase",
    "RagService",
    "SearchUseCase",
    "StatsUseCase",
    "StoreStats",
]
