"""Storage layer.

Handles durable persistence of segments and the document registry.

Rules:
- MUST NOT do embedding generation, search logic, or file parsing
- MUST NOT import ingestion, embedding, retrieval, api
- MAY import domain, shared
"""

from .repositories import DocumentRepository, SegmentRepository
from .schema import StoreSchemaManager

__all__ = [
    # Layout
    "StoreSchemaManager",
    # Repositories
    "DocumentRepository",
    "SegmentRepository",
]
