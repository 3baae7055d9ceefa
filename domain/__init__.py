"""Domain layer: entities shared by every other layer.

Rules:
- MUST NOT import ingestion, embedding, storage, retrieval or api
"""

from .entities import Document, SearchHit, Segment, utc_now_iso

__all__ = ["Document", "SearchHit", "Segment", "utc_now_iso"]
