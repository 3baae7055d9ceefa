"""Repositories owning the on-disk store files."""

from .document_repo import DocumentRepository
from .segment_repo import SegmentRepository

__all__ = ["DocumentRepository", "SegmentRepository"]
