"""Read-only statistics about the store."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shared.config import RagConfig
from shared.exceptions import StoreUnavailable
from storage import DocumentRepository, SegmentRepository, StoreSchemaManager

MAX_LISTED_DOCUMENTS = 20


@dataclass
class StoreStats:
    data_dir: str
    document_count: int
    segment_count: int
    size_bytes: int
    document_names: List[str] = field(default_factory=list)

    @property
    def size_mb(self) -> float:
        return round(self.size_bytes / (1024 * 1024), 2)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dataDir": self.data_dir,
            "docsCount": self.document_count,
            "chunks": self.segment_count,
            "sizeBytes": self.size_bytes,
            "sizeMB": self.size_mb,
            "docNames": self.document_names,
        }


class StatsUseCase:
    """Document count, segment count and approximate on-disk size."""

    def __init__(
        self,
        config: RagConfig,
        segments: Optional[SegmentRepository] = None,
        documents: Optional[DocumentRepository] = None,
    ):
        self.config = config
        self.schema = StoreSchemaManager(config)
        self.segments = segments or SegmentRepository(config, self.schema)
        self.documents = documents or DocumentRepository(config, self.schema)

    def execute(self) -> StoreStats:
        """
        Collect store statistics.

        Raises:
            StoreUnavailable: If the store files cannot be read
        """
        try:
            documents = self.documents.list()
            segment_count = self.segments.count()
            size_bytes = self.schema.disk_usage()
        except OSError as exc:
            raise StoreUnavailable(f"could not read store at {self.config.data_dir}: {exc}") from exc
        return StoreStats(
            data_dir=str(self.config.data_dir),
            document_count=len(documents),
            segment_count=segment_count,
            size_bytes=size_bytes,
            document_names=[doc.name for doc in documents[:MAX_LISTED_DOCUMENTS]],
        )


__all__ = ["MAX_LISTED_DOCUMENTS", "StatsUseCase", "StoreStats"]
