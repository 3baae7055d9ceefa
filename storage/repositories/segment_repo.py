"""Segment repository: append-only line-delimited JSON log.

Each line holds one self-describing record
``{id, doc, chunkIndex, text, embedding[, model]}``.
"""

import json
import logging
from typing import Iterable, Iterator, Optional

from domain import Segment
from shared.config import RagConfig

from ..schema import StoreSchemaManager

logger = logging.getLogger(__name__)


class SegmentRepository:
    """Repository for Segment records.

    Writes only ever append. Reads are full sequential scans that restart
    from the first line on every call.
    """

    def __init__(self, config: RagConfig, schema: Optional[StoreSchemaManager] = None):
        self.config = config
        self.schema = schema or StoreSchemaManager(config)

    @property
    def path(self):
        return self.schema.index_path

    def _needs_leading_newline(self) -> bool:
        """True when the last write was torn and left no trailing newline."""
        try:
            with open(self.path, "rb") as handle:
                handle.seek(0, 2)
                if handle.tell() == 0:
                    return False
                handle.seek(-1, 2)
                return handle.read(1) != b"\n"
        except FileNotFoundError:
            return False

    def append(self, segments: Iterable[Segment]) -> int:
        """Append segments, one JSON line each.

        Args:
            segments: Segments to persist

        Returns:
            Number of records written

        Raises:
            OSError: On any write failure
            ValueError: If a segment fails validation (nothing is written)
        """
        lines = []
        for segment in segments:
            segment.validate()
            lines.append(json.dumps(segment.to_record(), ensure_ascii=False))
        if not lines:
            return 0

        self.schema.ensure_store()
        prefix = "\n" if self._needs_leading_newline() else ""
        with open(self.path, "a", encoding="utf-8") as handle:
            if prefix:
                handle.write(prefix)
            for line in lines:
                handle.write(line + "\n")
            handle.flush()
        logger.debug("Appended %d segments to %s", len(lines), self.path)
        return len(lines)

    def scan_all(self) -> Iterator[Segment]:
        """Yield every stored segment in append order.

        Blank and malformed lines are skipped.
        """
        self.schema.ensure_store()
        with open(self.path, "r", encoding="utf-8", errors="replace") as handle:
            for line_no, line in enumerate(handle, 1):
                if not line.strip():
                    continue
                try:
                    yield Segment.from_record(json.loads(line))
                except (ValueError, KeyError, TypeError) as exc:
                    logger.debug("Skipping malformed index line %d: %s", line_no, exc)

    def count(self) -> int:
        """Number of non-blank lines in the index."""
        try:
            with open(self.path, "r", encoding="utf-8", errors="replace") as handle:
                return sum(1 for line in handle if line.strip())
        except FileNotFoundError:
            return 0


__all__ = ["SegmentRepository"]
