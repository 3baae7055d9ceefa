"""On-disk layout management for the segment index and document registry."""

import json
import logging
from pathlib import Path

from shared.config import RagConfig

logger = logging.getLogger(__name__)

EMPTY_REGISTRY = {"docs": []}


class StoreSchemaManager:
    """Responsible for ensuring the data directory and store files exist."""

    def __init__(self, config: RagConfig):
        self.config = config

    @property
    def data_dir(self) -> Path:
        return Path(self.config.data_dir)

    @property
    def index_path(self) -> Path:
        return self.config.index_path

    @property
    def docs_path(self) -> Path:
        return self.config.docs_path

    def ensure_store(self) -> None:
        """Create missing store files. Existing files are left untouched."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.index_path.exists():
            self.index_path.touch()
            logger.info("Created segment index %s", self.index_path)
        if not self.docs_path.exists():
            with open(self.docs_path, "w", encoding="utf-8") as handle:
                json.dump(EMPTY_REGISTRY, handle, indent=2)
            logger.info("Created document registry %s", self.docs_path)

    def disk_usage(self) -> int:
        """Combined size in bytes of the index and registry files."""
        total = 0
        for path in (self.index_path, self.docs_path):
            try:
                total += path.stat().st_size
            except FileNotFoundError:
                continue
        return total


__all__ = ["EMPTY_REGISTRY", "StoreSchemaManager"]
