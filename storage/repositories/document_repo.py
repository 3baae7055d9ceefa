"""Document repository implementation.

Persists the registry of ingested documents as a single JSON object
``{"docs": [{"name", "size", "createdAt"}, ...]}``.
"""

import json
import logging
import os
import tempfile
from typing import Any, Dict, List, Optional

from domain import Document, utc_now_iso
from shared.config import RagConfig

from ..schema import StoreSchemaManager

logger = logging.getLogger(__name__)


class DocumentRepository:
    """Repository for Document entities.

    A name is registered at most once; later registrations are no-ops.
    """

    def __init__(self, config: RagConfig, schema: Optional[StoreSchemaManager] = None):
        self.config = config
        self.schema = schema or StoreSchemaManager(config)

    @property
    def path(self):
        return self.schema.docs_path

    def _load_entries(self) -> List[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except FileNotFoundError:
            return []
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Could not read document registry %s; treating as empty: %s", self.path, exc)
            return []

        entries = raw if isinstance(raw, list) else (raw.get("docs") if isinstance(raw, dict) else None)
        if not isinstance(entries, list):
            logger.warning("Document registry %s has no 'docs' list; treating as empty", self.path)
            return []
        return [entry for entry in entries if isinstance(entry, dict)]

    def _save_entries(self, entries: List[Dict[str, Any]]) -> None:
        self.schema.ensure_store()
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".docs-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump({"docs": entries}, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def register(self, name: str, size: int, created_at: Optional[str] = None) -> bool:
        """Register a document unless the name is already present.

        Args:
            name: Document name (unique key)
            size: Raw document size in bytes
            created_at: ISO timestamp, defaults to now

        Returns:
            True if a new entry was written, False if the name already existed

        Raises:
            OSError: If the registry cannot be written
        """
        entries = self._load_entries()
        if any(entry.get("name") == name for entry in entries):
            return False
        document = Document(name=name, size=int(size), created_at=created_at or utc_now_iso())
        entries.append(document.to_dict())
        self._save_entries(entries)
        logger.info("Registered document %s (%d bytes)", name, document.size)
        return True

    def list(self) -> List[Document]:
        """All registered documents in insertion order."""
        return [Document.from_dict(entry) for entry in self._load_entries()]

    def exists(self, name: str) -> bool:
        return any(entry.get("name") == name for entry in self._load_entries())

    def count(self) -> int:
        return len(self._load_entries())


__all__ = ["DocumentRepository"]
