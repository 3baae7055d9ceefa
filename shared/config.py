import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


DEFAULT_CHUNK_SIZE = 1400
DEFAULT_CHUNK_OVERLAP = 220
DEFAULT_EMBEDDING_DIM = 768
DEFAULT_TOP_K = 8


@dataclass
class RagConfig:
    """Configuration for the ingestion / retrieval engine."""

    data_dir: str
    index_filename: str
    docs_filename: str
    embedding_provider: str
    gemini_model: str
    embedding_dim: int
    max_items_per_request: int
    chunk_size: int
    chunk_overlap: int
    top_k: int
    stamp_model: bool
    fetch_timeout: int
    log_level: str
    api_key: Optional[str] = None

    @property
    def index_path(self) -> Path:
        return Path(self.data_dir) / self.index_filename

    @property
    def docs_path(self) -> Path:
        return Path(self.data_dir) / self.docs_filename

    @property
    def model_tag(self) -> Optional[str]:
        """Tag written on each segment so vectors from other models can be told apart."""
        if not self.stamp_model:
            return None
        return f"{self.embedding_provider}:{self.gemini_model}@{self.embedding_dim}"


def _parse_int(value: Optional[str], default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.lower() in ("1", "true", "yes", "y", "on")


def load_config() -> RagConfig:
    """Load configuration from environment variables."""
    load_dotenv()

    config = RagConfig(
        data_dir=os.getenv("RAG_DATA_DIR") or os.path.join(os.getcwd(), "data"),
        index_filename=os.getenv("RAG_INDEX_FILE", "index.jsonl"),
        docs_filename=os.getenv("RAG_DOCS_FILE", "docs.json"),
        embedding_provider=os.getenv("EMBEDDING_PROVIDER", "gemini").lower(),
        gemini_model=os.getenv("GEMINI_EMBED_MODEL", "gemini-embedding-001"),
        embedding_dim=_parse_int(os.getenv("EMBEDDING_DIM"), DEFAULT_EMBEDDING_DIM),
        max_items_per_request=_parse_int(os.getenv("MAX_ITEMS_PER_REQUEST"), 100),
        chunk_size=_parse_int(os.getenv("CHUNK_SIZE"), DEFAULT_CHUNK_SIZE),
        chunk_overlap=_parse_int(os.getenv("CHUNK_OVERLAP"), DEFAULT_CHUNK_OVERLAP),
        top_k=_parse_int(os.getenv("RAG_TOP_K"), DEFAULT_TOP_K),
        stamp_model=_parse_bool(os.getenv("STAMP_MODEL", "true"), True),
        fetch_timeout=_parse_int(os.getenv("RAG_FETCH_TIMEOUT"), 30),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
    )
    return config


__all__ = [
    "DEFAULT_CHUNK_OVERLAP",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_EMBEDDING_DIM",
    "DEFAULT_TOP_K",
    "RagConfig",
    "load_config",
]
