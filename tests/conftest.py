"""Shared test fixtures for the RAG engine."""

import hashlib
import re
import sys
from pathlib import Path
from typing import List, Sequence

import pytest

# Add repository root to path so the layer packages import without install
sys.path.insert(0, str(Path(__file__).parent.parent))

from shared.config import RagConfig
from shared.exceptions import EmbeddingUnavailable

TEST_DIM = 256
_TOKEN = re.compile(r"\w+", re.UNICODE)


class FakeEmbeddings:
    """Deterministic bag-of-words embeddings.

    Each token is hashed into one bucket, so texts sharing words point in
    similar directions.
    """

    def __init__(self):
        self.calls: List[List[str]] = []

    @staticmethod
    def vectorize(text: str, dimension: int) -> List[float]:
        vector = [0.0] * dimension
        for token in _TOKEN.findall(text.lower()):
            bucket = int(hashlib.md5(token.encode("utf-8")).hexdigest(), 16) % dimension
            vector[bucket] += 1.0
        return vector

    def embed(self, texts: Sequence[str], dimension: int) -> List[List[float]]:
        self.calls.append(list(texts))
        return [self.vectorize(text, dimension) for text in texts]


class FailingEmbeddings:
    """Provider that is always unreachable."""

    def __init__(self):
        self.calls = 0

    def embed(self, texts: Sequence[str], dimension: int) -> List[List[float]]:
        self.calls += 1
        raise EmbeddingUnavailable("provider unreachable")


def make_config(data_dir: Path, **overrides) -> RagConfig:
    values = dict(
        data_dir=str(data_dir),
        index_filename="index.jsonl",
        docs_filename="docs.json",
        embedding_provider="gemini",
        gemini_model="gemini-embedding-001",
        embedding_dim=TEST_DIM,
        max_items_per_request=100,
        chunk_size=1400,
        chunk_overlap=220,
        top_k=8,
        stamp_model=True,
        fetch_timeout=5,
        log_level="INFO",
        api_key="test-key",
    )
    values.update(overrides)
    return RagConfig(**values)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Store directory that does not exist yet."""
    return tmp_path / "data"


@pytest.fixture
def config(data_dir: Path) -> RagConfig:
    return make_config(data_dir)


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture
def failing_embeddings() -> FailingEmbeddings:
    return FailingEmbeddings()


@pytest.fixture
def long_text() -> str:
    """3000 characters without whitespace, so segments are exact slices."""
    alphabet = "abcdefghijklmnopqrstuvwxyz0123456789"
    return "".join(alphabet[(i * 7 + i // 36) % len(alphabet)] for i in range(3000))
