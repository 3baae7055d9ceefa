"""Tests for environment configuration loading."""

from pathlib import Path

import pytest

from shared.config import load_config

ENV_VARS = [
    "RAG_DATA_DIR",
    "RAG_INDEX_FILE",
    "RAG_DOCS_FILE",
    "EMBEDDING_PROVIDER",
    "GEMINI_EMBED_MODEL",
    "EMBEDDING_DIM",
    "MAX_ITEMS_PER_REQUEST",
    "CHUNK_SIZE",
    "CHUNK_OVERLAP",
    "RAG_TOP_K",
    "STAMP_MODEL",
    "RAG_FETCH_TIMEOUT",
    "LOG_LEVEL",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    config = load_config()

    assert Path(config.data_dir) == tmp_path / "data"
    assert config.index_path == tmp_path / "data" / "index.jsonl"
    assert config.docs_path == tmp_path / "data" / "docs.json"
    assert config.embedding_provider == "gemini"
    assert config.gemini_model == "gemini-embedding-001"
    assert config.embedding_dim == 768
    assert config.chunk_size == 1400
    assert config.chunk_overlap == 220
    assert config.top_k == 8
    assert config.stamp_model is True
    assert config.api_key is None


def test_overrides(clean_env, tmp_path):
    clean_env.setenv("RAG_DATA_DIR", str(tmp_path / "store"))
    clean_env.setenv("EMBEDDING_DIM", "1536")
    clean_env.setenv("CHUNK_SIZE", "800")
    clean_env.setenv("CHUNK_OVERLAP", "100")
    clean_env.setenv("RAG_TOP_K", "3")
    clean_env.setenv("EMBEDDING_PROVIDER", "GEMINI")
    clean_env.setenv("LOG_LEVEL", "debug")

    config = load_config()

    assert config.data_dir == str(tmp_path / "store")
    assert config.embedding_dim == 1536
    assert (config.chunk_size, config.chunk_overlap, config.top_k) == (800, 100, 3)
    assert config.embedding_provider == "gemini"
    assert config.log_level == "DEBUG"


def test_invalid_int_falls_back(clean_env):
    clean_env.setenv("EMBEDDING_DIM", "lots")
    assert load_config().embedding_dim == 768


def test_api_key_fallback(clean_env):
    clean_env.setenv("GEMINI_API_KEY", "g-key")
    assert load_config().api_key == "g-key"
    clean_env.setenv("GOOGLE_API_KEY", "google-key")
    assert load_config().api_key == "google-key"


def test_model_tag(clean_env):
    config = load_config()
    assert config.model_tag == "gemini:gemini-embedding-001@768"
    clean_env.setenv("STAMP_MODEL", "off")
    assert load_config().model_tag is None
