"""Tests for the ingestion use case."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from api.use_cases.ingest import IngestResult, IngestUseCase, document_name_from_url
from ingestion import PlainTextExtractor
from shared.exceptions import ExtractionFailed, IngestionFailed
from storage import DocumentRepository, SegmentRepository

from conftest import TEST_DIM


class BrokenSegmentRepository(SegmentRepository):
    def append(self, segments):
        raise OSError("disk full")


class TestIngestUseCase:
    def test_guide_scenario(self, config, fake_embeddings, long_text):
        use_case = IngestUseCase(fake_embeddings, config)

        result = use_case.execute("guide.pdf", long_text)

        assert result == IngestResult("guide.pdf", 3, 3)
        segments = list(SegmentRepository(config).scan_all())
        assert [s.chunk_index for s in segments] == [0, 1, 2]
        assert segments[1].text == long_text[1180:2580]
        assert segments[2].text == long_text[2360:3000]
        assert all(s.text for s in segments)
        assert all(len(s.embedding) == TEST_DIM for s in segments)
        docs = DocumentRepository(config).list()
        assert [(d.name, d.size) for d in docs] == [("guide.pdf", 3000)]

    def test_embeds_whole_document_in_one_call(self, config, fake_embeddings, long_text):
        IngestUseCase(fake_embeddings, config).execute("guide.pdf", long_text)

        assert len(fake_embeddings.calls) == 1
        assert len(fake_embeddings.calls[0]) == 3

    def test_ids_share_run_prefix(self, config, fake_embeddings, long_text):
        IngestUseCase(fake_embeddings, config).execute("guide.pdf", long_text)

        ids = [s.id for s in SegmentRepository(config).scan_all()]
        prefixes = {i.rsplit("_", 1)[0] for i in ids}
        assert len(prefixes) == 1
        assert [i.rsplit("_", 1)[1] for i in ids] == ["0", "1", "2"]

    def test_segments_are_stamped_with_model(self, config, fake_embeddings):
        IngestUseCase(fake_embeddings, config).execute("a.txt", "hydratation")

        line = json.loads(config.index_path.read_text().splitlines()[0])
        assert line["model"] == config.model_tag
        assert set(line) == {"id", "doc", "chunkIndex", "text", "embedding", "model"}

    @pytest.mark.parametrize("text", ["", "   \n\n\t  "])
    def test_empty_document_is_zero_count_success(self, config, fake_embeddings, text):
        result = IngestUseCase(fake_embeddings, config).execute("empty.pdf", text)

        assert result == IngestResult("empty.pdf", 0, 0)
        assert fake_embeddings.calls == []
        assert DocumentRepository(config).list() == []

    def test_reingest_keeps_one_registry_entry(self, config, fake_embeddings, long_text):
        use_case = IngestUseCase(fake_embeddings, config)

        use_case.execute("guide.pdf", long_text)
        use_case.execute("guide.pdf", long_text)
        use_case.execute("guide.pdf", long_text)

        assert len(DocumentRepository(config).list()) == 1
        assert SegmentRepository(config).count() == 9

    def test_embedding_failure(self, config, failing_embeddings, long_text):
        with pytest.raises(IngestionFailed) as excinfo:
            IngestUseCase(failing_embeddings, config).execute("guide.pdf", long_text)

        assert "provider unreachable" in str(excinfo.value)
        assert DocumentRepository(config).list() == []
        assert SegmentRepository(config).count() == 0

    def test_embedding_count_mismatch(self, config, long_text):
        client = MagicMock()
        client.embed.return_value = [[1.0] * TEST_DIM]

        with pytest.raises(IngestionFailed):
            IngestUseCase(client, config).execute("guide.pdf", long_text)
        assert DocumentRepository(config).list() == []

    def test_embedding_dimension_mismatch(self, config):
        client = MagicMock()
        client.embed.return_value = [[1.0, 0.0, 0.0]]

        with pytest.raises(IngestionFailed) as excinfo:
            IngestUseCase(client, config).execute("a.txt", "hydratation")

        assert f"expected {TEST_DIM}" in str(excinfo.value)
        assert SegmentRepository(config).count() == 0
        assert DocumentRepository(config).list() == []

    def test_append_failure_skips_registration(self, config, fake_embeddings, long_text):
        use_case = IngestUseCase(fake_embeddings, config, segments=BrokenSegmentRepository(config))

        with pytest.raises(IngestionFailed) as excinfo:
            use_case.execute("guide.pdf", long_text)

        assert "disk full" in str(excinfo.value)
        assert isinstance(excinfo.value.__cause__, OSError)
        assert DocumentRepository(config).list() == []

    def test_registry_failure(self, config, fake_embeddings):
        documents = DocumentRepository(config)
        use_case = IngestUseCase(fake_embeddings, config, documents=documents)

        with patch.object(documents, "register", side_effect=PermissionError("read-only")):
            with pytest.raises(IngestionFailed):
                use_case.execute("a.txt", "hydratation")

    def test_custom_window(self, data_dir, fake_embeddings):
        from conftest import make_config

        config = make_config(data_dir, chunk_size=100, chunk_overlap=20)
        result = IngestUseCase(fake_embeddings, config).execute("a.txt", "x" * 250)

        assert result.segments_added == 4


class TestIngestSources:
    def test_ingest_bytes_uses_byte_size(self, config, fake_embeddings):
        data = "Hydratation : boire régulièrement.".encode("utf-8")

        result = IngestUseCase(fake_embeddings, config).ingest_bytes("notes.txt", data)

        assert result.segments_added == 1
        assert DocumentRepository(config).list()[0].size == len(data)

    def test_ingest_bytes_with_explicit_extractor(self, config, fake_embeddings):
        result = IngestUseCase(fake_embeddings, config).ingest_bytes(
            "upload.bin", b"plain words", extractor=PlainTextExtractor()
        )
        assert result.segments_added == 1

    def test_ingest_bytes_rejects_non_pdf(self, config, fake_embeddings):
        with pytest.raises(ExtractionFailed):
            IngestUseCase(fake_embeddings, config).ingest_bytes("guide.pdf", b"not a pdf")
        assert fake_embeddings.calls == []

    def test_ingest_file(self, config, fake_embeddings, tmp_path):
        path = tmp_path / "plan.md"
        path.write_text("# Plan\n\nHydratation et sommeil.", encoding="utf-8")

        result = IngestUseCase(fake_embeddings, config).ingest_file(str(path))

        assert result.document_name == "plan.md"
        assert DocumentRepository(config).exists("plan.md")

    def test_ingest_missing_file(self, config, fake_embeddings, tmp_path):
        with pytest.raises(IngestionFailed):
            IngestUseCase(fake_embeddings, config).ingest_file(str(tmp_path / "missing.txt"))

    def test_ingest_url(self, config, fake_embeddings):
        response = MagicMock()
        response.content = b"hydratation avant effort"
        response.raise_for_status.return_value = None

        with patch("api.use_cases.ingest.requests.get", return_value=response) as get:
            result = IngestUseCase(fake_embeddings, config).ingest_url(
                "https://example.com/files/notes.txt?sig=abc"
            )

        get.assert_called_once_with("https://example.com/files/notes.txt?sig=abc", timeout=config.fetch_timeout)
        assert result.document_name == "notes.txt"
        assert DocumentRepository(config).list()[0].size == len(response.content)

    def test_ingest_url_http_error(self, config, fake_embeddings):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")

        with patch("api.use_cases.ingest.requests.get", return_value=response):
            with pytest.raises(IngestionFailed) as excinfo:
                IngestUseCase(fake_embeddings, config).ingest_url("https://example.com/missing.pdf")
        assert "404" in str(excinfo.value)

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/docs/guide.pdf", "guide.pdf"),
            ("https://example.com/docs/guide.pdf?token=1#page=2", "guide.pdf"),
            ("https://example.com/docs/mon%20guide.pdf", "mon guide.pdf"),
        ],
    )
    def test_document_name_from_url(self, url, expected):
        assert document_name_from_url(url) == expected

    def test_document_name_fallback(self):
        name = document_name_from_url("https://example.com/")
        assert name.startswith("doc_") and name.endswith(".pdf")
