"""Ingestion use case orchestration.

Rules:
- MAY import ingestion, embedding, storage, shared
- MUST NOT access store files directly
"""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from urllib.parse import unquote, urlparse

import requests

from domain import Segment, utc_now_iso
from embedding import EmbeddingClientProtocol
from ingestion import PdfExtractor, TextExtractor, TextSegmenter, extractor_for
from shared.config import RagConfig
from shared.exceptions import EmbeddingUnavailable, IngestionFailed
from storage import DocumentRepository, SegmentRepository

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """Result of one document ingestion.

    Attributes:
        document_name: Registry key of the document
        segments_added: Records appended to the segment store
        segments_total: Segments produced by segmentation
    """

    document_name: str
    segments_added: int
    segments_total: int


class IngestUseCase:
    """Orchestrates the document ingestion pipeline.

    Pipeline:
    1. Segment normalized text (ingestion layer)
    2. Embed every segment in one call (embedding layer)
    3. Append segment records (storage layer)
    4. Register the document once (storage layer)

    Callers must serialize ingestions that target the same store.

    Example:
        >>> use_case = IngestUseCase(embeddings_client, config)
        >>> result = use_case.execute("guide.pdf", text)
    """

    def __init__(
        self,
        embeddings_client: EmbeddingClientProtocol,
        config: RagConfig,
        segments: Optional[SegmentRepository] = None,
        documents: Optional[DocumentRepository] = None,
        segmenter: Optional[TextSegmenter] = None,
    ):
        self.config = config
        self.embeddings_client = embeddings_client
        self.segments = segments or SegmentRepository(config)
        self.documents = documents or DocumentRepository(config)
        self.segmenter = segmenter or TextSegmenter(config.chunk_size, config.chunk_overlap)

    def execute(self, document_name: str, raw_text: str, size: Optional[int] = None) -> IngestResult:
        """Ingest one document's text.

        Args:
            document_name: Unique document name
            raw_text: Extracted plain text
            size: Raw document size in bytes (defaults to the UTF-8 length of raw_text)

        Returns:
            IngestResult; zero counts for documents without text

        Raises:
            IngestionFailed: If embedding or persistence fails
        """
        chunks = self.segmenter.segment(raw_text)
        if not chunks:
            logger.info("Document %s has no text; nothing indexed", document_name)
            return IngestResult(document_name, 0, 0)

        if self.documents.exists(document_name):
            logger.warning(
                "Document %s is already registered; appending %d more segments",
                document_name,
                len(chunks),
            )

        try:
            vectors = self.embeddings_client.embed(chunks, self.config.embedding_dim)
        except EmbeddingUnavailable as exc:
            raise IngestionFailed(f"{document_name}: {exc}") from exc
        if len(vectors) != len(chunks):
            raise IngestionFailed(
                f"{document_name}: expected {len(chunks)} embeddings, received {len(vectors)}"
            )
        for index, vector in enumerate(vectors):
            if len(vector) != self.config.embedding_dim:
                raise IngestionFailed(
                    f"{document_name}: embedding {index} has dimension {len(vector)}, "
                    f"expected {self.config.embedding_dim}"
                )

        run_id = int(time.time() * 1000)
        records = self._build_segments(document_name, chunks, vectors, run_id)

        try:
            added = self.segments.append(records)
        except (OSError, ValueError) as exc:
            raise IngestionFailed(f"{document_name}: could not append segments: {exc}") from exc

        if size is None:
            size = len(raw_text.encode("utf-8"))
        try:
            self.documents.register(document_name, size, utc_now_iso())
        except OSError as exc:
            raise IngestionFailed(f"{document_name}: could not register document: {exc}") from exc

        logger.info("Indexed %s: %d segments", document_name, added)
        return IngestResult(document_name, added, len(chunks))

    def _build_segments(
        self,
        document_name: str,
        chunks: List[str],
        vectors: List[List[float]],
        run_id: int,
    ) -> List[Segment]:
        model_tag = self.config.model_tag
        return [
            Segment(
                id=f"{run_id}_{index}",
                doc=document_name,
                chunk_index=index,
                text=text,
                embedding=[float(x) for x in vector],
                model=model_tag,
            )
            for index, (text, vector) in enumerate(zip(chunks, vectors))
        ]

    def ingest_bytes(
        self,
        document_name: str,
        data: bytes,
        extractor: Optional[TextExtractor] = None,
    ) -> IngestResult:
        """Extract text from raw document bytes and ingest it.

        Raises:
            ExtractionFailed: If the extractor cannot read the document
            IngestionFailed: If embedding or persistence fails
        """
        extractor = extractor or extractor_for(document_name)
        text = extractor.extract(data)
        if isinstance(extractor, PdfExtractor) and PdfExtractor.is_low_text_density(text):
            logger.warning("%s looks scanned or sparse; consider running OCR first", document_name)
        return self.execute(document_name, text, size=len(data))

    def ingest_file(self, path: str) -> IngestResult:
        """Ingest a local file under its base name."""
        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as exc:
            raise IngestionFailed(f"cannot read {file_path.name}: {exc}") from exc
        return self.ingest_bytes(file_path.name, data)

    def ingest_url(self, url: str) -> IngestResult:
        """Download a document and ingest it under the URL's last path component."""
        try:
            response = requests.get(url, timeout=self.config.fetch_timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise IngestionFailed(f"download failed for {url}: {exc}") from exc
        return self.ingest_bytes(document_name_from_url(url), response.content)


def document_name_from_url(url: str) -> str:
    """Last URL path component without query string, or a timestamped fallback."""
    name = os.path.basename(unquote(urlparse(url).path))
    return name or f"doc_{int(time.time() * 1000)}.pdf"


__all__ = ["IngestResult", "IngestUseCase", "document_name_from_url"]
