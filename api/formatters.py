"""Render use case results for terminal output."""

import json
from typing import List

from retrieval import RetrievalResult

from .use_cases import IngestResult, StoreStats


class ResponseFormatter:
    """Text and JSON renderings of results and errors."""

    @staticmethod
    def format_ingest_results(results: List[IngestResult]) -> str:
        if not results:
            return "[warn] nothing ingested"
        return "\n".join(
            f"• {r.document_name}: {r.segments_total} segments indexed" for r in results
        )

    @staticmethod
    def format_search_results_text(result: RetrievalResult) -> str:
        if result.is_empty:
            return "No results."
        lines = [result.context_text, "", "Sources: " + ", ".join(result.source_documents)]
        return "\n".join(lines)

    @staticmethod
    def format_search_results_json(result: RetrievalResult) -> str:
        payload = {
            "context": result.context_text,
            "sources": result.source_documents,
            "hits": [hit.to_dict() for hit in result.hits],
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)

    @staticmethod
    def format_stats(stats: StoreStats, verbose: bool = False) -> str:
        lines = [
            f"RAG store: {stats.data_dir}",
            f"• Documents: {stats.document_count}",
            f"• Indexed segments: {stats.segment_count}",
            f"• Total size (approx.): {stats.size_mb} MB",
        ]
        names = stats.document_names
        if verbose and names:
            lines.append("• Documents (max 20):")
            lines.extend(f"  {i}. {name}" for i, name in enumerate(names, 1))
        elif names:
            extra = stats.document_count - 1
            suffix = f" (+{extra} more)" if extra > 0 else ""
            lines.append(f"• First document: {names[0]}{suffix}")
        return "\n".join(lines)

    @staticmethod
    def format_error(exc: Exception) -> str:
        return f"[error] {exc}"


__all__ = ["ResponseFormatter"]
