"""Context assembly for ranked hits."""

from typing import List

from domain import SearchHit

HIT_SEPARATOR = "\n---\n"


def format_hit(hit: SearchHit) -> str:
    segment = hit.segment
    return f"[{segment.doc} · #{segment.chunk_index} · {hit.score:.3f}]\n{segment.text}"


def build_context(hits: List[SearchHit]) -> str:
    """Concatenate hits in ranked order with a visible separator."""
    return HIT_SEPARATOR.join(format_hit(hit) for hit in hits)


def source_documents(hits: List[SearchHit]) -> List[str]:
    """Distinct document names in first-seen (ranked) order."""
    seen = dict.fromkeys(hit.segment.doc for hit in hits)
    return list(seen)


__all__ = ["HIT_SEPARATOR", "build_context", "format_hit", "source_documents"]
