"""Similarity scoring and top-K ranking.

Rankers share one contract, so an indexed nearest-neighbour implementation
can replace the exact scan without touching callers.
"""

import heapq
import math
from typing import Iterable, List, Protocol, Sequence

from domain import SearchHit, Segment
from shared.exceptions import DimensionMismatch

EPSILON = 1e-12


def vector_norm(vector: Sequence[float]) -> float:
    """Euclidean norm floored at EPSILON."""
    return max(math.sqrt(sum(x * x for x in vector)), EPSILON)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors of equal length.

    Raises:
        DimensionMismatch: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatch(f"cannot compare vectors of dimension {len(a)} and {len(b)}")
    dot = sum(x * y for x, y in zip(a, b))
    return dot / (vector_norm(a) * vector_norm(b))


class RankerProtocol(Protocol):
    """Scores a query vector against a corpus and keeps the best ``top_k``."""

    def rank(
        self,
        query_embedding: Sequence[float],
        corpus: Iterable[Segment],
        top_k: int,
    ) -> List[SearchHit]:
        ...


class ExactScanRanker:
    """Exact cosine ranking by full linear scan.

    Example:
        >>> ranker = ExactScanRanker()
        >>> hits = ranker.rank(query_vec, repo.scan_all(), top_k=8)
    """

    def rank(
        self,
        query_embedding: Sequence[float],
        corpus: Iterable[Segment],
        top_k: int,
    ) -> List[SearchHit]:
        """Return at most ``top_k`` hits, best first.

        Ties keep corpus order. Memory stays bounded by ``top_k`` because
        heapq.nlargest only retains the current best candidates.

        Raises:
            DimensionMismatch: If a segment's dimension differs from the query
        """
        if top_k <= 0:
            return []
        query_norm = vector_norm(query_embedding)

        def scored():
            for segment in corpus:
                if len(segment.embedding) != len(query_embedding):
                    raise DimensionMismatch(
                        f"segment {segment.id} has dimension {len(segment.embedding)}, "
                        f"query has {len(query_embedding)}"
                    )
                dot = sum(x * y for x, y in zip(query_embedding, segment.embedding))
                yield SearchHit(score=dot / (query_norm * vector_norm(segment.embedding)), segment=segment)

        return heapq.nlargest(top_k, scored(), key=lambda hit: hit.score)


__all__ = [
    "EPSILON",
    "ExactScanRanker",
    "RankerProtocol",
    "cosine_similarity",
    "vector_norm",
]
