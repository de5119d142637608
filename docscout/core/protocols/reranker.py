"""Reranker protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import SearchResult


@runtime_checkable
class RerankerProtocol(Protocol):
    """Protocol for reranking service."""

    async def rerank(
        self,
        results: list[SearchResult],
        query: str,
    ) -> list[SearchResult]:
        """Rerank search results by relevance.

        Args:
            results: Search results to rerank.
            query: User query.

        Returns:
            Permutation of the input with ranks recorded.
        """
        ...
