"""Relevance scorer protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import SearchResult


@runtime_checkable
class RelevanceScorerProtocol(Protocol):
    """Strategy that orders candidates by relevance to a query."""

    async def score(self, query: str, candidates: list[SearchResult]) -> list[str]:
        """Rank candidates.

        Args:
            query: User query.
            candidates: Results to order, possibly with shortened summaries.

        Returns:
            Candidate ids, most relevant first. May omit ids or contain
            unknown ones; the caller repairs the order.
        """
        ...
