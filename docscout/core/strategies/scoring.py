import logging
from abc import ABC, abstractmethod

from ..models.document import SearchResult

logger = logging.getLogger(__name__)


class ScoringStrategy(ABC):
    """Base class for relevance scoring strategies."""

    @abstractmethod
    async def score(self, query: str, candidates: list[SearchResult]) -> list[str]:
        """Return candidate ids, most relevant first."""
        ...


class KeywordOverlapScorer(ScoringStrategy):
    """Offline scorer: counts query words found inside title words."""

    async def score(self, query: str, candidates: list[SearchResult]) -> list[str]:
        """Rank by keyword overlap.

        A query word counts once if any title word contains it. Ties keep
        their input order.
        """
        query_words = query.lower().split()

        def overlap(result: SearchResult) -> int:
            title_words = result.title.lower().split()
            return sum(1 for word in query_words if any(word in t for t in title_words))

        scored = [(result.id, overlap(result)) for result in candidates]
        scored.sort(key=lambda item: item[1], reverse=True)

        if logger.isEnabledFor(logging.DEBUG):
            top = ", ".join(str(count) for _, count in scored[:3])
            logger.debug(f"Keyword overlap top-3: [{top}]")

        return [result_id for result_id, _ in scored]
