"""Search service - session-scoped search, rerank and fetch."""

import logging
from typing import Iterable, Optional

from ..errors import RerankError
from ..models.document import DocumentContent, SearchOutcome, SearchResult
from ..protocols.reranker import RerankerProtocol
from .coordinator_service import RetrievalCoordinator, SourceKey

logger = logging.getLogger(__name__)


class StaleSearchError(Exception):
    """A newer search for the same session superseded this one."""

    pass


class SearchService:
    """Search facade used by the presentation layer.

    Each session keeps a generation counter; when a newer search starts for
    the same session, results of older in-flight searches are discarded.
    """

    def __init__(
        self,
        coordinator: RetrievalCoordinator,
        reranker: Optional[RerankerProtocol] = None,
        rerank_enabled: bool = True,
        max_results_per_source: int = 10,
    ):
        """Initialize search service.

        Args:
            coordinator: Multi-source retrieval coordinator.
            reranker: Reranking service, or None to keep retrieval order.
            rerank_enabled: Default for the per-call ``rerank`` flag.
            max_results_per_source: Per-source result cap.
        """
        self._coordinator = coordinator
        self._reranker = reranker
        self._rerank_enabled = rerank_enabled
        self._max_results_per_source = max_results_per_source
        self._generations: dict[str, int] = {}

    async def search(
        self,
        query: str,
        sources: Optional[Iterable[SourceKey]] = None,
        session_id: str = "default",
        rerank: Optional[bool] = None,
    ) -> Optional[SearchOutcome]:
        """Search, optionally rerank, and return the merged outcome.

        Args:
            query: Search query.
            sources: Sources to query, defaults to the coordinator's selection.
            session_id: Searches in one session supersede each other.
            rerank: Override the configured rerank default.

        Returns:
            The outcome, or None if a newer search in the session started
            while this one was running.

        Raises:
            AllSourcesFailedError: Every enabled source failed.
            InvalidRequestError: Empty source selection.
        """
        generation = self._generations.get(session_id, 0) + 1
        self._generations[session_id] = generation

        try:
            results, errors = await self._coordinator.search(
                query, sources, self._max_results_per_source
            )
            self._ensure_current(session_id, generation)

            reranked = False
            should_rerank = self._rerank_enabled if rerank is None else rerank
            if should_rerank and self._reranker is not None and len(results) > 1:
                try:
                    results = await self._reranker.rerank(results, query)
                    reranked = True
                except RerankError as e:
                    logger.warning(f"Rerank failed, keeping retrieval order: {e}")
                self._ensure_current(session_id, generation)
        except StaleSearchError:
            logger.info(f"Discarding stale results for '{query[:50]}' (session {session_id})")
            return None

        return SearchOutcome(results=results, errors=errors, reranked=reranked)

    async def fetch(self, result: SearchResult) -> DocumentContent:
        return await self._coordinator.fetch(result)

    async def ask(
        self,
        query: str,
        sources: Optional[Iterable[SourceKey]] = None,
        session_id: str = "default",
    ) -> Optional[DocumentContent]:
        """Search and fetch the best result, or None if nothing usable came back."""
        outcome = await self.search(query, sources, session_id)
        if outcome is None or not outcome.results:
            return None
        return await self.fetch(outcome.results[0])

    def _ensure_current(self, session_id: str, generation: int) -> None:
        if self._generations.get(session_id) != generation:
            raise StaleSearchError()
