import logging
from abc import ABC, abstractmethod
from typing import Optional

from docscout.core.errors import InvalidRequestError, NoResultsError
from docscout.core.models.document import DocumentContent, SearchResult
from docscout.core.models.retriever_state import RetrieverState
from docscout.core.models.source import Source
from docscout.core.protocols.cache import ContentCacheProtocol
from docscout.infrastructure.http import DocsHttpClient

logger = logging.getLogger(__name__)


class BaseRetriever(ABC):
    """Shared search/fetch lifecycle for one documentation source.

    Subclasses implement ``_search`` and ``_fetch``; this class validates
    input, tracks state, truncates results and keeps the cache consistent.
    """

    source: Source

    def __init__(self, http: DocsHttpClient, cache: Optional[ContentCacheProtocol] = None):
        self._http = http
        self._cache = cache
        self._search_state = RetrieverState.IDLE
        self._fetch_state = RetrieverState.IDLE

    @property
    def state(self) -> RetrieverState:
        """Fetch state while a fetch is running or failed, otherwise search state."""
        if self._fetch_state is not RetrieverState.IDLE:
            return self._fetch_state
        return self._search_state

    @property
    def search_state(self) -> RetrieverState:
        return self._search_state

    @property
    def fetch_state(self) -> RetrieverState:
        return self._fetch_state

    async def search(self, query: str, max_results: int = 0) -> list[SearchResult]:
        query = query.strip()
        if not query:
            raise InvalidRequestError("Search query must not be empty")

        self._search_state = RetrieverState.SEARCHING
        try:
            results = await self._search(query)
        except Exception as e:
            self._search_state = RetrieverState.SEARCH_FAILED
            logger.warning(f"[{self.source.value}] search '{query}' failed: {e}")
            raise
        self._search_state = RetrieverState.IDLE

        if max_results > 0:
            results = results[:max_results]

        logger.info(f"[{self.source.value}] search '{query}': {len(results)} results")
        return results

    async def fetch(self, result: SearchResult) -> DocumentContent:
        if result.source != self.source:
            raise InvalidRequestError(
                f"{self.source.display_name} cannot fetch a {result.source.value} result"
            )

        if self._cache is not None:
            cached = await self._cache.get(result.url)
            if cached is not None:
                logger.debug(f"[{self.source.value}] cache hit: {result.url}")
                return cached

        self._fetch_state = RetrieverState.FETCHING
        try:
            content = await self._fetch(result)
        except Exception as e:
            self._fetch_state = RetrieverState.FETCH_FAILED
            logger.warning(f"[{self.source.value}] fetch {result.url} failed: {e}")
            raise
        self._fetch_state = RetrieverState.IDLE

        if self._cache is not None:
            await self._cache.set(result.url, content)

        logger.info(f"[{self.source.value}] fetched {result.url} ({len(content.markdown)} chars)")
        return content

    async def search_and_fetch(self, query: str) -> Optional[DocumentContent]:
        """Fetch the top result for a query, or None if nothing matched."""
        try:
            results = await self.search(query, max_results=1)
        except NoResultsError:
            return None
        if not results:
            return None
        return await self.fetch(results[0])

    @abstractmethod
    async def _search(self, query: str) -> list[SearchResult]:
        ...

    @abstractmethod
    async def _fetch(self, result: SearchResult) -> DocumentContent:
        ...
