"""Retriever protocol for dependency injection."""
from typing import Optional, Protocol, runtime_checkable

from ..models.document import DocumentContent, SearchResult
from ..models.retriever_state import RetrieverState
from ..models.source import Source


@runtime_checkable
class RetrieverProtocol(Protocol):
    """Protocol for a single documentation source."""

    @property
    def source(self) -> Source:
        ...

    @property
    def state(self) -> RetrieverState:
        ...

    async def search(self, query: str, max_results: int = 0) -> list[SearchResult]:
        """Search the source.

        Args:
            query: Non-empty search query.
            max_results: Truncate to this many results; 0 or less keeps all.

        Returns:
            Results in the order the source returned them.
        """
        ...

    async def fetch(self, result: SearchResult) -> DocumentContent:
        """Download and convert the document a result points to."""
        ...

    async def search_and_fetch(self, query: str) -> Optional[DocumentContent]:
        ...
