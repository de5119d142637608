"""Retrieval coordinator - concurrent multi-source search."""

import asyncio
import logging
from typing import Iterable, Optional, Sequence, Union

from ..errors import AllSourcesFailedError, InvalidRequestError, RetrievalError
from ..models.document import DocumentContent, SearchResult
from ..models.source import Source
from ..protocols.retriever import RetrieverProtocol

logger = logging.getLogger(__name__)

SourceKey = Union[Source, str]


class RetrievalCoordinator:
    """Fans a query out to every enabled retriever and merges the answers."""

    def __init__(
        self,
        retrievers: Sequence[RetrieverProtocol],
        enabled_sources: Optional[Iterable[Source]] = None,
    ):
        """Initialize coordinator.

        Args:
            retrievers: One retriever per source.
            enabled_sources: Default source selection; all registered sources
                when omitted.
        """
        self._retrievers: dict[Source, RetrieverProtocol] = {r.source: r for r in retrievers}
        self._default_sources = (
            list(enabled_sources) if enabled_sources is not None else list(self._retrievers)
        )

    @property
    def sources(self) -> list[Source]:
        return [s for s in Source if s in self._retrievers]

    def retriever(self, source: Source) -> RetrieverProtocol:
        retriever = self._retrievers.get(source)
        if retriever is None:
            raise InvalidRequestError(f"No retriever registered for source '{source.value}'")
        return retriever

    async def search(
        self,
        query: str,
        enabled_sources: Optional[Iterable[SourceKey]] = None,
        max_results_per_source: int = 0,
    ) -> tuple[list[SearchResult], dict[SourceKey, RetrievalError]]:
        """Search all enabled sources concurrently.

        Args:
            query: Search query.
            enabled_sources: Sources (or their identifiers) to query.
            max_results_per_source: Per-source cap, 0 for unrestricted.

        Returns:
            Results concatenated in ``Source`` order, and per-source errors.
            A retriever raising anything other than ``RetrievalError`` is
            recorded as a ``RetrievalError`` chained to the original;
            cancellation still propagates.

        Raises:
            InvalidRequestError: The enabled set is empty.
            AllSourcesFailedError: Every enabled source failed.
        """
        requested = list(enabled_sources) if enabled_sources is not None else self._default_sources
        if not requested:
            raise InvalidRequestError("At least one source must be enabled")

        errors: dict[SourceKey, RetrievalError] = {}
        selected: set[Source] = set()
        for key in requested:
            try:
                source = key if isinstance(key, Source) else Source.parse(key)
                self.retriever(source)
            except (ValueError, InvalidRequestError) as e:
                errors[key] = e if isinstance(e, InvalidRequestError) else InvalidRequestError(str(e))
                logger.warning(f"Skipping source {key!r}: {errors[key]}")
                continue
            selected.add(source)

        ordered = [s for s in Source if s in selected]
        outcomes = await asyncio.gather(
            *(self._retrievers[s].search(query, max_results_per_source) for s in ordered),
            return_exceptions=True,
        )

        results: list[SearchResult] = []
        for source, outcome in zip(ordered, outcomes):
            if isinstance(outcome, RetrievalError):
                errors[source] = outcome
                logger.warning(f"[{source.value}] search failed: {outcome}")
            elif isinstance(outcome, Exception):
                error = RetrievalError(f"Unexpected {type(outcome).__name__}: {outcome}")
                error.__cause__ = outcome
                errors[source] = error
                logger.error(f"[{source.value}] search raised unexpectedly: {outcome!r}", exc_info=outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results.extend(outcome)

        succeeded = [s for s in ordered if s not in errors]
        if not succeeded:
            logger.error(f"All sources failed for '{query[:50]}'")
            raise AllSourcesFailedError(errors)

        logger.info(
            f"Search '{query[:50]}': {len(results)} results from "
            f"{len(succeeded)}/{len(ordered)} sources"
        )
        return results, errors

    async def fetch(self, result: SearchResult) -> DocumentContent:
        """Fetch a result through the retriever of its source."""
        return await self.retriever(result.source).fetch(result)
