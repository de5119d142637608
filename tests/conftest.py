"""Shared test fixtures for docscout."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional

import httpx
import pytest

from docscout.core.models.document import DocumentContent, SearchResult
from docscout.core.models.retriever_state import RetrieverState
from docscout.core.models.source import Source
from docscout.infrastructure.http import DocsHttpClient


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_result() -> Callable[..., SearchResult]:
    """Factory for SearchResult with Apple defaults."""

    def _make(
        title: str = "Array",
        url: str = "https://developer.apple.com/documentation/swift/array",
        source: Source = Source.APPLE_DOCS,
        **kwargs,
    ) -> SearchResult:
        return SearchResult(title=title, url=url, source=source, **kwargs)

    return _make


@pytest.fixture
def make_http() -> Callable[[Callable[[httpx.Request], httpx.Response]], DocsHttpClient]:
    """Build a DocsHttpClient whose transport is a request handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> DocsHttpClient:
        transport = httpx.MockTransport(handler)
        return DocsHttpClient(timeout=5, client=httpx.AsyncClient(transport=transport))

    return _make


class FakeRetriever:
    """In-memory retriever with optional failure and a gate for slow queries."""

    def __init__(
        self,
        source: Source,
        results: Optional[list[SearchResult]] = None,
        error: Optional[Exception] = None,
        gate: Optional[asyncio.Event] = None,
        gated_queries: tuple[str, ...] = (),
    ):
        self.source = source
        self.state = RetrieverState.IDLE
        self.results = results or []
        self.error = error
        self.gate = gate
        self.gated_queries = gated_queries
        self.calls: list[tuple[str, int]] = []
        self.fetched: list[SearchResult] = []

    async def search(self, query: str, max_results: int = 0) -> list[SearchResult]:
        self.calls.append((query, max_results))
        if self.gate is not None and (not self.gated_queries or query in self.gated_queries):
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.results[:max_results] if max_results > 0 else list(self.results)

    async def fetch(self, result: SearchResult) -> DocumentContent:
        self.fetched.append(result)
        return DocumentContent(search_result=result, markdown=f"# {result.title}\n")

    async def search_and_fetch(self, query: str) -> Optional[DocumentContent]:
        results = await self.search(query, 1)
        return await self.fetch(results[0]) if results else None


@pytest.fixture
def make_retriever() -> Callable[..., FakeRetriever]:
    return FakeRetriever
