"""Tests for the session-aware search facade."""

from __future__ import annotations

import asyncio

import pytest

from docscout.core.errors import AllSourcesFailedError, NetworkError, RerankError
from docscout.core.models.source import Source
from docscout.core.services import RerankService, RetrievalCoordinator, SearchService
from docscout.core.strategies.scoring import KeywordOverlapScorer

HWS_URL = "https://www.hackingwithswift.com/articles/1/sorting-arrays"


class FailingReranker:
    def __init__(self):
        self.calls = 0

    async def rerank(self, results, query):
        self.calls += 1
        raise RerankError("scorer offline")


@pytest.fixture
def results(make_result):
    return [
        make_result("Collections", "https://developer.apple.com/documentation/swift/collections"),
        make_result("Sorting arrays", HWS_URL, Source.HACKING_WITH_SWIFT),
    ]


@pytest.fixture
def coordinator(make_retriever, results):
    return RetrievalCoordinator(
        [
            make_retriever(Source.APPLE_DOCS, results[:1]),
            make_retriever(Source.HACKING_WITH_SWIFT, results[1:]),
        ]
    )


@pytest.mark.asyncio
class TestSearchService:
    async def test_search_reranks(self, coordinator):
        service = SearchService(coordinator, RerankService(KeywordOverlapScorer()))

        outcome = await service.search("sorting arrays")

        assert outcome.reranked is True
        assert [r.title for r in outcome.results] == ["Sorting arrays", "Collections"]
        assert [r.original_rank for r in outcome.results] == [1, 0]
        assert outcome.errors == {}

    async def test_rerank_can_be_disabled_per_call(self, coordinator):
        reranker = FailingReranker()
        service = SearchService(coordinator, reranker)

        outcome = await service.search("sorting arrays", rerank=False)

        assert outcome.reranked is False
        assert reranker.calls == 0
        assert [r.title for r in outcome.results] == ["Collections", "Sorting arrays"]

    async def test_rerank_failure_keeps_retrieval_order(self, coordinator):
        reranker = FailingReranker()
        service = SearchService(coordinator, reranker)

        outcome = await service.search("sorting arrays")

        assert reranker.calls == 1
        assert outcome.reranked is False
        assert [r.title for r in outcome.results] == ["Collections", "Sorting arrays"]

    async def test_partial_failure_is_reported(self, make_retriever, results):
        failure = NetworkError("down")
        coordinator = RetrievalCoordinator(
            [
                make_retriever(Source.APPLE_DOCS, results[:1]),
                make_retriever(Source.HACKING_WITH_SWIFT, error=failure),
            ]
        )
        service = SearchService(coordinator, rerank_enabled=False)

        outcome = await service.search("collections")

        assert [r.title for r in outcome.results] == ["Collections"]
        assert outcome.failed_sources == [Source.HACKING_WITH_SWIFT]

    async def test_all_failed_propagates(self, make_retriever):
        coordinator = RetrievalCoordinator([make_retriever(Source.APPLE_DOCS, error=NetworkError("down"))])
        service = SearchService(coordinator)

        with pytest.raises(AllSourcesFailedError):
            await service.search("anything")

    async def test_newer_search_supersedes_older(self, make_retriever, results):
        gate = asyncio.Event()
        apple = make_retriever(Source.APPLE_DOCS, results[:1], gate=gate, gated_queries=("slow",))
        service = SearchService(RetrievalCoordinator([apple]), rerank_enabled=False)

        slow = asyncio.create_task(service.search("slow", session_id="s1"))
        await asyncio.sleep(0)

        fast = await service.search("fast", session_id="s1")
        gate.set()

        assert fast is not None
        assert await slow is None

    async def test_sessions_are_independent(self, make_retriever, results):
        gate = asyncio.Event()
        apple = make_retriever(Source.APPLE_DOCS, results[:1], gate=gate, gated_queries=("slow",))
        service = SearchService(RetrievalCoordinator([apple]), rerank_enabled=False)

        slow = asyncio.create_task(service.search("slow", session_id="s1"))
        await asyncio.sleep(0)

        other = await service.search("fast", session_id="s2")
        gate.set()

        assert other is not None
        outcome = await slow
        assert outcome is not None
        assert [r.title for r in outcome.results] == ["Collections"]

    async def test_ask_fetches_best_result(self, coordinator):
        service = SearchService(coordinator, RerankService(KeywordOverlapScorer()))

        document = await service.ask("sorting arrays")

        assert document.markdown == "# Sorting arrays\n"

    async def test_ask_with_stale_search(self, make_retriever, results):
        gate = asyncio.Event()
        apple = make_retriever(Source.APPLE_DOCS, results[:1], gate=gate, gated_queries=("slow",))
        service = SearchService(RetrievalCoordinator([apple]), rerank_enabled=False)

        slow = asyncio.create_task(service.ask("slow"))
        await asyncio.sleep(0)
        await service.search("fast")
        gate.set()

        assert await slow is None
        assert apple.fetched == []
