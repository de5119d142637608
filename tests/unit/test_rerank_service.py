"""Tests for the rerank service and its prompt helpers."""

from __future__ import annotations

import pytest

from docscout.core.errors import RerankError
from docscout.core.services.rerank_service import (
    RerankService,
    build_rerank_prompt,
    estimate_tokens,
    reorder,
    truncate_summary,
)


class CountingScorer:
    """Scorer that replays a fixed ranking (or a callable) and counts calls."""

    def __init__(self, ranking=None, error: Exception | None = None):
        self.ranking = ranking
        self.error = error
        self.calls: list[tuple[str, list]] = []

    async def score(self, query, candidates):
        self.calls.append((query, list(candidates)))
        if self.error is not None:
            raise self.error
        if callable(self.ranking):
            return self.ranking(candidates)
        if self.ranking is None:
            return [c.id for c in reversed(candidates)]
        return list(self.ranking)


@pytest.fixture
def abc(make_result):
    return [
        make_result("A", "https://developer.apple.com/documentation/a", summary="first"),
        make_result("B", "https://developer.apple.com/documentation/b"),
        make_result("C", "https://developer.apple.com/documentation/c", summary="third"),
    ]


class TestHelpers:
    def test_prompt_lists_every_candidate(self, abc):
        prompt = build_rerank_prompt("how to sort", abc)

        assert 'User\'s question: "how to sort"' in prompt
        assert f'1. [ID: {abc[0].id}] Title: "A" | Type: unknown | Description: "first"' in prompt
        assert 'Description: "No description"' in prompt
        assert prompt.endswith('["id1", "id2", ...]')

    def test_estimate_tokens(self):
        assert estimate_tokens("x" * 41) == 10

    def test_truncate_summary(self, make_result):
        result = make_result(summary="one two three four")
        short = truncate_summary(result, 2)
        assert short.summary == "one two..."
        assert result.summary == "one two three four"
        assert truncate_summary(result, 10) is result

    def test_reorder_repairs_ranking(self, abc):
        a, b, c = abc
        ordered = reorder(abc, ["unknown", c.id, c.id, a.id])

        assert [r.title for r in ordered] == ["C", "A", "B"]
        assert [r.reranked_rank for r in ordered] == [0, 1, 2]


@pytest.mark.asyncio
class TestRerankService:
    async def test_reorders_and_memoizes(self, abc):
        a, b, c = abc
        scorer = CountingScorer([c.id, a.id, b.id])
        service = RerankService(scorer)

        first = await service.rerank(abc, "query")
        second = await service.rerank(abc, "query")

        assert [r.title for r in first] == ["C", "A", "B"]
        assert [r.original_rank for r in first] == [2, 0, 1]
        assert [r.reranked_rank for r in first] == [0, 1, 2]
        assert [r.title for r in second] == ["C", "A", "B"]
        assert len(scorer.calls) == 1

    async def test_inputs_are_not_mutated(self, abc):
        service = RerankService(CountingScorer())
        await service.rerank(abc, "query")
        assert all(r.original_rank is None and r.reranked_rank is None for r in abc)

    async def test_memo_ignored_for_new_results(self, abc, make_result):
        scorer = CountingScorer()
        service = RerankService(scorer)

        await service.rerank(abc, "query")
        extra = make_result("D", "https://developer.apple.com/documentation/d")
        result = await service.rerank(abc + [extra], "query")

        assert len(scorer.calls) == 2
        assert [r.title for r in result] == ["D", "C", "B", "A"]

    async def test_empty_input(self):
        scorer = CountingScorer()
        assert await RerankService(scorer).rerank([], "query") == []
        assert scorer.calls == []

    async def test_single_result_skips_scorer(self, make_result):
        scorer = CountingScorer()
        (only,) = await RerankService(scorer).rerank([make_result()], "query")

        assert only.original_rank == 0
        assert only.reranked_rank == 0
        assert scorer.calls == []

    async def test_overflow_keeps_order_after_ranked(self, abc, make_result):
        d = make_result("D", "https://developer.apple.com/documentation/d")
        scorer = CountingScorer()
        service = RerankService(scorer, max_results_to_rank=2)

        result = await service.rerank(abc + [d], "query")

        assert len(scorer.calls[0][1]) == 2
        assert [r.title for r in result] == ["B", "A", "C", "D"]
        assert [r.reranked_rank for r in result] == [0, 1, 2, 3]

    async def test_summaries_truncated_only_for_scorer(self, make_result):
        long_summary = " ".join(["word"] * 40)
        results = [
            make_result("A", "https://developer.apple.com/documentation/a", summary=long_summary),
            make_result("B", "https://developer.apple.com/documentation/b", summary=long_summary),
        ]
        scorer = CountingScorer()
        service = RerankService(scorer, max_tokens=10, truncate_words=3)

        reranked = await service.rerank(results, "query")

        sent = scorer.calls[0][1]
        assert all(c.summary == "word word word..." for c in sent)
        assert all(r.summary == long_summary for r in reranked)

    async def test_partial_ranking_appends_missing(self, abc):
        a, b, c = abc
        service = RerankService(CountingScorer(["nope", b.id]))

        result = await service.rerank(abc, "query")

        assert [r.title for r in result] == ["B", "A", "C"]

    async def test_scorer_failure_raises_rerank_error(self, abc):
        scorer = CountingScorer(error=ValueError("model offline"))
        service = RerankService(scorer)

        with pytest.raises(RerankError, match="model offline"):
            await service.rerank(abc, "query")

        # Nothing memoized, so the next call asks the scorer again.
        scorer.error = None
        await service.rerank(abc, "query")
        assert len(scorer.calls) == 2

    async def test_clear_cache(self, abc):
        scorer = CountingScorer()
        service = RerankService(scorer)

        await service.rerank(abc, "query")
        await service.clear_cache()
        await service.rerank(abc, "query")

        assert len(scorer.calls) == 2
