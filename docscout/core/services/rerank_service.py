"""Rerank service - token-aware relevance ordering of merged results."""

import asyncio
import logging
from dataclasses import replace

from ..errors import RerankError
from ..models.document import SearchResult
from ..protocols.scorer import RelevanceScorerProtocol

logger = logging.getLogger(__name__)

RERANK_PROMPT_HEADER = """You are a search result ranker for Swift and iOS development questions.

User's question: "{query}"

Search results to rank:"""

RERANK_PROMPT_TASK = """

Task: Rank these results from MOST to LEAST relevant to answer the user's question.
Consider:
- Direct relevance to the question
- Depth of information (articles > brief references)
- Authority of source (official docs > tutorials)
- Recency (if question implies version-specific info)

Output ONLY a JSON array of IDs in ranked order: ["id1", "id2", ...]"""


def build_rerank_prompt(query: str, results: list[SearchResult]) -> str:
    """Ranking prompt listing every candidate with its id."""
    prompt = RERANK_PROMPT_HEADER.format(query=query)
    for index, result in enumerate(results, 1):
        prompt += (
            f"\n{index}. [ID: {result.id}] "
            f'Title: "{result.title}" | '
            f"Type: {result.result_type or 'unknown'} | "
            f'Description: "{result.summary or "No description"}"'
        )
    return prompt + RERANK_PROMPT_TASK


def estimate_tokens(prompt: str) -> int:
    """Rough token count: one token per four characters."""
    return len(prompt) // 4


def truncate_summary(result: SearchResult, max_words: int) -> SearchResult:
    if result.summary is None:
        return result
    words = result.summary.split()
    if len(words) <= max_words:
        return result
    return replace(result, summary=" ".join(words[:max_words]) + "...")


def reorder(results: list[SearchResult], ranked_ids: list[str]) -> list[SearchResult]:
    """Apply an id order, then append unranked results in input order.

    Unknown and repeated ids are ignored, so the output is always a
    permutation of ``results``.
    """
    remaining = {r.id: r for r in results}
    ordered = []
    for result_id in ranked_ids:
        result = remaining.pop(result_id, None)
        if result is not None:
            ordered.append(result)
    ordered.extend(r for r in results if r.id in remaining)
    return [r.with_reranked_rank(position) for position, r in enumerate(ordered)]


class RerankService:
    """Reranks merged search results with a pluggable relevance scorer."""

    def __init__(
        self,
        scorer: RelevanceScorerProtocol,
        max_results_to_rank: int = 20,
        max_tokens: int = 6000,
        truncate_words: int = 50,
    ):
        """Initialize rerank service.

        Args:
            scorer: Strategy that orders candidates.
            max_results_to_rank: Candidates sent to the scorer; the rest keep
                their order after the ranked ones.
            max_tokens: Prompt budget before summaries are shortened.
            truncate_words: Summary length once over budget.
        """
        self._scorer = scorer
        self._max_results = max_results_to_rank
        self._max_tokens = max_tokens
        self._truncate_words = truncate_words
        self._memo: dict[str, list[str]] = {}
        self._lock = asyncio.Lock()

    async def rerank(self, results: list[SearchResult], query: str) -> list[SearchResult]:
        """Rerank results for a query.

        Args:
            results: Merged results in retrieval order.
            query: User query.

        Returns:
            Permutation of ``results`` with original and reranked ranks set.

        Raises:
            RerankError: The scorer failed; callers keep the original order.
        """
        async with self._lock:
            return await self._rerank(results, query)

    async def clear_cache(self) -> None:
        async with self._lock:
            self._memo.clear()

    async def _rerank(self, results: list[SearchResult], query: str) -> list[SearchResult]:
        if not results:
            return []

        positioned = [r.with_original_rank(i) for i, r in enumerate(results)]

        memo = self._memo.get(query)
        if memo is not None and all(r.id in memo for r in positioned):
            logger.debug(f"Rerank memo hit for '{query[:50]}'")
            return reorder(positioned, memo)

        if len(positioned) == 1:
            return [positioned[0].with_reranked_rank(0)]

        candidates = positioned[:self._max_results]
        overflow = positioned[self._max_results:]

        scored = candidates
        tokens = estimate_tokens(build_rerank_prompt(query, candidates))
        if tokens > self._max_tokens:
            scored = [truncate_summary(r, self._truncate_words) for r in candidates]
            logger.info(
                f"Rerank prompt ~{tokens} tokens over budget {self._max_tokens}, "
                f"summaries truncated to {self._truncate_words} words"
            )

        try:
            ranked_ids = await self._scorer.score(query, scored)
        except RerankError:
            raise
        except Exception as e:
            raise RerankError(f"Relevance scoring failed: {e}") from e

        ranked = reorder(candidates, ranked_ids)
        final = ranked + [r.with_reranked_rank(len(ranked) + i) for i, r in enumerate(overflow)]

        self._memo[query] = [r.id for r in final]
        logger.info(
            f"Reranked {len(candidates)} of {len(final)} results for '{query[:50]}'"
        )
        return final
