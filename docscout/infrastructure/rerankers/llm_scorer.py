import json
import logging
import re

from docscout.core.errors import RerankError
from docscout.core.models.document import SearchResult
from docscout.core.protocols.llm import LLMProtocol
from docscout.core.services.rerank_service import build_rerank_prompt

logger = logging.getLogger(__name__)

_JSON_ARRAY = re.compile(r"\[[^\[\]]*\]", re.DOTALL)


def extract_ranked_ids(reply: str) -> list[str]:
    """First JSON array of strings in an LLM reply.

    Raises:
        RerankError: No parseable array of strings found.
    """
    for match in _JSON_ARRAY.finditer(reply):
        try:
            value = json.loads(match.group(0))
        except json.JSONDecodeError:
            continue
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
    raise RerankError(f"No JSON array of ids in model reply: {reply[:200]!r}")


class LLMRelevanceScorer:
    """Scorer that asks an LLM to order the candidates."""

    def __init__(self, llm: LLMProtocol):
        self._llm = llm

    async def score(self, query: str, candidates: list[SearchResult]) -> list[str]:
        prompt = build_rerank_prompt(query, candidates)
        reply = await self._llm.complete(prompt)
        ranked = extract_ranked_ids(reply)
        logger.info(f"[llm-scorer] ranked {len(ranked)}/{len(candidates)} candidates")
        return ranked
