import asyncio
import logging

import numpy as np
from sentence_transformers import CrossEncoder

from docscout.core.models.document import SearchResult

logger = logging.getLogger(__name__)


class CrossEncoderScorer:
    """Scorer using CrossEncoder models over (query, title + summary) pairs."""

    def __init__(self, model_name: str = "BAAI/bge-reranker-v2-m3", model: CrossEncoder | None = None):
        """Initialize scorer.

        Args:
            model_name: HuggingFace model name.
            model: Already loaded model (tests).
        """
        if model is None:
            logger.info(f"Loading cross-encoder: {model_name}")
            model = CrossEncoder(model_name)
            logger.info("Cross-encoder loaded")
        self._model = model

    async def score(self, query: str, candidates: list[SearchResult]) -> list[str]:
        """Rank candidates by cross-encoder score, highest first.

        Prediction runs in a worker thread so the event loop stays free.
        """
        if not candidates:
            return []

        pairs = [[query, self._passage(r)] for r in candidates]
        scores = np.asarray(await asyncio.to_thread(self._model.predict, pairs), dtype=float)

        # Stable so equal scores keep retrieval order.
        order = np.argsort(-scores, kind="stable")

        if logger.isEnabledFor(logging.DEBUG):
            top_scores = ", ".join(f"{scores[i]:.2f}" for i in order[:3])
            logger.debug(f"Cross-encoder top-3 scores: [{top_scores}]")

        return [candidates[i].id for i in order]

    @staticmethod
    def _passage(result: SearchResult) -> str:
        if result.summary:
            return f"{result.title}. {result.summary}"
        return result.title
