"""Protocol interfaces for dependency injection."""
from .cache import ContentCacheProtocol
from .llm import LLMProtocol
from .reranker import RerankerProtocol
from .retriever import RetrieverProtocol
from .scorer import RelevanceScorerProtocol

__all__ = [
    "ContentCacheProtocol",
    "LLMProtocol",
    "RerankerProtocol",
    "RetrieverProtocol",
    "RelevanceScorerProtocol",
]
