from .llm_scorer import LLMRelevanceScorer, extract_ranked_ids

__all__ = ["LLMRelevanceScorer", "extract_ranked_ids"]
