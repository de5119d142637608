"""Scoring strategies."""
from .scoring import KeywordOverlapScorer, ScoringStrategy

__all__ = [
    "KeywordOverlapScorer",
    "ScoringStrategy",
]
