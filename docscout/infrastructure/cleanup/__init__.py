"""Markdown cleanup engine and rule sets."""
from .engine import CleanupRuleEngine, normalize_whitespace
from .hws_rules import HWS_CLEANUP_RULES

__all__ = ["CleanupRuleEngine", "normalize_whitespace", "HWS_CLEANUP_RULES"]
