"""Domain models."""
from .source import Source
from .retriever_state import RetrieverState
from .document import SearchResult, DocumentContent, SearchOutcome
from .cleanup import CleanupRule, SectionBoundary, ExactMatch, RegexRule, LineFilter

__all__ = [
    "Source",
    "RetrieverState",
    "SearchResult",
    "DocumentContent",
    "SearchOutcome",
    "CleanupRule",
    "SectionBoundary",
    "ExactMatch",
    "RegexRule",
    "LineFilter",
]
