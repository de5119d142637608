"""Document domain models."""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlparse

from .source import Source


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class SearchResult:
    """Pointer to one documentation item found by a query."""
    title: str
    url: str
    source: Source
    summary: Optional[str] = None
    breadcrumbs: tuple[str, ...] = ()
    tags: frozenset[str] = frozenset()
    result_type: Optional[str] = None
    relevance_score: Optional[float] = None
    metadata: dict[str, str] = field(default_factory=dict)
    original_rank: Optional[int] = None
    reranked_rank: Optional[int] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("SearchResult title must not be empty")
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"SearchResult url must be absolute: {self.url!r}")
        if self.relevance_score is not None and not 0.0 <= self.relevance_score <= 1.0:
            raise ValueError(f"relevance_score out of range: {self.relevance_score}")
        # Accept lists/sets from callers but store immutable containers.
        object.__setattr__(self, "breadcrumbs", tuple(self.breadcrumbs))
        object.__setattr__(self, "tags", frozenset(self.tags))
        object.__setattr__(self, "source", Source(self.source))

    def __hash__(self) -> int:
        return hash(self.id)

    def with_original_rank(self, rank: int) -> "SearchResult":
        """Copy with the pre-rerank position recorded."""
        return replace(self, original_rank=rank)

    def with_reranked_rank(self, rank: int) -> "SearchResult":
        """Copy with the post-rerank position recorded."""
        return replace(self, reranked_rank=rank)

    @property
    def breadcrumb_path(self) -> str:
        return " > ".join(self.breadcrumbs)


@dataclass(frozen=True)
class DocumentContent:
    """Fetched and converted markdown for one search result."""
    search_result: SearchResult
    markdown: str
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    raw_data: Optional[bytes] = None

    @property
    def url(self) -> str:
        return self.search_result.url


@dataclass
class SearchOutcome:
    """Merged multi-source search response for the presentation layer."""
    results: list[SearchResult]
    errors: dict[Source, Exception] = field(default_factory=dict)
    reranked: bool = False

    @property
    def failed_sources(self) -> list[Source]:
        return list(self.errors)
