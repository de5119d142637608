"""Core business services."""
from .coordinator_service import RetrievalCoordinator
from .rerank_service import RerankService
from .search_service import SearchService, StaleSearchError

__all__ = [
    "RetrievalCoordinator",
    "RerankService",
    "SearchService",
    "StaleSearchError",
]
