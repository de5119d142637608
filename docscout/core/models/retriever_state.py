"""Retriever lifecycle states."""
from enum import Enum


class RetrieverState(Enum):
    """Observable state of a retriever.

    Search and fetch are tracked independently; each starts IDLE, moves to
    its in-progress state and ends IDLE again or in its failed state.
    """
    IDLE = "idle"
    SEARCHING = "searching"
    SEARCH_FAILED = "search_failed"
    FETCHING = "fetching"
    FETCH_FAILED = "fetch_failed"
