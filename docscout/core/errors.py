"""Retrieval error types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.source import Source


class RetrievalError(Exception):
    """Base exception for documentation retrieval."""

    pass


class NetworkError(RetrievalError):
    """Transport failure or unexpected non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(RetrievalError):
    """The requested resource returned 404."""

    def __init__(self, url: str):
        super().__init__(f"Resource not found: {url}")
        self.url = url


class RateLimitExceededError(RetrievalError):
    """The source answered 429."""

    def __init__(self, retry_after: float | None = None):
        if retry_after is not None:
            message = f"Rate limit exceeded. Retry after {retry_after:g} seconds"
        else:
            message = "Rate limit exceeded"
        super().__init__(message)
        self.retry_after = retry_after


class AuthenticationFailedError(RetrievalError):
    """The source answered 401 or 403."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class NoResultsError(RetrievalError):
    """Search succeeded but nothing survived parsing and filtering."""

    def __init__(self, message: str = "No results found for the query"):
        super().__init__(message)


class ParsingError(RetrievalError):
    """A search payload did not have the expected shape."""

    pass


class ConversionError(RetrievalError):
    """A document payload could not be converted to markdown."""

    pass


class InvalidRequestError(RetrievalError):
    """Malformed query, URL or source selection."""

    pass


class AllSourcesFailedError(RetrievalError):
    """Every enabled source failed during a multi-source search."""

    def __init__(self, errors: dict[Source | str, RetrievalError]):
        summary = "; ".join(f"{getattr(source, 'value', source)}: {error}" for source, error in errors.items())
        super().__init__(f"All sources failed ({summary})")
        self.errors = errors


class RerankError(Exception):
    """The relevance scorer failed or answered with garbage."""

    pass
