"""Content cache protocol for dependency injection."""
from typing import Optional, Protocol, runtime_checkable

from ..models.document import DocumentContent


@runtime_checkable
class ContentCacheProtocol(Protocol):
    """Protocol for a document cache keyed by URL."""

    async def get(self, key: str) -> Optional[DocumentContent]:
        """Return the cached document, or None if missing or expired."""
        ...

    async def set(self, key: str, value: DocumentContent) -> None:
        ...

    async def clear(self) -> None:
        ...

    async def remove_expired(self) -> int:
        ...

    async def size(self) -> int:
        ...
