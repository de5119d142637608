"""LLM protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMProtocol(Protocol):
    """Protocol for LLM client."""

    async def complete(self, prompt: str) -> str:
        """Send a single prompt and return the full reply.

        Args:
            prompt: Complete prompt text.

        Returns:
            Model reply text.
        """
        ...
