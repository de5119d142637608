import logging

from openai import AsyncOpenAI

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You rank documentation search results for Swift and iOS developers.
Answer with the requested JSON only, no prose."""


class OllamaClient:
    """LLM client for Ollama (OpenAI-compatible API)."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434/v1",
        model: str = "qwen2.5:7b",
        max_tokens: int = 1024,
        temperature: float = 0.1,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize Ollama client.

        Args:
            base_url: Ollama API URL.
            model: Model name.
            max_tokens: Max response tokens.
            temperature: Sampling temperature.
            client: Preconfigured OpenAI client (tests).
        """
        self._client = client or AsyncOpenAI(base_url=base_url, api_key="ollama")
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the whole reply.

        Args:
            prompt: User prompt.

        Returns:
            Reply text, empty if the model returned nothing.
        """
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )

        content = response.choices[0].message.content or ""
        logger.debug(f"[llm] {self._model} replied with {len(content)} chars")
        return content
