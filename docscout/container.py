import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def _build_scorer(settings: Settings):
    from .core.strategies.scoring import KeywordOverlapScorer

    if settings.scorer == "keyword":
        return KeywordOverlapScorer()

    if settings.scorer == "llm":
        from .core.protocols.llm import LLMProtocol
        from .infrastructure.rerankers.llm_scorer import LLMRelevanceScorer

        return LLMRelevanceScorer(container.resolve(LLMProtocol))

    if settings.scorer == "cross-encoder":
        from .infrastructure.rerankers.cross_encoder import CrossEncoderScorer

        return CrossEncoderScorer(settings.cross_encoder_model)

    raise ValueError(
        f"Unknown scorer '{settings.scorer}' (expected keyword, llm or cross-encoder)"
    )


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.models.source import Source
    from .core.protocols.cache import ContentCacheProtocol
    from .core.protocols.llm import LLMProtocol
    from .core.protocols.reranker import RerankerProtocol
    from .core.protocols.scorer import RelevanceScorerProtocol
    from .core.services.coordinator_service import RetrievalCoordinator
    from .core.services.rerank_service import RerankService
    from .core.services.search_service import SearchService
    from .infrastructure.cache import InMemoryContentCache
    from .infrastructure.http import DocsHttpClient
    from .infrastructure.llm.ollama_client import OllamaClient
    from .infrastructure.retrievers import AppleDocsRetriever, HackingWithSwiftRetriever

    container.register(
        DocsHttpClient,
        lambda: DocsHttpClient(timeout=settings.http_timeout_seconds),
        singleton=True,
    )

    container.register(
        ContentCacheProtocol,
        lambda: InMemoryContentCache(ttl_seconds=settings.cache_ttl_seconds),
        singleton=True,
    )

    container.register(
        RetrievalCoordinator,
        lambda: RetrievalCoordinator(
            retrievers=[
                AppleDocsRetriever(
                    http=container.resolve(DocsHttpClient),
                    cache=container.resolve(ContentCacheProtocol),
                ),
                HackingWithSwiftRetriever(
                    http=container.resolve(DocsHttpClient),
                    cache=container.resolve(ContentCacheProtocol),
                ),
            ],
            enabled_sources=[Source.parse(s) for s in settings.enabled_sources],
        ),
        singleton=True,
    )

    container.register(
        LLMProtocol,
        lambda: OllamaClient(
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        ),
        singleton=True,
    )

    container.register(
        RelevanceScorerProtocol,
        lambda: _build_scorer(settings),
        singleton=True,
    )

    container.register(
        RerankerProtocol,
        lambda: RerankService(
            scorer=container.resolve(RelevanceScorerProtocol),
            max_results_to_rank=settings.rerank_max_results,
            max_tokens=settings.rerank_max_tokens,
            truncate_words=settings.rerank_truncate_words,
        ),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            coordinator=container.resolve(RetrievalCoordinator),
            reranker=container.resolve(RerankerProtocol),
            rerank_enabled=settings.rerank_enabled,
            max_results_per_source=settings.max_results_per_source,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
