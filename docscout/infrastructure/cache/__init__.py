from .memory_cache import CacheEntry, InMemoryContentCache

__all__ = ["CacheEntry", "InMemoryContentCache"]
