"""Resolution cache adapters."""

from artifacturl.adapters.cache.memory_cache import MemoryCache


__all__ = ["MemoryCache"]
