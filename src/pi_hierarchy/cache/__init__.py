"""Cache stores for resolver results."""

from .store import CacheStore, InMemoryCacheStore, JsonFileCacheStore

__all__ = ["CacheStore", "InMemoryCacheStore", "JsonFileCacheStore"]
