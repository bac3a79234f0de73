from .fetcher import CachedFetcherInterface
from .store import KeyValueStoreInterface

__all__ = ["CachedFetcherInterface", "KeyValueStoreInterface"]
