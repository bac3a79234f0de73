from .base import CachedFetchingClass
from .config import FetcherConfig
from .errors import FailureKind, FetchError, as_fetch_operation, classify_failure
from .factory import CachedRetryFetcherFactory
from .fetcher import CachedRetryFetcher
from .interfaces import CachedFetcherInterface, KeyValueStoreInterface
from .models import CacheEntry
from .stores.in_memory import InMemoryStore
from .utils import debounce, safe_json_parse

__all__ = [
    "CacheEntry",
    "CachedFetcherInterface",
    "CachedFetchingClass",
    "CachedRetryFetcher",
    "CachedRetryFetcherFactory",
    "FailureKind",
    "FetchError",
    "FetcherConfig",
    "InMemoryStore",
    "KeyValueStoreInterface",
    "as_fetch_operation",
    "classify_failure",
    "debounce",
    "safe_json_parse",
]

# Conditional export for Redis classes
try:
    from .stores.redis import RedisStore

    __all__.extend(["RedisStore"])
except ImportError:
    # Redis is optional
    pass
