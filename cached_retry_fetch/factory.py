from typing import TYPE_CHECKING

from .config import FetcherConfig
from .fetcher import CachedRetryFetcher
from .interfaces import KeyValueStoreInterface
from .stores.in_memory import InMemoryStore

if TYPE_CHECKING:
    from .stores.valkey import ValkeyClientConfig


# Redis and Valkey stores are imported on use; their clients are optional extras.
class CachedRetryFetcherFactory:
    @classmethod
    async def inmemory(cls, config: FetcherConfig | None = None) -> CachedRetryFetcher:
        return CachedRetryFetcher(InMemoryStore(), config)

    @classmethod
    async def redis(
        cls,
        url: str = "redis://localhost:6379/0",
        socket_timeout: float = 0.5,
        config: FetcherConfig | None = None,
    ) -> CachedRetryFetcher:
        from .stores.redis import RedisStore

        store = RedisStore.from_url(url, socket_timeout=socket_timeout)
        return CachedRetryFetcher(store, config)

    @classmethod
    async def valkey(
        cls,
        valkey_config: "ValkeyClientConfig | None" = None,
        config: FetcherConfig | None = None,
    ) -> CachedRetryFetcher:
        from .stores.valkey import ValkeyStore

        store = await ValkeyStore.create(valkey_config)
        return CachedRetryFetcher(store, config)

    @classmethod
    async def from_store(cls, store: KeyValueStoreInterface, config: FetcherConfig | None = None) -> CachedRetryFetcher:
        return CachedRetryFetcher(store, config)
