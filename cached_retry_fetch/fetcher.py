import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

from tenacity import AsyncRetrying, before_sleep_log, retry_if_exception, stop_after_attempt, wait_exponential

from .config import FetcherConfig, validate_max_retries, validate_ttl
from .errors import is_retryable
from .interfaces import CachedFetcherInterface, KeyValueStoreInterface
from .models import CacheEntry

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


class CachedRetryFetcher(CachedFetcherInterface):
    """Read-through TTL cache over an injected store, with exponential-backoff retry.

    Entries are stored as JSON ``{"data": ..., "expiry": <ms since epoch>}``.
    ``clock`` returns the current time in milliseconds and ``sleep`` awaits a
    delay in seconds; both exist so tests can run without real time passing.
    """

    def __init__(
        self,
        store: KeyValueStoreInterface,
        config: FetcherConfig | None = None,
        clock: Callable[[], int] = now_ms,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.store = store
        self.config = config or FetcherConfig()
        self.clock = clock
        self.sleep = sleep

    def store_key(self, key: str) -> str:
        return f"{self.config.key_prefix}{key}"

    def key_builder(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> str:
        arg_str = str(args)
        kwarg_str = str(kwargs) if kwargs else "{}"
        func_name = getattr(func, "__name__", "unknown")
        return f"{func_name}:{arg_str}:{kwarg_str}"

    async def get_cached_response(self, key: str) -> tuple[Any, bool]:
        """Return ``(data, True)`` for a fresh entry, ``(None, False)`` otherwise."""
        try:
            raw = await self.store.get(self.store_key(key))
        except Exception as e:
            logger.warning(f"Cache store read failed for {key}: {e}, treating as miss.")
            return None, False

        entry = CacheEntry.from_json(raw)
        if entry is None or not entry.is_valid(self.clock()):
            return None, False
        return entry.data, True

    async def cache_response(self, key: str, data: Any, ttl: int | None = None) -> CacheEntry:
        ttl = self.config.default_ttl_ms if ttl is None else ttl
        validate_ttl(ttl)
        entry = CacheEntry(data=data, expiry=self.clock() + ttl)
        await self.store.set(self.store_key(key), entry.to_json())
        return entry

    async def fetch_with_cache(
        self,
        key: str,
        fetch_operation: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
        max_retries: int | None = None,
    ) -> Any:
        if not key:
            raise ValueError("key must be a non-empty string")
        ttl = self.config.default_ttl_ms if ttl is None else ttl
        max_retries = self.config.max_retries if max_retries is None else max_retries
        validate_ttl(ttl)
        validate_max_retries(max_retries)

        cached_data, is_cached = await self.get_cached_response(key)
        if is_cached:
            logger.debug(f"Cache hit for {key}")
            return cached_data

        logger.debug(f"Cache miss for {key}, fetching")
        data = await self._fetch_with_retry(fetch_operation, max_retries)

        try:
            await self.cache_response(key, data, ttl)
        except Exception as e:
            logger.error(f"Error caching response for {key}: {e}")

        return data

    async def _fetch_with_retry(self, fetch_operation: Callable[[], Awaitable[Any]], max_retries: int) -> Any:
        # Waits backoff_base * 2^(n-1) before retry n; permanent failures stop at once.
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(multiplier=self.config.backoff_base_ms / 1000, exp_base=2),
            retry=retry_if_exception(is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self.sleep,
            reraise=True,
        ):
            with attempt:
                return await fetch_operation()

    def __call__(
        self,
        ttl: int | None = None,
        max_retries: int | None = None,
        key: Callable[..., str] | None = None,
    ) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Any]]]:
        def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
            @wraps(func)
            async def wrapper(*args: Any, **kwargs: Any) -> Any:
                _key = key(*args, **kwargs) if key is not None else self.key_builder(func, *args, **kwargs)
                return await self.fetch_with_cache(
                    _key, lambda: func(*args, **kwargs), ttl=ttl, max_retries=max_retries
                )

            return wrapper

        return decorator
