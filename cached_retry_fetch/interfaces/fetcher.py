from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import Any


class CachedFetcherInterface(ABC):
    @abstractmethod
    async def fetch_with_cache(
        self,
        key: str,
        fetch_operation: Callable[[], Awaitable[Any]],
        ttl: int | None = None,
        max_retries: int | None = None,
    ) -> Any:
        pass

    @abstractmethod
    def __call__(
        self,
        ttl: int | None = None,
        max_retries: int | None = None,
        key: Callable[..., str] | None = None,
    ) -> Callable:
        pass
