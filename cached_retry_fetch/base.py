from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from .interfaces import CachedFetcherInterface

F = TypeVar("F", bound=Callable[..., Any])


class CachedFetchingClass:
    def __init__(self, fetcher: CachedFetcherInterface) -> None:
        self._fetcher = fetcher

    @property
    def fetcher(self) -> CachedFetcherInterface:
        return self._fetcher

    def wrapped(self, func: F) -> F:
        return self._fetcher()(func)  # type: ignore

    @classmethod
    def cached(
        cls,
        ttl: int | None = None,
        max_retries: int | None = None,
        key: Callable[..., str] | None = None,
    ) -> Callable[[F], F]:
        """Cache an async method's result through the instance's fetcher.

        ``key`` receives the same arguments as the method, ``self`` included.
        Without it the key is built from the method name and its arguments.
        """

        def decorator(func: F) -> F:
            @wraps(func)
            async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
                if not hasattr(self, "_fetcher"):
                    raise AttributeError("_fetcher not found. Did you call super().__init__?")
                return await self._fetcher(ttl=ttl, max_retries=max_retries, key=key)(func)(self, *args, **kwargs)

            return wrapper  # type: ignore

        return decorator
