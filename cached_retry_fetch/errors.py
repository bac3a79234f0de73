"""Failure classification for fetch operations.

The fetcher retries ``TRANSIENT`` failures and gives up immediately on
``PERMANENT`` ones. A tagged :class:`FetchError` decides by its ``kind``;
any other exception is classified by the ``status`` or ``status_code`` it
carries, so untagged HTTP client errors for 401/404 are not retried either.
"""

from collections.abc import Awaitable, Callable, Collection
from enum import Enum
from functools import wraps
from typing import TypeVar

T = TypeVar("T")

PERMANENT_STATUSES = frozenset({401, 404})


class FailureKind(str, Enum):
    TRANSIENT = "transient"
    PERMANENT = "permanent"


def kind_for_status(status: int | None, permanent_statuses: Collection[int] = PERMANENT_STATUSES) -> FailureKind:
    if status is not None and status in permanent_statuses:
        return FailureKind.PERMANENT
    return FailureKind.TRANSIENT


class FetchError(Exception):
    def __init__(self, message: str = "", *, status: int | None = None, kind: FailureKind | None = None):
        super().__init__(message)
        self.status = status
        self.kind = kind if kind is not None else kind_for_status(status)

    @classmethod
    def transient(cls, message: str = "", status: int | None = None) -> "FetchError":
        return cls(message, status=status, kind=FailureKind.TRANSIENT)

    @classmethod
    def permanent(cls, message: str = "", status: int | None = None) -> "FetchError":
        return cls(message, status=status, kind=FailureKind.PERMANENT)

    @property
    def is_permanent(self) -> bool:
        return self.kind is FailureKind.PERMANENT

    def __repr__(self) -> str:
        return f"FetchError({str(self)!r}, status={self.status!r}, kind={self.kind.value})"


def classify_failure(exc: BaseException) -> FailureKind:
    if isinstance(exc, FetchError):
        return exc.kind
    return kind_for_status(_status_of(exc))


def _status_of(exc: BaseException) -> int | None:
    for source in (exc, getattr(exc, "response", None)):
        if source is None:
            continue
        for attr in ("status", "status_code"):
            value = getattr(source, attr, None)
            if isinstance(value, int) and not isinstance(value, bool):
                return value
    return None


def as_fetch_operation(
    operation: Callable[[], Awaitable[T]],
    permanent_statuses: Collection[int] = PERMANENT_STATUSES,
) -> Callable[[], Awaitable[T]]:
    """Wrap ``operation`` so status-carrying exceptions surface as tagged FetchErrors.

    Works with anything exposing ``status`` or ``status_code`` on the exception
    or on its ``response`` (aiohttp, httpx, requests style errors). Exceptions
    without a status are left alone and count as transient.
    """

    @wraps(operation)
    async def wrapper() -> T:
        try:
            return await operation()
        except FetchError:
            raise
        except Exception as e:
            status = _status_of(e)
            if status is None:
                raise
            raise FetchError(str(e), status=status, kind=kind_for_status(status, permanent_statuses)) from e

    return wrapper


def is_retryable(exc: BaseException) -> bool:
    # CancelledError and friends are never retried.
    return isinstance(exc, Exception) and classify_failure(exc) is FailureKind.TRANSIENT


__all__ = [
    "PERMANENT_STATUSES",
    "FailureKind",
    "FetchError",
    "as_fetch_operation",
    "classify_failure",
    "is_retryable",
    "kind_for_status",
]
