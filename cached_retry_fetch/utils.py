import asyncio
import inspect
import json
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

logger = logging.getLogger(__name__)


def safe_json_parse(raw: str | bytes | None, fallback: Any = None) -> Any:
    """Parse ``raw`` as JSON, returning ``fallback`` instead of raising."""
    if raw is None:
        return fallback
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"JSON parse error: {e}")
        return fallback


def debounce(wait: float = 0.3, immediate: bool = False) -> Callable[[Callable[..., Any]], Callable[..., None]]:
    """Delay calls to the wrapped function until ``wait`` seconds pass without a new call.

    With ``immediate=True`` the first call of a burst runs right away and the
    rest of the burst is dropped. Coroutine functions are scheduled as tasks
    on the running loop, so the wrapper itself must be called from inside one.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., None]:
        handle: asyncio.TimerHandle | None = None
        tasks: set[asyncio.Task[Any]] = set()

        def invoke(args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
            if inspect.iscoroutinefunction(func):
                task = asyncio.get_running_loop().create_task(func(*args, **kwargs))
                tasks.add(task)
                task.add_done_callback(tasks.discard)
            else:
                func(*args, **kwargs)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> None:
            nonlocal handle
            loop = asyncio.get_running_loop()
            call_now = immediate and handle is None

            def later() -> None:
                nonlocal handle
                handle = None
                if not immediate:
                    invoke(args, kwargs)

            if handle is not None:
                handle.cancel()
            handle = loop.call_later(wait, later)

            if call_now:
                invoke(args, kwargs)

        def cancel() -> None:
            nonlocal handle
            if handle is not None:
                handle.cancel()
                handle = None

        wrapper.cancel = cancel  # type: ignore[attr-defined]
        return wrapper

    return decorator
