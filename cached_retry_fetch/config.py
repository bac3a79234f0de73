from dataclasses import dataclass

DEFAULT_TTL_MS = 1000 * 60 * 5
DEFAULT_MAX_RETRIES = 2
DEFAULT_BACKOFF_BASE_MS = 1000


@dataclass
class FetcherConfig:
    """
    Defaults for CachedRetryFetcher.
    TTLs and backoff are in milliseconds; ``key_prefix`` namespaces every store key.
    """

    default_ttl_ms: int = DEFAULT_TTL_MS
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_base_ms: int = DEFAULT_BACKOFF_BASE_MS
    key_prefix: str = ""

    def __post_init__(self) -> None:
        validate_ttl(self.default_ttl_ms)
        validate_max_retries(self.max_retries)
        if self.backoff_base_ms <= 0:
            raise ValueError(f"backoff_base_ms must be positive, got {self.backoff_base_ms}")

    def backoff_delay_ms(self, attempt: int) -> int:
        """Delay before retry number ``attempt`` (1 for the first retry)."""
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        return self.backoff_base_ms * 2 ** (attempt - 1)

    @classmethod
    def defaults(cls) -> "FetcherConfig":
        return cls()

    @classmethod
    def no_retry(cls, default_ttl_ms: int = DEFAULT_TTL_MS) -> "FetcherConfig":
        return cls(default_ttl_ms=default_ttl_ms, max_retries=0)


def validate_ttl(ttl: int) -> None:
    # 0 is allowed: the entry is written already stale.
    if ttl < 0:
        raise ValueError(f"ttl must be >= 0, got {ttl}")


def validate_max_retries(max_retries: int) -> None:
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
