from dataclasses import dataclass, field
from urllib.parse import urlparse

from glide import GlideClientConfiguration, NodeAddress

DEFAULT_PORT = 6379


@dataclass
class ValkeyClientConfig:
    """
    Connection settings for ValkeyStore.
    Anything not listed here keeps the glide client defaults.
    """

    host: str = "localhost"
    port: int = DEFAULT_PORT
    database_id: int = 0
    use_tls: bool = False
    request_timeout_ms: int | None = None
    client_name: str | None = None
    additional_nodes: list[tuple[str, int]] = field(default_factory=list)

    def addresses(self) -> list[NodeAddress]:
        nodes = [(self.host, self.port), *self.additional_nodes]
        return [NodeAddress(host=host, port=port) for host, port in nodes]

    def to_glide_config(self) -> GlideClientConfiguration:
        config = GlideClientConfiguration(
            addresses=self.addresses(),
            use_tls=self.use_tls,
            database_id=self.database_id,
        )
        if self.request_timeout_ms is not None:
            config.request_timeout = self.request_timeout_ms
        if self.client_name is not None:
            config.client_name = self.client_name
        return config

    @classmethod
    def localhost(cls, port: int = DEFAULT_PORT, database_id: int = 0) -> "ValkeyClientConfig":
        return cls(host="localhost", port=port, database_id=database_id)

    @classmethod
    def remote(cls, host: str, port: int = DEFAULT_PORT, use_tls: bool = False) -> "ValkeyClientConfig":
        return cls(host=host, port=port, use_tls=use_tls)

    @classmethod
    def cluster(cls, nodes: list[tuple[str, int]], use_tls: bool = False) -> "ValkeyClientConfig":
        """First node is the primary address; the rest go to ``additional_nodes``."""
        if not nodes:
            raise ValueError("At least one node is required")
        (host, port), *rest = nodes
        return cls(host=host, port=port, additional_nodes=list(rest), use_tls=use_tls)

    @classmethod
    def from_url(cls, url: str) -> "ValkeyClientConfig":
        """Build a config from ``valkey://host:port/db``; ``valkeys://`` turns on TLS."""
        parsed = urlparse(url)
        if parsed.scheme not in ("valkey", "valkeys", "redis", "rediss"):
            raise ValueError(f"Unsupported scheme in {url!r}")
        if not parsed.hostname:
            raise ValueError(f"Missing host in {url!r}")

        path = parsed.path.lstrip("/")
        return cls(
            host=parsed.hostname,
            port=parsed.port or DEFAULT_PORT,
            database_id=int(path) if path else 0,
            use_tls=parsed.scheme.endswith("s"),
        )
