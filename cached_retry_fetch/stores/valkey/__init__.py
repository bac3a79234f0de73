from .config import ValkeyClientConfig
from .store import ValkeyStore

__all__ = ["ValkeyClientConfig", "ValkeyStore"]
