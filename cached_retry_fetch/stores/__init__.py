from .in_memory import InMemoryStore

__all__ = ["InMemoryStore"]
