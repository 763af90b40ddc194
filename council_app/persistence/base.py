"""Base class for key-value stores backing the proposal ledger."""

from abc import ABC, abstractmethod
from typing import Any


class KeyValueStore(ABC):
    """Minimal key-value store holding JSON-serializable values."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        pass

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing a missing key is a no-op."""
        pass

    @abstractmethod
    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys starting with prefix, in sorted order."""
        pass

    def contains(self, key: str) -> bool:
        """Check whether key is present."""
        sentinel = object()
        return self.get(key, sentinel) is not sentinel
