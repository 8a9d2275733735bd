"""Base flat store interface"""

from abc import ABC, abstractmethod
from typing import Any

from keystash.models import StoreEntry


class FlatStore(ABC):
    """Abstract base class for flat key/value stores

    A flat store only knows single-level string keys and relative lifetimes.
    Hierarchy and absolute expirations are layered on top by the drivers.
    """

    @abstractmethod
    def get(self, key: str) -> tuple[Any, bool]:
        """Get a value from the store

        Args:
            key: Flat key

        Returns:
            Tuple of (value, found); value is None on a miss
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any, ttl: int) -> bool:
        """Set a value in the store

        Args:
            key: Flat key
            value: Value to store
            ttl: Lifetime in seconds, 0 expires the entry immediately

        Returns:
            True if the store accepted the write
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a key

        Returns:
            True if the key existed and was deleted
        """
        pass

    @abstractmethod
    def clear_all(self) -> bool:
        """Remove every entry the store holds"""
        pass

    @abstractmethod
    def list_entries(self) -> list[StoreEntry]:
        """Enumerate the keys currently held by the store"""
        pass

    @classmethod
    @abstractmethod
    def is_extension_available(cls) -> bool:
        """Check whether the backing facility can be used in this runtime"""
        pass

    @classmethod
    def is_enabled_for_cli(cls) -> bool:
        """Check whether the store may be used from a command-line process"""
        return True

    def close(self) -> None:
        """Release resources held by the store"""
        pass
