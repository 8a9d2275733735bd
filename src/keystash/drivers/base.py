"""Base driver interface"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from keystash.keys import KeyPath


class Driver(ABC):
    """Abstract base class for cache drivers

    Every driver exposes the same operations so call sites never depend on
    where the data actually lives.
    """

    @abstractmethod
    def set_options(self, options: Mapping[str, Any] | None = None) -> None:
        """Apply driver options

        Args:
            options: Option mapping; unknown keys are ignored
        """
        pass

    @abstractmethod
    def get_data(self, path: KeyPath) -> tuple[Any, bool]:
        """Get the data stored under a key path

        Args:
            path: Key path

        Returns:
            Tuple of (data, found); a miss is never an error
        """
        pass

    @abstractmethod
    def store_data(
        self, path: KeyPath, data: Any, expiration: float | datetime
    ) -> bool:
        """Store data under a key path

        Args:
            path: Key path
            data: Value to cache
            expiration: Absolute expiration as a Unix timestamp or datetime

        Returns:
            True if the backend accepted the write
        """
        pass

    @abstractmethod
    def clear(self, path: KeyPath | None = None) -> bool:
        """Clear a key path and everything below it, or everything if no path"""
        pass

    @abstractmethod
    def purge(self) -> bool:
        """Remove stale entries the backend does not reclaim by itself"""
        pass

    @classmethod
    @abstractmethod
    def is_available(cls) -> bool:
        """Check whether the driver can be constructed in this runtime"""
        pass

    @classmethod
    @abstractmethod
    def is_persistent(cls) -> bool:
        """Whether data outlives the process that wrote it"""
        pass
