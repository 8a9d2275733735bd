"""Data types shared by drivers and stores"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A value as held in a flat store, with the caller's absolute expiration"""

    data: Any
    expiration: float

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "expiration": self.expiration}

    @classmethod
    def from_stored(cls, value: Any) -> "CacheEntry | None":
        """Rebuild an entry from what a store returned

        Returns None when the stored value does not look like an entry.
        """
        if isinstance(value, CacheEntry):
            return value
        if not isinstance(value, dict) or "data" not in value:
            return None
        return cls(data=value["data"], expiration=value.get("expiration", 0))


@dataclass
class StoreEntry:
    """Metadata about one key currently held by a flat store"""

    key: str
    ttl_seconds: int | None = None
    age_seconds: int | None = None
    hit_count: int | None = None


def to_timestamp(expiration: float | int | datetime) -> float:
    """Convert an expiration into a Unix timestamp

    Naive datetimes are treated as UTC.
    """
    if isinstance(expiration, datetime):
        if expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=timezone.utc)
        return expiration.timestamp()
    return float(expiration)
