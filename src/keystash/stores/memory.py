"""In-memory shared store"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any

from keystash.models import StoreEntry
from keystash.runtime import env_flag
from keystash.stores.base import FlatStore

ENABLE_CLI_ENV = "KEYSTASH_MEMORY_ENABLE_CLI"


@dataclass
class _Slot:
    value: Any
    expires_at: float
    created_at: float
    hits: int = 0


@dataclass
class _Segment:
    slots: dict[str, _Slot] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)


_segments: dict[str, _Segment] = {}
_segments_lock = threading.Lock()


def _get_segment(name: str) -> _Segment:
    with _segments_lock:
        if name not in _segments:
            _segments[name] = _Segment()
        return _segments[name]


class MemoryStore(FlatStore):
    """Shared in-memory store

    Stores created with the same segment name share their entries, so every
    driver in the interpreter sees the same data. Nothing survives the
    process.
    """

    def __init__(self, segment: str = "default", max_size: int | None = None):
        self.segment = segment
        self._max_size = max_size
        self._shared = _get_segment(segment)

    def get(self, key: str) -> tuple[Any, bool]:
        """Get a value from the store"""
        with self._shared.lock:
            slot = self._shared.slots.get(key)
            if slot is None:
                return None, False

            # Check if expired
            if time.time() >= slot.expires_at:
                del self._shared.slots[key]
                return None, False

            slot.hits += 1
            return slot.value, True

    def set(self, key: str, value: Any, ttl: int) -> bool:
        """Set a value in the store"""
        if ttl < 0:
            return False

        now = time.time()
        with self._shared.lock:
            slots = self._shared.slots

            # Evict oldest entries if at max size
            if self._max_size and len(slots) >= self._max_size and key not in slots:
                oldest_key = next(iter(slots))
                del slots[oldest_key]

            slots[key] = _Slot(value=value, expires_at=now + ttl, created_at=now)
            return True

    def delete(self, key: str) -> bool:
        """Delete a key"""
        with self._shared.lock:
            return self._shared.slots.pop(key, None) is not None

    def clear_all(self) -> bool:
        """Clear the whole segment"""
        with self._shared.lock:
            self._shared.slots.clear()
        return True

    def list_entries(self) -> list[StoreEntry]:
        """List live entries, dropping expired ones"""
        now = time.time()
        entries = []
        with self._shared.lock:
            for key, slot in list(self._shared.slots.items()):
                if now >= slot.expires_at:
                    del self._shared.slots[key]
                    continue
                entries.append(
                    StoreEntry(
                        key=key,
                        ttl_seconds=int(slot.expires_at - now),
                        age_seconds=int(now - slot.created_at),
                        hit_count=slot.hits,
                    )
                )
        return entries

    @classmethod
    def is_extension_available(cls) -> bool:
        return True

    @classmethod
    def is_enabled_for_cli(cls) -> bool:
        """Disabled unless KEYSTASH_MEMORY_ENABLE_CLI is set

        A command-line process exits after one command, taking the segment
        with it.
        """
        return env_flag(ENABLE_CLI_ENV)

    def destroy(self) -> None:
        """Drop the segment and its entries from the process

        Stores still holding the segment keep an empty, detached one; new
        stores with the same name start a fresh segment.
        """
        with _segments_lock:
            if _segments.get(self.segment) is self._shared:
                del _segments[self.segment]
        self.clear_all()

    def size(self) -> int:
        """Get current segment size (for testing/debugging)"""
        with self._shared.lock:
            return len(self._shared.slots)
