"""Flat key/value stores"""

from keystash.stores.base import FlatStore
from keystash.stores.memory import MemoryStore
from keystash.stores.redis import REDIS_AVAILABLE, RedisStore

__all__ = [
    "REDIS_AVAILABLE",
    "FlatStore",
    "MemoryStore",
    "RedisStore",
]
