"""Cache drivers"""

from keystash.drivers.base import Driver
from keystash.drivers.keyvalue import DEFAULT_TTL, KeyValueDriver
from keystash.drivers.memory import MemoryDriver
from keystash.drivers.redis import FakeRedisDriver, RedisDriver

__all__ = [
    "DEFAULT_TTL",
    "Driver",
    "FakeRedisDriver",
    "KeyValueDriver",
    "MemoryDriver",
    "RedisDriver",
]
