"""keystash - pluggable cache drivers with hierarchical keys"""

from keystash.drivers import (
    DEFAULT_TTL,
    Driver,
    FakeRedisDriver,
    KeyValueDriver,
    MemoryDriver,
    RedisDriver,
)
from keystash.drivers.factory import get_available_drivers, get_driver
from keystash.exceptions import (
    ConfigError,
    InvalidKeyError,
    KeystashError,
    UnavailableBackend,
)
from keystash.keys import encode_key, is_under
from keystash.models import CacheEntry

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TTL",
    "CacheEntry",
    "ConfigError",
    "Driver",
    "FakeRedisDriver",
    "InvalidKeyError",
    "KeyValueDriver",
    "KeystashError",
    "MemoryDriver",
    "RedisDriver",
    "UnavailableBackend",
    "encode_key",
    "get_available_drivers",
    "get_driver",
    "is_under",
]
