"""Driver factory"""

from collections.abc import Mapping
from typing import Any

from keystash.config import DriverConfig
from keystash.drivers.base import Driver
from keystash.drivers.memory import MemoryDriver
from keystash.drivers.redis import FakeRedisDriver, RedisDriver
from keystash.stores.base import FlatStore

DRIVERS: dict[str, type[Driver]] = {
    "memory": MemoryDriver,
    "redis": RedisDriver,
    "fake_redis": FakeRedisDriver,
}


def get_driver(
    name: str = "memory",
    options: Mapping[str, Any] | None = None,
    store: FlatStore | None = None,
) -> Driver:
    """Get a configured driver instance

    Args:
        name: Driver name ("memory", "redis", or "fake_redis")
        options: Options passed to ``set_options``
        store: Store to use instead of the driver's default

    Returns:
        Driver instance

    Raises:
        ValueError: If the driver name is not supported
        UnavailableBackend: If the driver cannot run in this environment
    """
    driver_class = DRIVERS.get(name)
    if driver_class is None:
        msg = f"Unsupported cache driver: {name}. Supported: {', '.join(get_supported_drivers())}"
        raise ValueError(msg)

    driver = driver_class(store) if store is not None else driver_class()
    driver.set_options(options)
    return driver


def build_driver(config: DriverConfig) -> Driver:
    """Build the driver described by a configuration section"""
    return get_driver(config.driver, config.driver_options())


def get_supported_drivers() -> list[str]:
    """Get list of driver names"""
    return list(DRIVERS)


def get_available_drivers() -> dict[str, type[Driver]]:
    """Get the drivers that can be constructed in this runtime"""
    return {name: cls for name, cls in DRIVERS.items() if cls.is_available()}
