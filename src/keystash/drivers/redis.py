"""Redis cache drivers"""

from collections.abc import Mapping
from typing import Any

from keystash.drivers.keyvalue import KeyValueDriver
from keystash.stores.fake_redis import FakeRedisStore
from keystash.stores.redis import RedisStore


class RedisDriver(KeyValueDriver):
    """Driver over a Redis server

    Besides ``ttl`` and ``namespace`` it accepts ``url`` and ``db`` options,
    which reconnect to a different server or database.
    """

    store_class = RedisStore

    def set_options(self, options: Mapping[str, Any] | None = None) -> None:
        options = options or {}
        super().set_options(options)

        if "url" not in options and "db" not in options:
            return
        if not isinstance(self.store, RedisStore):
            return

        url = options.get("url", self.store.url)
        db = int(options.get("db", self.store.db))
        if (url, db) != (self.store.url, self.store.db):
            self.store.close()
            self.store = RedisStore(url=url, db=db)


class FakeRedisDriver(KeyValueDriver):
    """Driver over fakeredis, for tests and local development"""

    store_class = FakeRedisStore
