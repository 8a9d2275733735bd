"""Redis store backed by fakeredis"""

from keystash.stores.redis import RedisStore

try:
    import fakeredis

    FAKEREDIS_AVAILABLE = True
except ImportError:
    FAKEREDIS_AVAILABLE = False
    fakeredis = None


class FakeRedisStore(RedisStore):
    """Redis store using fakeredis for testing

    Stores sharing a ``server`` see the same data.
    """

    def __init__(self, server: "fakeredis.FakeServer | None" = None, encoding: str = "utf-8"):
        super().__init__(url="redis://fakeredis", encoding=encoding)
        self.server = server if server is not None else fakeredis.FakeServer()

    def _get_client(self) -> "fakeredis.FakeRedis":
        """Get or create fake Redis client"""
        if self._client is None:
            self._client = fakeredis.FakeRedis(
                server=self.server,
                encoding=self.encoding,
                decode_responses=True,
            )
        return self._client

    @classmethod
    def is_extension_available(cls) -> bool:
        return FAKEREDIS_AVAILABLE and super().is_extension_available()
