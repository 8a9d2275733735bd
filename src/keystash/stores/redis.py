"""Redis flat store"""

import json
import logging
from typing import Any

from keystash.models import StoreEntry
from keystash.stores.base import FlatStore

try:
    import redis

    REDIS_AVAILABLE = True
    RedisType = redis.Redis
except ImportError:
    REDIS_AVAILABLE = False
    RedisType = Any  # Fallback type when Redis not available

logger = logging.getLogger(__name__)


class RedisStore(FlatStore):
    """Redis store for host-wide or networked caching

    Values are serialized as JSON.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379",
        db: int = 0,
        encoding: str = "utf-8",
    ):
        self.url = url
        self.db = db
        self.encoding = encoding
        self._client: RedisType | None = None

    def _get_client(self) -> RedisType:
        """Get or create Redis client"""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                db=self.db,
                encoding=self.encoding,
                decode_responses=True,
            )
        return self._client

    def get(self, key: str) -> tuple[Any, bool]:
        """Get a value from the store"""
        client = self._get_client()

        try:
            value = client.get(key)
            if value is None:
                return None, False

            return json.loads(value), True
        except (json.JSONDecodeError, redis.RedisError):
            # If we can't deserialize or Redis error, treat as cache miss
            return None, False

    def set(self, key: str, value: Any, ttl: int) -> bool:
        """Set a value in the store"""
        client = self._get_client()

        try:
            serialized_value = json.dumps(value, default=str)
            # Redis rejects a zero expiry, the shortest it accepts is 1ms
            if ttl > 0:
                return bool(client.set(key, serialized_value, ex=ttl))
            return bool(client.set(key, serialized_value, px=1))
        except (TypeError, ValueError, redis.RedisError) as e:
            logger.warning(f"Redis set failed for key {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete a key"""
        client = self._get_client()

        try:
            return client.delete(key) > 0
        except redis.RedisError:
            return False

    def clear_all(self) -> bool:
        """Flush the selected database"""
        client = self._get_client()

        try:
            return bool(client.flushdb())
        except redis.RedisError as e:
            logger.warning(f"Redis flush failed: {e}")
            return False

    def list_entries(self) -> list[StoreEntry]:
        """Scan every key in the selected database"""
        client = self._get_client()

        try:
            return [StoreEntry(key=key) for key in client.scan_iter(match="*")]
        except redis.RedisError as e:
            logger.warning(f"Redis scan failed: {e}")
            return []

    @classmethod
    def is_extension_available(cls) -> bool:
        return REDIS_AVAILABLE

    def close(self) -> None:
        """Close the Redis connection"""
        if self._client is not None:
            try:
                self._client.close()
            except redis.RedisError as e:
                logger.debug(f"Ignoring error while closing Redis client: {e}")
            self._client = None
