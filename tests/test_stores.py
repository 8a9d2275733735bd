"""Tests for flat stores"""

import time
import uuid

import pytest

from keystash.stores.fake_redis import FakeRedisStore
from keystash.stores import memory
from keystash.stores.memory import MemoryStore


class TestMemoryStore:
    """Test memory store"""

    def test_basic_operations(self, memory_store):
        """Test basic store operations"""
        assert memory_store.set("key1", "value1", 60) is True
        assert memory_store.get("key1") == ("value1", True)

        # Test non-existent key
        assert memory_store.get("nonexistent") == (None, False)

        # Test delete
        assert memory_store.delete("key1") is True
        assert memory_store.delete("nonexistent") is False
        assert memory_store.get("key1") == (None, False)

    def test_stored_none_is_a_hit(self, memory_store):
        memory_store.set("key1", None, 60)
        assert memory_store.get("key1") == (None, True)

    def test_zero_ttl_expires_immediately(self, memory_store):
        assert memory_store.set("key1", "value1", 0) is True
        assert memory_store.get("key1") == (None, False)

    def test_negative_ttl_rejected(self, memory_store):
        assert memory_store.set("key1", "value1", -1) is False
        assert memory_store.size() == 0

    def test_ttl_expiration(self, memory_store, monkeypatch):
        """Test TTL expiration"""
        now = time.time()
        monkeypatch.setattr("time.time", lambda: now)
        memory_store.set("key1", "value1", 1)
        assert memory_store.get("key1") == ("value1", True)

        monkeypatch.setattr("time.time", lambda: now + 1.1)
        assert memory_store.get("key1") == (None, False)

    def test_segments_are_shared(self, memory_store):
        other = MemoryStore(segment=memory_store.segment)
        memory_store.set("key1", "value1", 60)
        assert other.get("key1") == ("value1", True)

        separate = MemoryStore(segment=uuid.uuid4().hex)
        assert separate.get("key1") == (None, False)

    def test_destroy_drops_segment(self):
        name = uuid.uuid4().hex
        store = MemoryStore(segment=name)
        holder = MemoryStore(segment=name)
        store.set("key1", "value1", 60)

        store.destroy()
        assert name not in memory._segments
        assert store.size() == 0
        assert holder.get("key1") == (None, False)
        assert MemoryStore(segment=name).get("key1") == (None, False)
        memory._segments.pop(name, None)

    def test_max_size_eviction(self):
        """Test max size eviction"""
        store = MemoryStore(segment=uuid.uuid4().hex, max_size=2)

        store.set("key1", "value1", 60)
        store.set("key2", "value2", 60)
        assert store.size() == 2

        # Adding third key should evict the first
        store.set("key3", "value3", 60)
        assert store.size() == 2
        assert store.get("key1") == (None, False)
        assert store.get("key2") == ("value2", True)
        assert store.get("key3") == ("value3", True)

    def test_list_entries(self, memory_store):
        memory_store.set("key1", "value1", 60)
        memory_store.set("key2", "value2", 0)
        memory_store.get("key1")

        entries = memory_store.list_entries()
        assert [entry.key for entry in entries] == ["key1"]
        assert entries[0].hit_count == 1
        assert 0 < entries[0].ttl_seconds <= 60

    def test_clear_all(self, memory_store):
        """Test store clear"""
        memory_store.set("key1", "value1", 60)
        memory_store.set("key2", "value2", 60)

        assert memory_store.clear_all() is True
        assert memory_store.size() == 0

    def test_cli_flag(self, monkeypatch):
        assert MemoryStore.is_extension_available() is True
        assert MemoryStore.is_enabled_for_cli() is False

        monkeypatch.setenv("KEYSTASH_MEMORY_ENABLE_CLI", "1")
        assert MemoryStore.is_enabled_for_cli() is True


class TestFakeRedisStore:
    """Test the Redis store against fakeredis"""

    @pytest.fixture
    def store(self):
        store = FakeRedisStore()
        yield store
        store.close()

    def test_basic_operations(self, store):
        assert store.set("key1", {"data": [1, 2], "expiration": 10}, 60) is True
        assert store.get("key1") == ({"data": [1, 2], "expiration": 10}, True)
        assert store.get("missing") == (None, False)

        assert store.delete("key1") is True
        assert store.delete("key1") is False

    def test_ttl_is_applied(self, store):
        store.set("key1", "value1", 60)
        assert 0 < store._get_client().ttl("key1") <= 60

    def test_zero_ttl_expires_immediately(self, store):
        assert store.set("key1", "value1", 0) is True
        time.sleep(0.01)
        assert store.get("key1") == (None, False)

    def test_unknown_objects_stored_as_strings(self, store):
        assert store.set("key1", {"self": object()}, 60) is True
        value, found = store.get("key1")
        assert found
        assert isinstance(value["self"], str)

    def test_list_entries_and_clear(self, store):
        store.set("a::1::", 1, 60)
        store.set("a::2::", 2, 60)

        assert sorted(entry.key for entry in store.list_entries()) == ["a::1::", "a::2::"]
        assert store.clear_all() is True
        assert store.list_entries() == []

    def test_shared_server(self, store):
        other = FakeRedisStore(server=store.server)
        store.set("key1", "value1", 60)
        assert other.get("key1") == ("value1", True)

    def test_is_available(self):
        assert FakeRedisStore.is_extension_available() is True
        assert FakeRedisStore.is_enabled_for_cli() is True
