import uuid
from typing import Any

import pytest
from hypothesis import Verbosity, settings

from keystash.config import clear_config
from keystash.keys import INSTALL_ID_ENV
from keystash.models import StoreEntry
from keystash.runtime import CLI_CONTEXT_ENV
from keystash.stores.base import FlatStore
from keystash.stores.memory import ENABLE_CLI_ENV, MemoryStore

# Register test profiles
settings.register_profile("dev", max_examples=10)
settings.register_profile("ci", max_examples=100)
settings.register_profile("debug", max_examples=1000, verbosity=Verbosity.verbose)


class RecordingStore(FlatStore):
    """Dict-backed store that remembers the lifetime of every write

    Entries never expire, so tests can inspect what was written with a zero
    lifetime.
    """

    def __init__(self, accept_writes: bool = True):
        self.data: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}
        self.deleted: list[str] = []
        self.cleared = 0
        self.accept_writes = accept_writes

    def get(self, key: str) -> tuple[Any, bool]:
        if key in self.data:
            return self.data[key], True
        return None, False

    def set(self, key: str, value: Any, ttl: int) -> bool:
        if not self.accept_writes:
            return False
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, key: str) -> bool:
        self.deleted.append(key)
        return self.data.pop(key, None) is not None

    def clear_all(self) -> bool:
        self.cleared += 1
        self.data.clear()
        return True

    def list_entries(self) -> list[StoreEntry]:
        return [StoreEntry(key=key) for key in self.data]

    @classmethod
    def is_extension_available(cls) -> bool:
        return True


class MissingStore(RecordingStore):
    """Store whose backing facility is not installed"""

    created = 0

    def __init__(self):
        MissingStore.created += 1
        super().__init__()

    @classmethod
    def is_extension_available(cls) -> bool:
        return False


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep CLI context flags and config singletons from leaking between tests"""
    monkeypatch.setenv(CLI_CONTEXT_ENV, "")
    monkeypatch.delenv(ENABLE_CLI_ENV, raising=False)
    monkeypatch.delenv(INSTALL_ID_ENV, raising=False)
    clear_config()
    yield
    clear_config()


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def store_classes():
    """Helper store classes for driver tests"""
    return {"recording": RecordingStore, "missing": MissingStore}


@pytest.fixture
def memory_store():
    """Memory store on a segment of its own"""
    store = MemoryStore(segment=uuid.uuid4().hex)
    yield store
    store.destroy()


@pytest.fixture
def frozen_time(monkeypatch):
    """Pin time.time() to a fixed instant"""
    now = 1_700_000_000.0
    monkeypatch.setattr("time.time", lambda: now)
    return now
