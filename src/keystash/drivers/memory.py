"""In-memory cache driver"""

from keystash.drivers.keyvalue import KeyValueDriver
from keystash.stores.memory import MemoryStore


class MemoryDriver(KeyValueDriver):
    """Driver over the interpreter-wide shared memory store

    Good for development and testing. Entries are shared by every driver in
    the process but are gone once it exits.
    """

    store_class = MemoryStore

    @classmethod
    def is_persistent(cls) -> bool:
        return False
