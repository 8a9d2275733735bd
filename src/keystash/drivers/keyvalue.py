"""Driver over a flat key/value store with native expiration"""

import logging
import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from keystash.drivers.base import Driver
from keystash.exceptions import UnavailableBackend
from keystash.keys import KeyPath, default_namespace, encode_key, is_under, normalize_path
from keystash.models import CacheEntry, to_timestamp
from keystash.runtime import in_cli_context
from keystash.stores.base import FlatStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300


class KeyValueDriver(Driver):
    """Cache driver layered over a flat store

    Adds three things the store lacks: namespaced keys built from key paths,
    lifetimes clamped to a configured maximum, and clearing a whole subtree of
    paths. Subclasses bind ``store_class``; a store instance can also be
    passed in directly.
    """

    store_class: type[FlatStore] | None = None

    def __init__(self, store: FlatStore | None = None):
        """Initialize the driver

        Args:
            store: Store to use instead of building ``store_class()``

        Raises:
            UnavailableBackend: If the store is missing or disabled here
        """
        store_class = type(store) if store is not None else self.store_class
        if not _store_usable(store_class):
            msg = f"{type(self).__name__} driver is not available in this environment"
            raise UnavailableBackend(msg)

        self.store = store if store is not None else store_class()
        self.ttl = DEFAULT_TTL
        self.namespace: str | None = None
        self.set_options()
        logger.debug(f"Initialized {type(self).__name__} with {type(self.store).__name__}")

    def set_options(self, options: Mapping[str, Any] | None = None) -> None:
        """Apply driver options

        Recognized options:

        * ``ttl`` - maximum lifetime in seconds of any stored entry
        * ``namespace`` - keeps independent installs sharing a store apart
        * ``install_id`` - derives the namespace when none is given
        """
        options = options or {}

        ttl = _positive_int(options.get("ttl"))
        if ttl is not None:
            self.ttl = ttl

        if options.get("namespace"):
            # Raises InvalidKeyError for a namespace containing ":"
            encode_key(str(options["namespace"]), ())
            self.namespace = str(options["namespace"])
        elif options.get("install_id") is not None:
            self.namespace = default_namespace(str(options["install_id"]))
        elif self.namespace is None:
            self.namespace = default_namespace()

    def make_key(self, path: KeyPath | None) -> str:
        """Turn a key path into this driver's flat key"""
        return encode_key(self.namespace, path)

    def get_data(self, path: KeyPath) -> tuple[Any, bool]:
        """Get the data stored under a key path"""
        entry = self.get_entry(path)
        if entry is None:
            return None, False
        return entry.data, True

    def get_entry(self, path: KeyPath) -> CacheEntry | None:
        """Get the stored entry, including the caller's absolute expiration"""
        value, found = self.store.get(self.make_key(path))
        if not found:
            return None
        return CacheEntry.from_stored(value)

    def store_data(
        self, path: KeyPath, data: Any, expiration: float | datetime
    ) -> bool:
        """Store data under a key path

        The store is given the shorter of the configured TTL and the time left
        until ``expiration``. An expiration already in the past is still
        written, with a lifetime of zero.
        """
        expires_at = to_timestamp(expiration)
        life = self.cache_time(expires_at)
        entry = CacheEntry(data=data, expiration=expires_at)

        return self.store.set(self.make_key(path), entry.to_dict(), life)

    def cache_time(self, expiration: float | datetime, now: float | None = None) -> int:
        """Convert an absolute expiration into the lifetime given to the store

        Returns:
            ``max(0, min(ttl, expiration - now))`` in whole seconds
        """
        if now is None:
            now = time.time()
        life = int(to_timestamp(expiration) - now)
        return max(0, min(self.ttl, life))

    def clear(self, path: KeyPath | None = None) -> bool:
        """Clear a key path and everything below it

        Without a path the whole store is cleared. With one, every key held by
        the store is scanned and the matching ones are deleted one by one.
        Entries written during the scan may survive.
        """
        segments = normalize_path(path)
        if not segments:
            return self.store.clear_all()

        matched = 0
        for entry in self.store.list_entries():
            if is_under(entry.key, self.namespace, segments):
                self.store.delete(entry.key)
                matched += 1

        logger.debug(f"Cleared {matched} keys under {'/'.join(segments)}")
        return True

    def purge(self) -> bool:
        """No-op, the store expires entries itself"""
        return True

    @classmethod
    def is_available(cls) -> bool:
        """Check whether the bound store can be used in this runtime"""
        return _store_usable(cls.store_class)

    @classmethod
    def is_persistent(cls) -> bool:
        return True


def _store_usable(store_class: type[FlatStore] | None) -> bool:
    if store_class is None or not store_class.is_extension_available():
        return False
    return not in_cli_context() or store_class.is_enabled_for_cli()


def _positive_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None
