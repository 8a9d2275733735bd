"""Cache key encoding utilities

Key paths are ordered sequences of segments such as ``("users", "42",
"profile")``. They are flattened into a single string scoped by a namespace:

    namespace::users::42::profile::

Every segment, including the last, is followed by the delimiter. That makes a
plain ``startswith`` test equivalent to "is this path equal to or below that
path", so ``("user",)`` never matches ``("username",)``. Neither namespaces nor
segments may contain ``:``, otherwise a colon next to the delimiter would blur
where one segment ends, e.g. ``("a:", "b")`` and ``("a", ":b")``.
"""

import hashlib
import os
import uuid
from collections.abc import Iterable, Sequence
from functools import lru_cache

from keystash.exceptions import InvalidKeyError

DELIMITER = "::"
RESERVED = ":"
INSTALL_ID_ENV = "KEYSTASH_INSTALL_ID"

KeyPath = Sequence[str | int]


def normalize_path(path: KeyPath | str | None) -> tuple[str, ...]:
    """Turn a key path into a tuple of string segments

    Args:
        path: Sequence of segments, a slash separated string, or None

    Returns:
        Tuple of segments (empty for None or an empty path)

    Raises:
        InvalidKeyError: If a segment is not a string/int or contains a colon
    """
    if path is None:
        return ()
    if isinstance(path, str):
        path = [segment for segment in path.split("/") if segment]

    segments = []
    for segment in path:
        if isinstance(segment, bool) or not isinstance(segment, (str, int)):
            msg = f"Key segment must be a string or integer, got {type(segment).__name__}"
            raise InvalidKeyError(msg)
        segments.append(_check_part(str(segment), "Key segment"))
    return tuple(segments)


def encode_key(namespace: str, path: KeyPath | str | None) -> str:
    """Build the flat store key for a path

    Args:
        namespace: Namespace the key belongs to
        path: Key path; empty means the whole namespace

    Returns:
        Flat key string ending in the delimiter
    """
    return _join([_check_part(namespace, "Namespace"), *normalize_path(path)])


def is_under(flat_key: str, namespace: str, path: KeyPath | str | None) -> bool:
    """Check whether a flat key belongs to a path or one of its descendants"""
    return flat_key.startswith(encode_key(namespace, path))


def decode_key(namespace: str, flat_key: str) -> tuple[str, ...] | None:
    """Recover the path of a flat key, or None if it is outside the namespace"""
    prefix = encode_key(namespace, ())
    if not flat_key.startswith(prefix) or not flat_key.endswith(DELIMITER):
        return None
    body = flat_key[len(prefix) : -len(DELIMITER)]
    if not body:
        return ()
    return tuple(body.split(DELIMITER))


def default_namespace(install_id: str | None = None) -> str:
    """Derive the namespace for an installation

    The identifier comes from the argument, then the ``KEYSTASH_INSTALL_ID``
    environment variable. Without either, a random identifier generated once
    per process is used, so every driver in the process shares the namespace.

    Returns:
        MD5 hex digest of the installation identifier
    """
    if install_id is None:
        install_id = os.getenv(INSTALL_ID_ENV) or _process_install_id()
    return hashlib.md5(install_id.encode()).hexdigest()


@lru_cache(maxsize=1)
def _process_install_id() -> str:
    return uuid.uuid4().hex


def _check_part(part: str, label: str) -> str:
    if RESERVED in part:
        msg = f"{label} {part!r} contains the reserved character {RESERVED!r}"
        raise InvalidKeyError(msg)
    return part


def _join(parts: Iterable[str]) -> str:
    return "".join(f"{part}{DELIMITER}" for part in parts)
