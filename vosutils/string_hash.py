"""String-keyed hash table with separate chaining and FNV-1a bucket selection."""

from __future__ import annotations

from typing import Any

_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619


def fnv1a_index(key: str, table_size: int) -> int:
    """Return the bucket index of ``key`` in a table of ``table_size`` buckets.

    The hash is 32-bit FNV-1a over the UTF-8 bytes of the key.
    """
    if table_size <= 0:
        raise ValueError("table_size must be positive")
    value = _FNV_OFFSET_BASIS
    for byte in key.encode("utf-8"):
        value ^= byte
        value = (value * _FNV_PRIME) & 0xFFFFFFFF
    return value % table_size


class StringHashTable:
    """A fixed number of buckets, each holding its keys in insertion order."""

    def __init__(self, table_size: int) -> None:
        if table_size <= 0:
            raise ValueError("table_size must be positive")
        self.table_size = table_size
        self._buckets: list[dict[str, Any]] = [{} for _ in range(table_size)]

    def _bucket(self, key: str) -> dict[str, Any]:
        if not isinstance(key, str):
            raise TypeError(f"key must be a str, not {type(key).__name__}")
        return self._buckets[fnv1a_index(key, self.table_size)]

    def insert(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        self._bucket(key)[key] = value

    def find(self, key: str) -> Any:
        """Return the value stored under ``key``; raise KeyError if absent."""
        bucket = self._bucket(key)
        try:
            return bucket[key]
        except KeyError:
            raise KeyError(key) from None

    def delete(self, key: str) -> None:
        """Remove ``key``; raise KeyError if absent."""
        bucket = self._bucket(key)
        try:
            del bucket[key]
        except KeyError:
            raise KeyError(key) from None

    def keys(self) -> list[str]:
        """All keys, bucket by bucket, each bucket in insertion order."""
        return [key for bucket in self._buckets for key in bucket]

    def clear(self) -> None:
        """Remove every key."""
        for bucket in self._buckets:
            bucket.clear()

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        return key in self._bucket(key)

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets)