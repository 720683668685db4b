"""
counter_pallet.state.items — typed storage items over a Journal.

Two shapes, matching the runtime's storage declarations:

- `StorageValue` : a single optional u32 under one key
- `StorageMap`   : account-id → u32, one key per entry

Key layout
----------
    value key : sha3_256(pallet)[:16] || sha3_256(item)[:16]
    map key   : value key || blake2b_64(account) || account

The map hasher keeps the raw account id at the end of the key so entries can be
enumerated without a reverse index. Values are 4-byte little-endian u32.
"""

from __future__ import annotations

import hashlib
from typing import Callable, Iterator, Optional, Tuple

from ..types.u32 import decode_u32, encode_u32
from .journal import Journal

MAP_HASH_BYTES = 8


def item_prefix(pallet: str, item: str) -> bytes:
    """32-byte storage prefix for `item` of `pallet`."""
    return (
        hashlib.sha3_256(pallet.encode("utf-8")).digest()[:16]
        + hashlib.sha3_256(item.encode("utf-8")).digest()[:16]
    )


def hash_concat(key: bytes) -> bytes:
    return hashlib.blake2b(key, digest_size=MAP_HASH_BYTES).digest() + key


class StorageValue:
    """A single optional u32 stored under a fixed key."""

    def __init__(self, journal: Journal, pallet: str, name: str) -> None:
        self._journal = journal
        self.name = name
        self.key = item_prefix(pallet, name)

    def get(self) -> Optional[int]:
        raw = self._journal.get(self.key)
        return None if raw is None else decode_u32(raw)

    def exists(self) -> bool:
        return self._journal.get(self.key) is not None

    def put(self, value: int) -> None:
        self._journal.set(self.key, encode_u32(value))

    def kill(self) -> None:
        self._journal.delete(self.key)


class StorageMap:
    """account-id → u32 map."""

    def __init__(self, journal: Journal, pallet: str, name: str) -> None:
        self._journal = journal
        self.name = name
        self.prefix = item_prefix(pallet, name)

    def key_for(self, who: bytes) -> bytes:
        if not isinstance(who, (bytes, bytearray)) or len(who) == 0:
            raise TypeError("map key must be non-empty bytes")
        return self.prefix + hash_concat(bytes(who))

    def get(self, who: bytes) -> Optional[int]:
        raw = self._journal.get(self.key_for(who))
        return None if raw is None else decode_u32(raw)

    def contains_key(self, who: bytes) -> bool:
        return self._journal.get(self.key_for(who)) is not None

    def insert(self, who: bytes, value: int) -> None:
        self._journal.set(self.key_for(who), encode_u32(value))

    def remove(self, who: bytes) -> None:
        self._journal.delete(self.key_for(who))

    def try_mutate(self, who: bytes, fn: Callable[[Optional[int]], Optional[int]]) -> Optional[int]:
        """
        Apply `fn` to the current value and store the result.

        `fn` receives None when the entry is absent and returns the new value
        (None removes the entry). If `fn` raises, nothing is written and the
        exception propagates.
        """
        key = self.key_for(who)
        raw = self._journal.get(key)
        new = fn(None if raw is None else decode_u32(raw))
        if new is None:
            self._journal.delete(key)
        else:
            self._journal.set(key, encode_u32(new))
        return new

    def iter(self) -> Iterator[Tuple[bytes, int]]:
        """Yield (account, value) for every visible entry, ordered by key."""
        skip = len(self.prefix) + MAP_HASH_BYTES
        for k, v in self._journal.items(self.prefix):
            yield k[skip:], decode_u32(v)


__all__ = ["StorageValue", "StorageMap", "item_prefix", "hash_concat"]
