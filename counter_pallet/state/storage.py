"""
counter_pallet.state.storage — host key/value storage view.

A minimal, deterministic `bytes → bytes` store standing in for the host's
durable state tree. It wraps a plain mapping; a DB-backed mapping can be
injected through `backend`.

Design goals
------------
- Pure Python, no I/O.
- Bytes-in / bytes-out; inputs are copied to immutable `bytes`.
- "Empty means absent": storing an empty value deletes the key.

Typical usage
-------------
    sv = StorageView()
    sv.set(key, b"value")
    sv.get(key)          # b"value" or None
    sv.delete(key)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, MutableMapping, Optional, Tuple


def _as_bytes(x: bytes | bytearray | memoryview, *, name: str) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(x)


@dataclass
class StorageView:
    """
    A flat key/value store.

    Parameters
    ----------
    backend :
        Optional external mapping holding the data. If not provided, an
        internal dict is used.
    """
    backend: Optional[MutableMapping[bytes, bytes]] = None

    _store: MutableMapping[bytes, bytes] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._store = self.backend if self.backend is not None else {}

    # ------------------------------ core ops --------------------------------

    def get(self, key: bytes | bytearray | memoryview, default: Optional[bytes] = None) -> Optional[bytes]:
        return self._store.get(_as_bytes(key, name="key"), default)

    def has(self, key: bytes | bytearray | memoryview) -> bool:
        return _as_bytes(key, name="key") in self._store

    def set(self, key: bytes | bytearray | memoryview, value: bytes | bytearray | memoryview) -> None:
        """Set `key`. An empty value deletes the key (canonical)."""
        key_b = _as_bytes(key, name="key")
        val_b = _as_bytes(value, name="value")
        if len(val_b) == 0:
            self._store.pop(key_b, None)
            return
        self._store[key_b] = val_b

    def delete(self, key: bytes | bytearray | memoryview) -> bool:
        """Delete `key`. Returns True if it existed."""
        return self._store.pop(_as_bytes(key, name="key"), None) is not None

    # ------------------------------ iteration -------------------------------

    def items(self, prefix: bytes = b"") -> Iterator[Tuple[bytes, bytes]]:
        """Iterate (key, value) pairs under `prefix`, ordered by key."""
        for k in sorted(self._store.keys()):
            if k.startswith(prefix):
                yield k, self._store[k]

    def __len__(self) -> int:
        return len(self._store)

    # ------------------------------ export/import ---------------------------

    def export_hex(self) -> Dict[str, str]:
        """Export as a {key_hex: value_hex} dict sorted by key."""
        return {k.hex(): v.hex() for k, v in self.items()}

    def import_hex(self, data: Mapping[str, str]) -> None:
        """Replace the contents with a {key_hex: value_hex} mapping."""
        self._store.clear()
        for k_hex, v_hex in data.items():
            self.set(bytes.fromhex(k_hex), bytes.fromhex(v_hex))


__all__ = ["StorageView"]
