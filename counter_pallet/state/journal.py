"""
counter_pallet.state.journal — journaling writes, checkpoints, revert/commit.

A deterministic, in-memory write journal layered over a `StorageView`. Writes go
to the top overlay; reads consult overlays from top → base. `commit()` merges
the top overlay into its parent (or the base when it is the last layer);
`revert()` discards it.

This is the transactional layer a runtime host provides: the pallet writes
eagerly, and the call wrapper decides whether those writes survive.

    j = Journal(StorageView())
    with j.transaction():
        j.set(key, b"...")
        raise SomeError          # everything since the `with` is discarded

Deletions are staged as `None` and applied at commit.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .storage import StorageView


def _b(x: bytes | bytearray | memoryview, *, name: str) -> bytes:
    if not isinstance(x, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like")
    return bytes(x)


@dataclass
class _Overlay:
    """A single journal layer. `None` marks a deletion."""

    writes: Dict[bytes, Optional[bytes]] = field(default_factory=dict)


class Journal:
    """
    A copy-on-write journal with nested checkpoints.

    The root layer always exists; `commit()` on the root flushes it to the base
    storage, `revert()` on the root clears it.
    """

    def __init__(self, base: StorageView) -> None:
        self._base = base
        self._layers: List[_Overlay] = [_Overlay()]

    @property
    def base(self) -> StorageView:
        return self._base

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def depth(self) -> int:
        """Number of overlays (>= 1)."""
        return len(self._layers)

    def begin(self) -> int:
        """Start a new checkpoint. Returns the new depth."""
        self._layers.append(_Overlay())
        return len(self._layers)

    def commit(self) -> None:
        """Merge the top overlay into its parent, or into the base if it is the root."""
        top = self._layers.pop()
        if self._layers:
            self._layers[-1].writes.update(top.writes)
            return
        self._apply_to_base(top)
        self._layers.append(_Overlay())

    def revert(self) -> None:
        """Discard the top overlay (or clear it if it's the root)."""
        if len(self._layers) > 1:
            self._layers.pop()
        else:
            self._layers[0] = _Overlay()

    @contextmanager
    def transaction(self) -> Iterator[int]:
        """
        Run a block inside its own checkpoint: commit on normal exit, revert
        and re-raise on any exception.
        """
        marker = self.begin()
        try:
            yield marker
        except BaseException:
            self._unwind(marker)
            self.revert()
            raise
        self._unwind(marker)
        self.commit()

    def _unwind(self, marker: int) -> None:
        # Checkpoints opened inside the block and left open are discarded.
        while len(self._layers) > marker:
            self.revert()

    # --------------------------------------------------------------------- #
    # Key/value API
    # --------------------------------------------------------------------- #

    def get(self, key: bytes | bytearray | memoryview) -> Optional[bytes]:
        key_b = _b(key, name="key")
        for layer in reversed(self._layers):
            if key_b in layer.writes:
                return layer.writes[key_b]
        return self._base.get(key_b)

    def set(self, key: bytes | bytearray | memoryview, value: bytes | bytearray | memoryview) -> None:
        """Stage a write in the top overlay. Empty value is a deletion."""
        key_b = _b(key, name="key")
        val_b = _b(value, name="value")
        self._layers[-1].writes[key_b] = val_b if val_b else None

    def delete(self, key: bytes | bytearray | memoryview) -> None:
        self._layers[-1].writes[_b(key, name="key")] = None

    def items(self, prefix: bytes = b"") -> Iterator[Tuple[bytes, bytes]]:
        """Iterate visible (key, value) pairs under `prefix`, ordered by key."""
        visible: Dict[bytes, bytes] = dict(self._base.items(prefix))
        for layer in self._layers:
            for k, v in layer.writes.items():
                if not k.startswith(prefix):
                    continue
                if v is None:
                    visible.pop(k, None)
                else:
                    visible[k] = v
        for k in sorted(visible):
            yield k, visible[k]

    # --------------------------------------------------------------------- #
    # Internal
    # --------------------------------------------------------------------- #

    def _apply_to_base(self, layer: _Overlay) -> None:
        for k, v in layer.writes.items():
            if v is None:
                self._base.delete(k)
            else:
                self._base.set(k, v)

    def pending_keys(self) -> Set[bytes]:
        """Keys with staged writes in any layer."""
        s: Set[bytes] = set()
        for layer in self._layers:
            s.update(layer.writes.keys())
        return s


__all__ = ["Journal"]
