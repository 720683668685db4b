"""
counter_pallet.types.u32 — checked unsigned 32-bit arithmetic and encoding.

Python ints are unbounded, so the u32 range of the on-chain representation is
enforced explicitly. The checked helpers mirror the runtime's
`checked_add`/`checked_sub`: they return `None` instead of a wrapped value so
callers can map the failure to their own error.

Exports
-------
* Constants: `U32_MAX`
* Predicates: `is_u32(n)`, `require_u32(n, what=...)`
* Arithmetic: `checked_add(a, b)`, `checked_sub(a, b)`
* Codec: `encode_u32(n)`, `decode_u32(raw)` (4 bytes, little-endian)
"""

from __future__ import annotations

from typing import Optional

U32_MAX: int = (1 << 32) - 1
"""Maximum 32-bit unsigned integer."""

U32_BYTES = 4


def is_u32(n: object) -> bool:
    """Return True iff `n` is an int (not bool) with 0 <= n <= U32_MAX."""
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n <= U32_MAX


def require_u32(n: object, *, what: str = "value") -> int:
    """Validate that `n` is a u32 and return it."""
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"{what} must be int, got {type(n).__name__}")
    if not 0 <= n <= U32_MAX:
        raise ValueError(f"{what} must be in [0, {U32_MAX}] (got {n})")
    return n


def checked_add(a: int, b: int) -> Optional[int]:
    """a + b, or None if the sum leaves the u32 range."""
    require_u32(a, what="lhs")
    require_u32(b, what="rhs")
    s = a + b
    return s if s <= U32_MAX else None


def checked_sub(a: int, b: int) -> Optional[int]:
    """a - b, or None if the result would be negative."""
    require_u32(a, what="lhs")
    require_u32(b, what="rhs")
    return a - b if b <= a else None


def encode_u32(n: int) -> bytes:
    return require_u32(n).to_bytes(U32_BYTES, "little")


def decode_u32(raw: bytes) -> int:
    if len(raw) != U32_BYTES:
        raise ValueError(f"u32 must be exactly {U32_BYTES} bytes (got {len(raw)})")
    return int.from_bytes(raw, "little")


__all__ = [
    "U32_MAX",
    "is_u32",
    "require_u32",
    "checked_add",
    "checked_sub",
    "encode_u32",
    "decode_u32",
]
