"""
counter_pallet.types.origin — call origins and the checks the pallet applies.

An `Origin` is the authorization level attached to an incoming call:

  - ROOT   : privileged (sudo/governance); not attributed to an account
  - SIGNED : an ordinary account identified by `who` (raw account-id bytes)
  - NONE   : unsigned / unattributable

The pallet only pattern-matches on the kind via `ensure_root` and
`ensure_signed`. Turning a raw caller credential into an `Origin` is the host's
job; `resolve_origin` is the permissive resolver used by the dispatcher and CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from ..errors import Unauthorized

HexLike = Union[str, bytes, bytearray, memoryview]


class OriginKind(str, Enum):
    ROOT = "root"
    SIGNED = "signed"
    NONE = "none"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


def _hex_to_bytes(v: HexLike) -> bytes:
    if isinstance(v, (bytes, bytearray, memoryview)):
        out = bytes(v)
    elif isinstance(v, str):
        s = v.strip()
        if s.startswith(("0x", "0X")):
            s = s[2:]
        if len(s) % 2:
            s = "0" + s
        try:
            out = bytes.fromhex(s)
        except ValueError as e:
            raise Unauthorized(f"invalid account id: {v!r}") from e
    else:
        raise Unauthorized(f"account id must be bytes or hex, not {type(v).__name__}")
    if not out:
        raise Unauthorized("empty account id")
    return out


@dataclass(frozen=True)
class Origin:
    """
    Authorization level of a call.

    Use the constructors `Origin.root()`, `Origin.signed(who)` and
    `Origin.none()` rather than building instances by hand.
    """

    kind: OriginKind
    who: Optional[bytes] = None

    def __post_init__(self) -> None:
        if self.kind is OriginKind.SIGNED:
            if not isinstance(self.who, (bytes, bytearray)) or len(self.who) == 0:
                raise ValueError("signed origin requires a non-empty account id")
            object.__setattr__(self, "who", bytes(self.who))
        elif self.who is not None:
            raise ValueError(f"{self.kind.value} origin must not carry an account id")

    @classmethod
    def root(cls) -> "Origin":
        return cls(OriginKind.ROOT)

    @classmethod
    def signed(cls, who: HexLike) -> "Origin":
        return cls(OriginKind.SIGNED, _hex_to_bytes(who))

    @classmethod
    def none(cls) -> "Origin":
        return cls(OriginKind.NONE)

    @property
    def is_root(self) -> bool:
        return self.kind is OriginKind.ROOT

    @property
    def is_signed(self) -> bool:
        return self.kind is OriginKind.SIGNED

    def __str__(self) -> str:
        if self.who is not None:
            return f"signed(0x{self.who.hex()})"
        return self.kind.value


def ensure_root(origin: Origin) -> None:
    """Raise `Unauthorized` unless `origin` is ROOT."""
    if not isinstance(origin, Origin) or not origin.is_root:
        raise Unauthorized(required="root", got=_kind_of(origin))


def ensure_signed(origin: Origin) -> bytes:
    """Return the signer's account id, or raise `Unauthorized`."""
    if not isinstance(origin, Origin) or not origin.is_signed:
        raise Unauthorized(required="signed", got=_kind_of(origin))
    return origin.who  # type: ignore[return-value]


def _kind_of(origin: Any) -> str:
    if isinstance(origin, Origin):
        return origin.kind.value
    return type(origin).__name__


def resolve_origin(raw: Any) -> Origin:
    """
    Classify a raw caller credential.

    Accepted forms:
      - an `Origin`                    → returned as-is
      - None, "none", ""               → NONE
      - "root"                         → ROOT
      - bytes / hex string             → SIGNED(who)
      - {"root": true}                 → ROOT
      - {"signed": <hex or bytes>}     → SIGNED(who)
      - {"none": ...}                  → NONE

    Raises:
        Unauthorized for anything else, including an empty or non-hex account id.
    """
    if isinstance(raw, Origin):
        return raw
    if raw is None:
        return Origin.none()
    if isinstance(raw, (bytes, bytearray, memoryview)):
        if len(raw) == 0:
            return Origin.none()
        return Origin.signed(raw)
    if isinstance(raw, str):
        norm = raw.strip().lower()
        if norm in ("", "none", "unsigned"):
            return Origin.none()
        if norm == "root":
            return Origin.root()
        return Origin.signed(raw)
    if isinstance(raw, Mapping):
        if raw.get("root"):
            return Origin.root()
        if "signed" in raw:
            return Origin.signed(raw["signed"]) if raw["signed"] else Origin.none()
        if "none" in raw:
            return Origin.none()
    raise Unauthorized(f"cannot resolve origin from {type(raw).__name__}")


__all__ = [
    "OriginKind",
    "Origin",
    "ensure_root",
    "ensure_signed",
    "resolve_origin",
]
