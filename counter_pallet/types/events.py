"""
counter_pallet.types.events — events deposited by the counter pallet.

One event per successful call:

  * CounterValueSet     {counter_value}
  * CounterIncremented  {counter_value, who, incremented_amount}
  * CounterDecremented  {counter_value, who, decremented_amount}

Events are frozen dataclasses. `to_dict()` renders account ids as 0x-hex so the
payload is JSON-friendly; `event_from_dict()` reverses it.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Mapping, Type, Union

HexLike = Union[str, bytes, bytearray, memoryview]


def _hex_to_bytes(v: HexLike) -> bytes:
    if isinstance(v, (bytes, bytearray, memoryview)):
        return bytes(v)
    if isinstance(v, str):
        s = v.strip()
        if s.startswith(("0x", "0X")):
            s = s[2:]
        try:
            return bytes.fromhex(s)
        except ValueError as e:
            raise ValueError(f"invalid hex string: {v!r}") from e
    raise TypeError(f"expected hex-like value, got {type(v).__name__}")


@dataclass(frozen=True)
class PalletEvent:
    """Base class; subclasses declare their payload fields."""

    name: ClassVar[str] = "PalletEvent"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"event": self.name}
        for f in fields(self):
            v = getattr(self, f.name)
            out[f.name] = "0x" + v.hex() if isinstance(v, bytes) else v
        return out


@dataclass(frozen=True)
class CounterValueSet(PalletEvent):
    """The counter value was set by Root."""

    name: ClassVar[str] = "CounterValueSet"
    counter_value: int


@dataclass(frozen=True)
class CounterIncremented(PalletEvent):
    """An account incremented the counter."""

    name: ClassVar[str] = "CounterIncremented"
    counter_value: int
    who: bytes
    incremented_amount: int


@dataclass(frozen=True)
class CounterDecremented(PalletEvent):
    """An account decremented the counter."""

    name: ClassVar[str] = "CounterDecremented"
    counter_value: int
    who: bytes
    decremented_amount: int


EVENT_TYPES: Dict[str, Type[PalletEvent]] = {
    cls.name: cls for cls in (CounterValueSet, CounterIncremented, CounterDecremented)
}


def event_from_dict(d: Mapping[str, Any]) -> PalletEvent:
    """Parse the output of `PalletEvent.to_dict()` back into an event."""
    try:
        cls = EVENT_TYPES[d["event"]]
    except KeyError as e:
        raise ValueError(f"unknown event: {d.get('event')!r}") from e
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in d:
            raise ValueError(f"{cls.name}: missing field {f.name!r}")
        v = d[f.name]
        kwargs[f.name] = _hex_to_bytes(v) if f.name == "who" else int(v)
    return cls(**kwargs)


__all__ = [
    "PalletEvent",
    "CounterValueSet",
    "CounterIncremented",
    "CounterDecremented",
    "EVENT_TYPES",
    "event_from_dict",
]
