"""
counter_pallet.runtime — the pallet and the host pieces that drive it.

Submodules:
- pallet:     CounterPallet state machine (set_counter_value / increment / decrement)
- event_sink: EventSink, EventRecord
- dispatcher: Call, dispatch()
- executor:   CounterRuntime (storage + journal + events + pallet)

Symbols are re-exported lazily to keep import cost low.
"""

from __future__ import annotations

from importlib import import_module as _imp
from typing import Any, Dict, Tuple

_exports: Dict[str, Tuple[str, str]] = {
    "CounterPallet": ("pallet", "CounterPallet"),
    "CALLS": ("pallet", "CALLS"),
    "EventSink": ("event_sink", "EventSink"),
    "EventRecord": ("event_sink", "EventRecord"),
    "Call": ("dispatcher", "Call"),
    "dispatch": ("dispatcher", "dispatch"),
    "CounterRuntime": ("executor", "CounterRuntime"),
}

__all__ = tuple(_exports.keys())


def __getattr__(name: str) -> Any:
    if name in _exports:
        submod, symbol = _exports[name]
        return getattr(_imp(f"{__name__}.{submod}"), symbol)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
