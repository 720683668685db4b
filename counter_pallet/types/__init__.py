"""
counter_pallet.types — value types shared by the pallet and its host harness.

Submodules:
- u32:     checked u32 arithmetic and the 4-byte codec
- origin:  Origin (ROOT / SIGNED / NONE) and ensure_* checks
- events:  event payload dataclasses
- status:  DispatchStatus
- result:  DispatchResult
"""

from .events import (CounterDecremented, CounterIncremented, CounterValueSet,
                     PalletEvent)
from .origin import Origin, OriginKind, ensure_root, ensure_signed, resolve_origin
from .result import DispatchResult
from .status import DispatchStatus
from .u32 import U32_MAX, checked_add, checked_sub

__all__ = [
    "U32_MAX",
    "checked_add",
    "checked_sub",
    "Origin",
    "OriginKind",
    "ensure_root",
    "ensure_signed",
    "resolve_origin",
    "PalletEvent",
    "CounterValueSet",
    "CounterIncremented",
    "CounterDecremented",
    "DispatchStatus",
    "DispatchResult",
]
