"""
counter_pallet.types.result — DispatchResult container.

`DispatchResult` is what the dispatcher hands back to the host for one call:

* status : DispatchStatus — SUCCESS / FAILED
* call   : str            — resolved call name
* weight : int            — cost reported by the weight table
* events : tuple[PalletEvent, ...] — deposited events (empty on failure)
* error  : Optional[dict] — `PalletError.to_dict()` on failure
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .events import PalletEvent
from .status import DispatchStatus


@dataclass(frozen=True)
class DispatchResult:
    status: DispatchStatus
    call: str
    weight: int
    events: Tuple[PalletEvent, ...] = field(default=())
    error: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.weight < 0:
            raise ValueError("weight must be >= 0")
        if not isinstance(self.events, tuple):
            object.__setattr__(self, "events", tuple(self.events))
        if self.status.is_success and self.error is not None:
            raise ValueError("successful dispatch cannot carry an error")
        if not self.status.is_success and self.events:
            raise ValueError("failed dispatch cannot carry events")

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def error_code(self) -> Optional[str]:
        return None if self.error is None else self.error.get("code")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "status": self.status.code,
            "call": self.call,
            "weight": self.weight,
            "events": [ev.to_dict() for ev in self.events],
        }
        if self.error is not None:
            out["error"] = self.error
        return out


__all__ = ["DispatchResult"]
