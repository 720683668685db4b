"""
counter_pallet.errors — dispatch errors for the counter pallet.

The pallet communicates failures via *typed exceptions*. The dispatcher turns
them into failed `DispatchResult`s; the pallet itself never logs, retries or
suppresses them.

Hierarchy
---------
PalletError (base)
 ├─ Unauthorized             : origin does not match the call (alias: BadOrigin)
 ├─ CounterValueExceedsMax   : result would exceed CounterMaxValue
 ├─ CounterValueBelowZero    : decrement would go below zero
 ├─ CounterOverflow          : increment overflows u32
 ├─ UserInteractionOverflow  : per-account interaction count overflows u32
 ├─ UnknownCall              : call name/index/arguments not recognized
 └─ ConfigError              : invalid deployment configuration

Module errors (the four counter failures) carry a stable `index` matching the
declaration order of the runtime module, so hosts can report them compactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class PalletError(Exception):
    """
    Base pallet error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g., 'BAD_ORIGIN').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "pallet error"
    code: str = "PALLET_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    # Module error index; None for errors outside the pallet's error enum.
    index = None

    def __str__(self) -> str:
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for results/logs."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.index is not None:
            out["index"] = self.index
        if self.data is not None:
            out["data"] = self.data
        return out


class Unauthorized(PalletError):
    """
    The call's origin does not carry the required authorization level.

    `required` is 'root' or 'signed'; `got` is the origin kind that was seen.
    """
    def __init__(
        self,
        message: str = "bad origin",
        *,
        required: Optional[str] = None,
        got: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ):
        d: Dict[str, Any] = {"source": "BadOrigin"}
        if data:
            d.update(data)
        if required is not None:
            d.setdefault("required", required)
        if got is not None:
            d.setdefault("got", got)
        super().__init__(message=message, code="BAD_ORIGIN", data=d)


BadOrigin = Unauthorized


def _amounts(**fields: Any) -> Optional[Dict[str, Any]]:
    d = {k: v for k, v in fields.items() if v is not None}
    return d or None


class CounterValueExceedsMax(PalletError):
    """The resulting counter value would exceed CounterMaxValue."""
    index = 0

    def __init__(
        self,
        message: str = "counter value exceeds max",
        *,
        value: Optional[int] = None,
        max_value: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            code="COUNTER_VALUE_EXCEEDS_MAX",
            data=_amounts(value=value, max_value=max_value),
        )


class CounterValueBelowZero(PalletError):
    """A decrement would take the counter below zero."""
    index = 1

    def __init__(
        self,
        message: str = "counter value below zero",
        *,
        current: Optional[int] = None,
        amount: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            code="COUNTER_VALUE_BELOW_ZERO",
            data=_amounts(current=current, amount=amount),
        )


class CounterOverflow(PalletError):
    """An increment's addition would exceed the u32 range."""
    index = 2

    def __init__(
        self,
        message: str = "counter overflow",
        *,
        current: Optional[int] = None,
        amount: Optional[int] = None,
    ):
        super().__init__(
            message=message,
            code="COUNTER_OVERFLOW",
            data=_amounts(current=current, amount=amount),
        )


class UserInteractionOverflow(PalletError):
    """The per-account interaction counter would exceed the u32 range."""
    index = 3

    def __init__(self, message: str = "user interaction overflow", *, who: Optional[bytes] = None):
        super().__init__(
            message=message,
            code="USER_INTERACTION_OVERFLOW",
            data={"who": "0x" + who.hex()} if who is not None else None,
        )


class UnknownCall(PalletError):
    """The dispatcher could not resolve the call or decode its arguments."""
    def __init__(self, message: str = "unknown call", *, call: Any = None):
        super().__init__(
            message=message,
            code="UNKNOWN_CALL",
            data={"call": call} if call is not None else None,
        )


class ConfigError(PalletError):
    """Invalid deployment configuration (e.g., max value outside u32)."""
    def __init__(self, message: str = "invalid configuration", *, field_name: Optional[str] = None):
        super().__init__(
            message=message,
            code="CONFIG",
            data={"field": field_name} if field_name is not None else None,
        )


MODULE_ERRORS = (
    CounterValueExceedsMax,
    CounterValueBelowZero,
    CounterOverflow,
    UserInteractionOverflow,
)


# -------- helper utilities ---------------------------------------------------


def error_to_dispatch_fields(err: PalletError) -> Dict[str, Any]:
    """
    Map a PalletError to dispatch-result fields.

    Returns:
        {
          "status": "BAD_ORIGIN" | "MODULE" | "ERROR",
          "error":  {code, message, index?, data?}
        }
    """
    if isinstance(err, Unauthorized):
        status = "BAD_ORIGIN"
    elif isinstance(err, MODULE_ERRORS):
        status = "MODULE"
    else:
        status = "ERROR"
    return {"status": status, "error": err.to_dict()}


__all__ = [
    "PalletError",
    "Unauthorized",
    "BadOrigin",
    "CounterValueExceedsMax",
    "CounterValueBelowZero",
    "CounterOverflow",
    "UserInteractionOverflow",
    "UnknownCall",
    "ConfigError",
    "MODULE_ERRORS",
    "error_to_dispatch_fields",
]
