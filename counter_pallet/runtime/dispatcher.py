"""
counter_pallet.runtime.dispatcher — route a call to the pallet and report the outcome.

Steps for one call:

  1. resolve the call (by name, alias or call index)
  2. resolve the origin from the raw caller credential (before any storage read)
  3. decode the single u32 argument
  4. invoke the pallet; errors become a failed `DispatchResult`

Errors are never swallowed silently: they are returned in the result, logged at
INFO and counted in metrics. Only `PalletError`s are converted; anything else
is a bug and propagates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from .. import metrics
from ..errors import PalletError, UnknownCall
from ..logging import get_logger
from ..types.origin import resolve_origin
from ..types.result import DispatchResult
from ..types.status import DispatchStatus
from ..types.u32 import is_u32
from .pallet import CALL_INDEX, CALLS, CounterPallet

log = get_logger(__name__)

# Accepted argument names per call (first entry is canonical).
_ARG_NAMES: Dict[str, Tuple[str, ...]] = {
    "set_counter_value": ("new_value", "value"),
    "increment": ("amount", "amount_to_increment"),
    "decrement": ("amount", "amount_to_decrement"),
}

_ALIAS_CALL = {
    "set": "set_counter_value",
    "set_value": "set_counter_value",
    "inc": "increment",
    "dec": "decrement",
}


@dataclass(frozen=True)
class Call:
    """
    A call as submitted by the host.

    `function` is a call name ('increment'), an alias ('inc') or a call index
    (1). `args` is either a mapping of argument name → value or a one-element
    sequence.
    """

    function: Union[str, int]
    args: Union[Mapping[str, Any], Sequence[Any]] = field(default_factory=dict)

    @classmethod
    def from_obj(cls, obj: Mapping[str, Any]) -> "Call":
        fn = obj.get("call", obj.get("function"))
        if fn is None:
            raise UnknownCall("call entry has no 'call' field")
        args = obj.get("args", {})
        return cls(function=fn, args=args if args is not None else {})


def resolve_call(function: Union[str, int]) -> str:
    """Map a call name, alias or index to the canonical call name."""
    if isinstance(function, bool):
        raise UnknownCall(call=str(function))
    if isinstance(function, int):
        if function in CALLS:
            return CALLS[function]
        raise UnknownCall(f"unknown call index {function}", call=function)
    name = str(function).strip().lower()
    name = _ALIAS_CALL.get(name, name)
    if name not in CALL_INDEX:
        raise UnknownCall(f"unknown call {function!r}", call=str(function))
    return name


def decode_arg(call: str, args: Union[Mapping[str, Any], Sequence[Any]]) -> int:
    """Extract and validate the call's single u32 argument."""
    value: Any
    if isinstance(args, Mapping):
        names = [n for n in _ARG_NAMES[call] if n in args]
        if len(names) != 1 or len(args) != 1:
            raise UnknownCall(
                f"{call} expects exactly one argument named {_ARG_NAMES[call][0]!r}", call=call
            )
        value = args[names[0]]
    elif isinstance(args, (str, bytes)) or not isinstance(args, Sequence):
        raise UnknownCall(f"{call}: arguments must be a mapping or list", call=call)
    else:
        if len(args) != 1:
            raise UnknownCall(f"{call} expects exactly one argument", call=call)
        value = args[0]
    if not is_u32(value):
        raise UnknownCall(f"{call}: argument must be a u32 (got {value!r})", call=call)
    return value


def dispatch(
    pallet: CounterPallet,
    origin: Any,
    call: Call,
    *,
    call_index: Optional[int] = None,
) -> DispatchResult:
    """
    Apply one call to `pallet` and return its DispatchResult.

    `origin` is a raw credential accepted by `resolve_origin` (an `Origin`,
    "root", an account id, ...). `call_index` is the position of the call in
    the host's sequence and is attached to deposited events.
    """
    name = "unknown"
    weight = 0
    pallet.events.set_call_index(call_index)
    try:
        name = resolve_call(call.function)
        weight = pallet.weight_of(name)
        resolved = resolve_origin(origin)
        arg = decode_arg(name, call.args)

        mark = pallet.events.mark()
        getattr(pallet, name)(resolved, arg)
        events = pallet.events.since(mark)
    except PalletError as err:
        log.info(
            "call failed",
            extra={"call": name, "code": err.code, "call_index": call_index},
        )
        metrics.observe_call(name, error_code=err.code, weight=weight)
        return DispatchResult(
            status=DispatchStatus.FAILED, call=name, weight=weight, error=err.to_dict()
        )
    finally:
        pallet.events.set_call_index(None)

    log.debug(
        "call applied",
        extra={"call": name, "origin": str(resolved), "arg": arg, "call_index": call_index},
    )
    metrics.observe_call(name, weight=weight, counter_value=pallet.counter_value())
    return DispatchResult(status=DispatchStatus.SUCCESS, call=name, weight=weight, events=tuple(events))


__all__ = ["Call", "resolve_call", "decode_arg", "dispatch"]
