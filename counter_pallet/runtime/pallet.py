"""
counter_pallet.runtime.pallet — the counter state machine.

Storage
-------
* CounterValue      : StorageValue<u32>, absent until first set (reads as 0)
* UserInteractions  : StorageMap<AccountId, u32>, created lazily per account

Calls (index → name)
--------------------
0. set_counter_value(origin, new_value)   Root only
1. increment(origin, amount)              any signed account
2. decrement(origin, amount)              any signed account

Every call is all-or-nothing: it runs inside a journal checkpoint and an event
mark, so an error raised after the first write (e.g. UserInteractionOverflow
once CounterValue has been put) leaves no storage change and no event behind.

Invariants kept after every call:
    CounterValue <= CounterMaxValue
    a successful increment/decrement by A raises UserInteractions[A] by one
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Dict, Optional, TypeVar

from ..config import PalletConfig, get_config
from ..errors import (CounterOverflow, CounterValueBelowZero,
                      CounterValueExceedsMax, UserInteractionOverflow)
from ..state.items import StorageMap, StorageValue
from ..state.journal import Journal
from ..types.events import (CounterDecremented, CounterIncremented,
                            CounterValueSet)
from ..types.origin import Origin, ensure_root, ensure_signed
from ..types.u32 import checked_add, checked_sub, require_u32
from ..weights.table import WeightInfo, load_weight_table
from .event_sink import EventSink

F = TypeVar("F", bound=Callable[..., Any])

CALLS: Dict[int, str] = {
    0: "set_counter_value",
    1: "increment",
    2: "decrement",
}
CALL_INDEX: Dict[str, int] = {name: idx for idx, name in CALLS.items()}


def transactional(fn: F) -> F:
    """Discard the call's storage writes and events if it raises."""

    @functools.wraps(fn)
    def wrapper(self: "CounterPallet", *args: Any, **kwargs: Any) -> Any:
        mark = self.events.mark()
        try:
            with self.journal.transaction():
                return fn(self, *args, **kwargs)
        except BaseException:
            self.events.truncate(mark)
            raise

    return wrapper  # type: ignore[return-value]


class CounterPallet:
    """
    Bounded counter plus per-account interaction ledger.

    Parameters
    ----------
    journal :
        Host storage (transactional overlay). The pallet keeps no copy of its
        state between calls; every read goes through the journal.
    config :
        Deployment config; `counter_max_value` is CounterMaxValue.
    events :
        Event sink; a private one is created if omitted.
    weights :
        WeightInfo implementation; defaults to the configured weight table.
    """

    def __init__(
        self,
        journal: Journal,
        *,
        config: Optional[PalletConfig] = None,
        events: Optional[EventSink] = None,
        weights: Optional[WeightInfo] = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.journal = journal
        self.events = events if events is not None else EventSink()
        self.weights = weights if weights is not None else load_weight_table(self.config.weights_path)
        self._counter = StorageValue(journal, self.config.pallet_name, "CounterValue")
        self._interactions = StorageMap(journal, self.config.pallet_name, "UserInteractions")

    # ------------------------------------------------------------------ #
    # Read accessors
    # ------------------------------------------------------------------ #

    @property
    def max_value(self) -> int:
        return self.config.counter_max_value

    def counter_value(self) -> Optional[int]:
        return self._counter.get()

    def user_interactions(self, who: bytes) -> Optional[int]:
        return self._interactions.get(who)

    def all_user_interactions(self) -> Dict[bytes, int]:
        return dict(self._interactions.iter())

    def weight_of(self, call: str) -> int:
        if call not in CALL_INDEX:
            raise KeyError(f"unknown call: {call!r}")
        return int(getattr(self.weights, call)())

    # ------------------------------------------------------------------ #
    # Calls
    # ------------------------------------------------------------------ #

    @transactional
    def set_counter_value(self, origin: Origin, new_value: int) -> None:
        """Set the counter. Root only; not attributed to any account."""
        ensure_root(origin)
        require_u32(new_value, what="new_value")

        if new_value > self.max_value:
            raise CounterValueExceedsMax(value=new_value, max_value=self.max_value)

        self._counter.put(new_value)
        self.events.deposit(CounterValueSet(counter_value=new_value))

    @transactional
    def increment(self, origin: Origin, amount: int) -> None:
        """Add `amount` to the counter on behalf of a signed account."""
        who = ensure_signed(origin)
        require_u32(amount, what="amount")

        current = self._counter.get() or 0
        new_value = checked_add(current, amount)
        if new_value is None:
            raise CounterOverflow(current=current, amount=amount)
        if new_value > self.max_value:
            raise CounterValueExceedsMax(value=new_value, max_value=self.max_value)

        self._counter.put(new_value)
        self._note_interaction(who)

        self.events.deposit(
            CounterIncremented(counter_value=new_value, who=who, incremented_amount=amount)
        )

    @transactional
    def decrement(self, origin: Origin, amount: int) -> None:
        """Subtract `amount` from the counter on behalf of a signed account."""
        who = ensure_signed(origin)
        require_u32(amount, what="amount")

        current = self._counter.get() or 0
        new_value = checked_sub(current, amount)
        if new_value is None:
            raise CounterValueBelowZero(current=current, amount=amount)

        self._counter.put(new_value)
        self._note_interaction(who)

        self.events.deposit(
            CounterDecremented(counter_value=new_value, who=who, decremented_amount=amount)
        )

    # ------------------------------------------------------------------ #

    def _note_interaction(self, who: bytes) -> None:
        def bump(interactions: Optional[int]) -> int:
            new = checked_add(interactions or 0, 1)
            if new is None:
                raise UserInteractionOverflow(who=who)
            return new

        self._interactions.try_mutate(who, bump)


__all__ = ["CounterPallet", "CALLS", "CALL_INDEX", "transactional"]
