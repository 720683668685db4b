"""
counter_pallet.runtime.event_sink — append-only event side channel.

The pallet deposits one event per successful call; external observers read
them. The pallet never reads events back.

Each stored `EventRecord` carries a sink-wide monotonically increasing `index`
and the `call_index` of the dispatch that produced it (the extrinsic index a
host would attach). `mark()`/`truncate()` let the call wrapper drop events of
a call that ends in an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..types.events import PalletEvent


@dataclass(frozen=True)
class EventRecord:
    index: int
    call_index: Optional[int]
    event: PalletEvent

    @property
    def name(self) -> str:
        return self.event.name


class EventSink:
    """
    Collects events in deposit order.

    Typical use:
        sink = EventSink()
        sink.deposit(CounterValueSet(counter_value=5))
        [r.event for r in sink.records]
    """

    __slots__ = ("_records", "_next_index", "_call_index")

    def __init__(self) -> None:
        self._records: List[EventRecord] = []
        self._next_index = 0
        self._call_index: Optional[int] = None

    # ------------------------ mutation ------------------------

    def set_call_index(self, call_index: Optional[int]) -> None:
        """Attribute subsequent deposits to `call_index`."""
        self._call_index = call_index

    def deposit(self, event: PalletEvent) -> EventRecord:
        if not isinstance(event, PalletEvent):
            raise TypeError(f"expected PalletEvent, got {type(event).__name__}")
        rec = EventRecord(index=self._next_index, call_index=self._call_index, event=event)
        self._records.append(rec)
        self._next_index += 1
        return rec

    def mark(self) -> int:
        """Current length; pass to `truncate()` to drop everything after it."""
        return len(self._records)

    def truncate(self, mark: int) -> None:
        if not 0 <= mark <= len(self._records):
            raise ValueError(f"invalid event mark {mark}")
        del self._records[mark:]
        self._next_index = self._records[-1].index + 1 if self._records else 0

    def clear(self) -> None:
        self._records.clear()
        self._next_index = 0

    # ------------------------ accessors ------------------------

    @property
    def records(self) -> List[EventRecord]:
        return list(self._records)

    @property
    def events(self) -> List[PalletEvent]:
        return [r.event for r in self._records]

    def since(self, mark: int) -> List[PalletEvent]:
        return [r.event for r in self._records[mark:]]

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["EventSink", "EventRecord"]
