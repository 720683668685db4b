"""
counter_pallet.runtime.executor — a minimal host around the counter pallet.

`CounterRuntime` wires the pieces a blockchain runtime would provide:

  StorageView (durable state) ← Journal (block overlay) ← CounterPallet
                                  EventSink (per block)

Calls are applied strictly one at a time. Successful calls stay in the journal
root layer until `finalize_block()` commits them to the durable view; a failed
call leaves nothing behind.

    rt = CounterRuntime.in_memory(config=load_config(overrides={"counter_max_value": 100}))
    rt.apply("root", Call("set_counter_value", {"new_value": 50}))
    rt.apply(ALICE, Call("increment", [30]))
    rt.finalize_block()
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..config import PalletConfig, get_config
from ..logging import bind, get_logger
from ..state.journal import Journal
from ..state.storage import StorageView
from ..types.result import DispatchResult
from ..weights.table import WeightInfo
from .dispatcher import Call, dispatch
from .event_sink import EventSink
from .pallet import CounterPallet

log = get_logger(__name__)


class CounterRuntime:
    def __init__(
        self,
        storage: StorageView,
        *,
        config: Optional[PalletConfig] = None,
        weights: Optional[WeightInfo] = None,
    ) -> None:
        self.config = config if config is not None else get_config()
        self.storage = storage
        self.journal = Journal(storage)
        self.events = EventSink()
        self.pallet = CounterPallet(self.journal, config=self.config, events=self.events, weights=weights)
        self.block_number = 0
        self._call_index = 0

    @classmethod
    def in_memory(cls, *, config: Optional[PalletConfig] = None, weights: Optional[WeightInfo] = None) -> "CounterRuntime":
        return cls(StorageView(), config=config, weights=weights)

    # ------------------------------------------------------------------ #

    def apply(self, origin: Any, call: Call) -> DispatchResult:
        """Dispatch one call in the current block."""
        result = dispatch(self.pallet, origin, call, call_index=self._call_index)
        self._call_index += 1
        return result

    def apply_all(self, entries: Iterable[Dict[str, Any]]) -> List[DispatchResult]:
        """Apply `{origin, call, args}` entries in order."""
        return [self.apply(e.get("origin"), Call.from_obj(e)) for e in entries]

    def finalize_block(self) -> int:
        """Commit the block's writes to durable storage and start a new block."""
        self.journal.commit()
        log.debug(
            "block finalized",
            extra={"block": self.block_number, "calls": self._call_index, "events": len(self.events)},
        )
        self.block_number += 1
        self._call_index = 0
        self.events.clear()
        bind(block=self.block_number)
        return self.block_number

    # ------------------------------------------------------------------ #

    def state(self) -> Dict[str, Any]:
        """JSON-friendly view of the pallet's storage (including uncommitted writes)."""
        return {
            "counter_value": self.pallet.counter_value(),
            "user_interactions": {
                "0x" + who.hex(): n for who, n in sorted(self.pallet.all_user_interactions().items())
            },
        }


__all__ = ["CounterRuntime"]
