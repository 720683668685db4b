"""
All-or-nothing behavior of calls.

increment/decrement write CounterValue before bumping UserInteractions. When
the second write fails the first one must not survive, and no event may be
left in the sink.
"""

import pytest

from counter_pallet.errors import UserInteractionOverflow
from counter_pallet.state.items import StorageMap
from counter_pallet.types.u32 import U32_MAX

ALICE = b"\xaa" * 32


def _saturate_interactions(pallet, who):
    StorageMap(pallet.journal, pallet.config.pallet_name, "UserInteractions").insert(who, U32_MAX)


@pytest.mark.parametrize("call", ["increment", "decrement"])
def test_interaction_overflow_rolls_back_counter_write(pallet, root, alice, call):
    pallet.set_counter_value(root, 40)
    _saturate_interactions(pallet, ALICE)
    events_before = pallet.events.events

    with pytest.raises(UserInteractionOverflow) as ei:
        getattr(pallet, call)(alice, 5)

    assert ei.value.data == {"who": "0x" + ALICE.hex()}
    assert pallet.counter_value() == 40
    assert pallet.user_interactions(ALICE) == U32_MAX
    assert pallet.events.events == events_before
    assert pallet.journal.depth() == 1


def test_failed_call_leaves_no_pending_writes(pallet, root, alice):
    pallet.set_counter_value(root, 10)
    _saturate_interactions(pallet, ALICE)
    pallet.journal.commit()
    snapshot = pallet.journal.base.export_hex()

    with pytest.raises(UserInteractionOverflow):
        pallet.increment(alice, 1)
    assert pallet.journal.pending_keys() == set()
    pallet.journal.commit()
    assert pallet.journal.base.export_hex() == snapshot


def test_repeating_a_failed_call_is_idempotent(pallet, root, alice):
    pallet.set_counter_value(root, 3)
    errors = []
    for _ in range(3):
        with pytest.raises(Exception) as ei:
            pallet.decrement(alice, 4)
        errors.append(ei.value.to_dict())
        assert pallet.counter_value() == 3
        assert pallet.user_interactions(ALICE) is None
    assert errors[0] == errors[1] == errors[2]


def test_event_indices_stay_contiguous_after_rollback(pallet, root, alice):
    pallet.set_counter_value(root, 1)
    with pytest.raises(Exception):
        pallet.decrement(alice, 2)
    pallet.increment(alice, 1)
    assert [r.index for r in pallet.events.records] == [0, 1]
