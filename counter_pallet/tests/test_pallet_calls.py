"""
Unit tests for the counter pallet calls against a fresh journal.

CounterMaxValue is 100 (see the `config` fixture).
"""

import pytest

from counter_pallet.errors import (CounterOverflow, CounterValueBelowZero,
                                   CounterValueExceedsMax, Unauthorized)
from counter_pallet.types.events import (CounterDecremented,
                                         CounterIncremented, CounterValueSet)
from counter_pallet.types.origin import Origin
from counter_pallet.types.u32 import U32_MAX

ALICE = b"\xaa" * 32
BOB = b"\xbb" * 32


# ===================================================
# set_counter_value
# ===================================================

def test_counter_absent_until_first_set(pallet):
    assert pallet.counter_value() is None
    assert pallet.user_interactions(ALICE) is None


def test_root_sets_value_and_emits_event(pallet, root):
    pallet.set_counter_value(root, 50)
    assert pallet.counter_value() == 50
    assert pallet.events.events == [CounterValueSet(counter_value=50)]


def test_set_value_at_max_is_allowed(pallet, root):
    pallet.set_counter_value(root, 100)
    assert pallet.counter_value() == 100


def test_set_value_above_max_fails_and_keeps_state(pallet, root):
    pallet.set_counter_value(root, 10)
    with pytest.raises(CounterValueExceedsMax) as ei:
        pallet.set_counter_value(root, 101)
    assert ei.value.data == {"value": 101, "max_value": 100}
    assert pallet.counter_value() == 10
    assert len(pallet.events) == 1


@pytest.mark.parametrize("origin", [Origin.signed(ALICE), Origin.none()])
def test_set_value_requires_root(pallet, origin):
    with pytest.raises(Unauthorized):
        pallet.set_counter_value(origin, 5)
    assert pallet.counter_value() is None
    assert len(pallet.events) == 0


def test_set_value_does_not_touch_user_interactions(pallet, root):
    pallet.set_counter_value(root, 5)
    assert pallet.all_user_interactions() == {}


# ===================================================
# increment
# ===================================================

def test_increment_from_absent_treats_counter_as_zero(pallet, alice):
    pallet.increment(alice, 7)
    assert pallet.counter_value() == 7
    assert pallet.user_interactions(ALICE) == 1
    assert pallet.events.events == [
        CounterIncremented(counter_value=7, who=ALICE, incremented_amount=7)
    ]


def test_increment_counts_each_interaction(pallet, alice, bob):
    pallet.increment(alice, 1)
    pallet.increment(alice, 2)
    pallet.increment(bob, 3)
    assert pallet.counter_value() == 6
    assert pallet.user_interactions(ALICE) == 2
    assert pallet.user_interactions(BOB) == 1


def test_increment_by_zero_still_counts_interaction(pallet, alice):
    pallet.increment(alice, 0)
    assert pallet.counter_value() == 0
    assert pallet.user_interactions(ALICE) == 1


def test_increment_past_max_fails(pallet, root, alice):
    pallet.set_counter_value(root, 90)
    with pytest.raises(CounterValueExceedsMax):
        pallet.increment(alice, 11)
    assert pallet.counter_value() == 90
    assert pallet.user_interactions(ALICE) is None


def test_increment_overflow_is_reported_before_max_check(journal, weights, alice):
    from counter_pallet.config import load_config
    from counter_pallet.runtime.pallet import CounterPallet

    p = CounterPallet(journal, config=load_config(env={}, overrides={"counter_max_value": U32_MAX}), weights=weights)
    p.set_counter_value(Origin.root(), U32_MAX - 1)
    with pytest.raises(CounterOverflow) as ei:
        p.increment(alice, 2)
    assert ei.value.data == {"current": U32_MAX - 1, "amount": 2}
    assert p.counter_value() == U32_MAX - 1


@pytest.mark.parametrize("origin", [Origin.root(), Origin.none()])
def test_increment_requires_signed(pallet, origin):
    with pytest.raises(Unauthorized):
        pallet.increment(origin, 1)
    assert pallet.counter_value() is None


def test_increment_rejects_non_u32_amount(pallet, alice):
    with pytest.raises(ValueError):
        pallet.increment(alice, -1)
    assert pallet.counter_value() is None


# ===================================================
# decrement
# ===================================================

def test_decrement_subtracts_and_counts(pallet, root, alice):
    pallet.set_counter_value(root, 10)
    pallet.decrement(alice, 4)
    assert pallet.counter_value() == 6
    assert pallet.user_interactions(ALICE) == 1
    assert pallet.events.events[-1] == CounterDecremented(
        counter_value=6, who=ALICE, decremented_amount=4
    )


def test_decrement_to_exactly_zero(pallet, root, alice):
    pallet.set_counter_value(root, 3)
    pallet.decrement(alice, 3)
    assert pallet.counter_value() == 0


def test_decrement_below_zero_fails(pallet, root, alice):
    pallet.set_counter_value(root, 3)
    with pytest.raises(CounterValueBelowZero) as ei:
        pallet.decrement(alice, 4)
    assert ei.value.data == {"current": 3, "amount": 4}
    assert pallet.counter_value() == 3
    assert pallet.user_interactions(ALICE) is None


def test_decrement_on_absent_counter(pallet, alice):
    with pytest.raises(CounterValueBelowZero):
        pallet.decrement(alice, 1)
    pallet.decrement(alice, 0)
    assert pallet.counter_value() == 0


def test_decrement_requires_signed(pallet, root):
    pallet.set_counter_value(root, 5)
    with pytest.raises(Unauthorized):
        pallet.decrement(root, 1)
    assert pallet.counter_value() == 5


# ===================================================
# Concrete scenario (CounterMaxValue = 100)
# ===================================================

def test_reference_scenario(pallet, root, alice, bob):
    pallet.set_counter_value(root, 50)
    assert pallet.counter_value() == 50

    pallet.increment(alice, 30)
    assert pallet.counter_value() == 80
    assert pallet.user_interactions(ALICE) == 1

    with pytest.raises(CounterValueExceedsMax):
        pallet.increment(bob, 25)
    assert pallet.counter_value() == 80
    assert pallet.user_interactions(BOB) is None

    with pytest.raises(CounterValueBelowZero):
        pallet.decrement(alice, 90)
    assert pallet.counter_value() == 80
    assert pallet.user_interactions(ALICE) == 1

    assert pallet.events.events == [
        CounterValueSet(counter_value=50),
        CounterIncremented(counter_value=80, who=ALICE, incremented_amount=30),
    ]


def test_weights_are_reported_per_call(pallet):
    assert pallet.weight_of("set_counter_value") == 9_000_000
    assert pallet.weight_of("increment") == 14_000_000
    assert pallet.weight_of("decrement") == 14_000_000
    with pytest.raises(KeyError):
        pallet.weight_of("reset")
