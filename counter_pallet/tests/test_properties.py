"""
Property tests for the counter pallet.

- Root set within bounds is read back; above bounds fails and changes nothing
- increment within bounds adds exactly `amount` and one interaction
- decrement by more than the counter fails and changes nothing
- origin checks hold for every argument
- random call sequences keep CounterValue <= CounterMaxValue and the
  interaction ledger equal to the number of successful signed calls
"""
from __future__ import annotations

from collections import Counter as Tally

from hypothesis import given, settings
from hypothesis import strategies as st

from counter_pallet.config import load_config
from counter_pallet.errors import (CounterValueBelowZero,
                                   CounterValueExceedsMax, PalletError,
                                   Unauthorized)
from counter_pallet.runtime.pallet import CounterPallet
from counter_pallet.state.journal import Journal
from counter_pallet.state.storage import StorageView
from counter_pallet.types.origin import Origin
from counter_pallet.types.u32 import U32_MAX
from counter_pallet.weights.table import load_weight_table

U32 = st.integers(min_value=0, max_value=U32_MAX)
ACCOUNTS = st.sampled_from([b"\xaa" * 32, b"\xbb" * 32, b"\xcc" * 32])


def _pallet(max_value: int) -> CounterPallet:
    cfg = load_config(env={}, overrides={"counter_max_value": max_value})
    return CounterPallet(Journal(StorageView()), config=cfg, weights=load_weight_table())


def _expect_error(fn, *args):
    try:
        fn(*args)
    except PalletError as e:
        return e
    raise AssertionError("call unexpectedly succeeded")


@given(max_value=U32, value=U32)
def test_root_set_value(max_value, value):
    p = _pallet(max_value)
    if value <= max_value:
        p.set_counter_value(Origin.root(), value)
        assert p.counter_value() == value
    else:
        err = _expect_error(p.set_counter_value, Origin.root(), value)
        assert isinstance(err, CounterValueExceedsMax)
        assert p.counter_value() is None


@given(max_value=U32, data=st.data(), who=ACCOUNTS)
def test_increment_within_bounds(max_value, data, who):
    current = data.draw(st.integers(min_value=0, max_value=max_value))
    amount = data.draw(st.integers(min_value=0, max_value=max_value - current))
    p = _pallet(max_value)
    p.set_counter_value(Origin.root(), current)
    p.increment(Origin.signed(who), amount)
    assert p.counter_value() == current + amount
    assert p.user_interactions(who) == 1


@given(current=st.integers(min_value=0, max_value=U32_MAX - 1), data=st.data(), who=ACCOUNTS)
def test_decrement_below_zero_changes_nothing(current, data, who):
    amount = data.draw(st.integers(min_value=current + 1, max_value=U32_MAX))
    p = _pallet(U32_MAX)
    p.set_counter_value(Origin.root(), current)
    err = _expect_error(p.decrement, Origin.signed(who), amount)
    assert isinstance(err, CounterValueBelowZero)
    assert p.counter_value() == current
    assert p.user_interactions(who) is None


@given(value=U32, who=ACCOUNTS)
def test_origin_checks_hold_for_any_argument(value, who):
    p = _pallet(U32_MAX)
    for origin in (Origin.signed(who), Origin.none()):
        assert isinstance(_expect_error(p.set_counter_value, origin, value), Unauthorized)
    for origin in (Origin.root(), Origin.none()):
        assert isinstance(_expect_error(p.increment, origin, value), Unauthorized)
        assert isinstance(_expect_error(p.decrement, origin, value), Unauthorized)
    assert p.counter_value() is None
    assert len(p.events) == 0


CALL = st.tuples(
    st.sampled_from(["set_counter_value", "increment", "decrement"]),
    st.one_of(st.just("root"), ACCOUNTS),
    st.integers(min_value=0, max_value=150),
)


@settings(max_examples=200)
@given(calls=st.lists(CALL, max_size=40))
def test_random_sequences_keep_invariants(calls):
    p = _pallet(100)
    successes: Tally = Tally()
    for name, who, amount in calls:
        origin = Origin.root() if who == "root" else Origin.signed(who)
        before = (p.counter_value(), p.all_user_interactions(), len(p.events))
        try:
            getattr(p, name)(origin, amount)
        except PalletError:
            assert (p.counter_value(), p.all_user_interactions(), len(p.events)) == before
            continue
        if who != "root":
            successes[who] += 1
        assert len(p.events) == before[2] + 1
        assert 0 <= (p.counter_value() or 0) <= 100
    assert p.all_user_interactions() == dict(successes)
