"""
counter_pallet.metrics — Prometheus counters & histograms for dispatched calls.

Exposed metrics (prefixed with `counter_pallet_`):
  - calls_total{call,result}   : Counter   — dispatched calls by outcome
  - call_weight{call}          : Histogram — weight reported per successful call
  - counter_value              : Gauge     — last committed counter value

Labels:
  - call   ∈ {set_counter_value, increment, decrement, unknown}
  - result ∈ {success, bad_origin, exceeds_max, below_zero, overflow,
              user_interaction_overflow, error}

Consumers call `get_registry()` / `generate_latest_text()` to expose the
registry over HTTP; tests inject a fresh `CollectorRegistry` via
`set_registry()`.
"""

from __future__ import annotations

from typing import Optional

from prometheus_client import (CONTENT_TYPE_LATEST, CollectorRegistry, Counter,
                               Gauge, Histogram, generate_latest)

_PREFIX = "counter_pallet_"

_WEIGHT_BUCKETS = (
    1_000_000, 5_000_000, 10_000_000, 15_000_000, 25_000_000, 50_000_000, 100_000_000,
)

_RESULT_BY_CODE = {
    "BAD_ORIGIN": "bad_origin",
    "COUNTER_VALUE_EXCEEDS_MAX": "exceeds_max",
    "COUNTER_VALUE_BELOW_ZERO": "below_zero",
    "COUNTER_OVERFLOW": "overflow",
    "USER_INTERACTION_OVERFLOW": "user_interaction_overflow",
}

_registry: Optional[CollectorRegistry] = None
CALLS_TOTAL: Counter
CALL_WEIGHT: Histogram
COUNTER_VALUE: Gauge


def _build_metrics() -> None:
    global CALLS_TOTAL, CALL_WEIGHT, COUNTER_VALUE
    CALLS_TOTAL = Counter(
        _PREFIX + "calls_total",
        "Dispatched counter pallet calls by outcome",
        labelnames=("call", "result"),
        registry=_registry,
    )
    CALL_WEIGHT = Histogram(
        _PREFIX + "call_weight",
        "Weight reported per successful call",
        labelnames=("call",),
        buckets=_WEIGHT_BUCKETS,
        registry=_registry,
    )
    COUNTER_VALUE = Gauge(
        _PREFIX + "counter_value",
        "Counter value after the last successful call",
        registry=_registry,
    )


def set_registry(registry: CollectorRegistry) -> None:
    """Rebuild all metrics on `registry` (an app-global one, or a fresh one in tests)."""
    global _registry
    _registry = registry
    _build_metrics()


def get_registry() -> CollectorRegistry:
    if _registry is None:
        registry = CollectorRegistry()
        set_registry(registry)
        return registry
    return _registry


def result_label(error_code: Optional[str]) -> str:
    if error_code is None:
        return "success"
    return _RESULT_BY_CODE.get(error_code, "error")


def observe_call(
    call: str,
    *,
    error_code: Optional[str] = None,
    weight: int = 0,
    counter_value: Optional[int] = None,
) -> None:
    """Record one dispatched call."""
    get_registry()
    CALLS_TOTAL.labels(call=call, result=result_label(error_code)).inc()
    if error_code is None:
        CALL_WEIGHT.labels(call=call).observe(weight)
        if counter_value is not None:
            COUNTER_VALUE.set(counter_value)


def generate_latest_text() -> bytes:
    """Prometheus text exposition of the current registry."""
    return generate_latest(get_registry())


__all__ = [
    "CONTENT_TYPE_LATEST",
    "set_registry",
    "get_registry",
    "result_label",
    "observe_call",
    "generate_latest_text",
]
