"""
counter_pallet.weights.table — load/resolve call weights from spec/weights.yaml.

Overview
--------
Each call reports a fixed weight the host uses for scheduling and fees. Weights
are defined in `spec/weights.yaml` (if present), merged over in-code defaults,
validated, and exposed as an immutable `WeightTable` implementing `WeightInfo`.
Weights never change the behavior of the state machine.

Schema (YAML)
-------------
meta:
  version: "v1"
  notes: "optional text"
calls:
  set_counter_value: 9000000
  increment: 14000000
  decrement: 14000000

A JSON file with the same structure is accepted as well (by extension).

Usage
-----
    from counter_pallet.weights.table import load_weight_table
    weights = load_weight_table()          # auto-discover spec/weights.yaml
    weights.increment()
    weights.cost("decrement")
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

import yaml

from ..errors import ConfigError

U64_MAX: int = (1 << 64) - 1

# ------------------------------ defaults -------------------------------------

_DEFAULT_META: Dict[str, Any] = {"version": "v1", "notes": "built-in defaults"}
_DEFAULT_CALLS: Dict[str, int] = {
    # One storage write, one event.
    "set_counter_value": 9_000_000,
    # One read + write of CounterValue, one read + write of UserInteractions, one event.
    "increment": 14_000_000,
    "decrement": 14_000_000,
}


# ------------------------------ interface ------------------------------------


@runtime_checkable
class WeightInfo(Protocol):
    def set_counter_value(self) -> int:
        """Weight of `set_counter_value`."""

    def increment(self) -> int:
        """Weight of `increment`."""

    def decrement(self) -> int:
        """Weight of `decrement`."""


# ------------------------------ datatypes ------------------------------------


@dataclass(frozen=True)
class WeightTable:
    """Immutable per-call weight table."""
    meta: Tuple[Tuple[str, Any], ...]
    calls: Tuple[Tuple[str, int], ...]

    # ---------- lookup ----------

    def cost(self, call: str) -> int:
        """Return the weight of `call` (case-sensitive)."""
        d = dict(self.calls)
        try:
            return d[call]
        except KeyError as e:
            raise KeyError(f"unknown call: {call!r}") from e

    def set_counter_value(self) -> int:
        return self.cost("set_counter_value")

    def increment(self) -> int:
        return self.cost("increment")

    def decrement(self) -> int:
        return self.cost("decrement")

    # ---------- conversions ----------

    def to_dict(self) -> Dict[str, Any]:
        return {"meta": dict(self.meta), "calls": dict(self.calls)}

    # ---------- construction ----------

    @staticmethod
    def _validate_weights(table: Mapping[str, Any]) -> Dict[str, int]:
        out: Dict[str, int] = {}
        for k, v in table.items():
            if not isinstance(k, str):
                raise TypeError(f"calls: key must be str (got {type(k).__name__})")
            if isinstance(v, bool) or not isinstance(v, int):
                raise TypeError(f"calls.{k}: weight must be int")
            if v < 0:
                raise ValueError(f"calls.{k}: weight must be non-negative")
            if v > U64_MAX:
                raise OverflowError(f"calls.{k}: weight must fit into u64")
            out[k] = int(v)
        return dict(sorted(out.items()))

    @classmethod
    def build(cls, *, meta: Mapping[str, Any], calls: Mapping[str, Any]) -> "WeightTable":
        meta_c = dict(sorted((str(k), meta[k]) for k in meta.keys()))
        return WeightTable(
            meta=tuple(meta_c.items()),
            calls=tuple(cls._validate_weights(calls).items()),
        )


# ------------------------------ helpers --------------------------------------


def _merge_dicts(*dicts: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge mappings with last-wins precedence. Keys are converted to str."""
    out: Dict[str, Any] = {}
    for d in dicts:
        for k, v in d.items():
            out[str(k)] = v
    return out


def _load_yaml_or_json(path: Path) -> Dict[str, Any]:
    txt = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        loaded = json.loads(txt)
    else:
        loaded = yaml.safe_load(txt)
    if not isinstance(loaded, dict):
        raise ValueError(f"{path.name}: root must be a mapping")
    return loaded


def _discover_default_path(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from `start` (or this file) looking for 'spec/weights.yaml'."""
    here = start or Path(__file__).resolve()
    for p in [here] + list(here.parents):
        candidate = p / "spec" / "weights.yaml"
        if candidate.is_file():
            return candidate
    return None


# ------------------------------ public API -----------------------------------


@lru_cache(maxsize=8)
def _load_cached(path: Optional[Path]) -> WeightTable:
    meta = dict(_DEFAULT_META)
    calls = dict(_DEFAULT_CALLS)
    if path is not None:
        data = _load_yaml_or_json(path)
        meta = _merge_dicts(meta, dict(data.get("meta") or {}))
        calls = _merge_dicts(calls, dict(data.get("calls") or {}))
    return WeightTable.build(meta=meta, calls=calls)


def load_weight_table(
    path: Optional[str | Path] = None,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
) -> WeightTable:
    """
    Load and validate a `WeightTable`.

    Parameters
    ----------
    path:
        YAML/JSON file with `meta` and `calls`. If None, `spec/weights.yaml` is
        auto-discovered; if not found, the in-code defaults are used.
    overrides:
        Optional `{"calls": {...}, "meta": {...}}` applied last.

    Raises:
        ConfigError if an explicit `path` is not a file.
    """
    if path is not None:
        resolved: Optional[Path] = Path(path).expanduser()
        if not resolved.is_file():
            raise ConfigError(f"weights file not found: {resolved}", field_name="weights_path")
    else:
        resolved = _discover_default_path()
    table = _load_cached(resolved)
    if not overrides:
        return table
    return WeightTable.build(
        meta=_merge_dicts(dict(table.meta), dict(overrides.get("meta") or {})),
        calls=_merge_dicts(dict(table.calls), dict(overrides.get("calls") or {})),
    )


__all__ = ["WeightInfo", "WeightTable", "load_weight_table", "U64_MAX"]
