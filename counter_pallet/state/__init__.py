"""
counter_pallet.state — storage subsystem (key/value view, journal, typed items).

Common symbols are lazily re-exported from their submodules on first access.

Submodules:
- storage: flat bytes key/value view (host durable state)
- journal: journaling writes with nested checkpoints and `transaction()`
- items:   StorageValue / StorageMap typed accessors
"""

from __future__ import annotations

from importlib import import_module as _imp
from typing import Any, Dict, Tuple

_exports: Dict[str, Tuple[str, str]] = {
    "StorageView": ("storage", "StorageView"),
    "Journal": ("journal", "Journal"),
    "StorageValue": ("items", "StorageValue"),
    "StorageMap": ("items", "StorageMap"),
}

__all__ = tuple(_exports.keys())


def __getattr__(name: str) -> Any:
    if name in _exports:
        submod, symbol = _exports[name]
        mod = _imp(f"{__name__}.{submod}")
        return getattr(mod, symbol)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover
    return sorted(list(globals().keys()) + list(__all__))
