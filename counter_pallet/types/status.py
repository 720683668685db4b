"""
counter_pallet.types.status — outcome of a dispatched call.

String forms:
  - str(DispatchStatus.SUCCESS) -> "success"   (logs/metrics labels)
  - DispatchStatus.SUCCESS.code  -> "SUCCESS"  (result payloads)
"""

from __future__ import annotations

from enum import Enum


class DispatchStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def code(self) -> str:
        return self.value.upper()

    @property
    def is_success(self) -> bool:
        return self is DispatchStatus.SUCCESS

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


__all__ = ["DispatchStatus"]
