"""counter_pallet.weights — per-call weight (cost) accounting."""

from .table import WeightInfo, WeightTable, load_weight_table

__all__ = ["WeightInfo", "WeightTable", "load_weight_table"]
