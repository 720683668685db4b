"""
counter_pallet — bounded counter + per-account interaction ledger state machine.

The package models a single runtime module ("pallet") with two storage items,
three calls and the host pieces needed to run it standalone (journaled storage,
origins, event sink, weights, dispatcher). Heavy modules are imported from
their subpackages explicitly.
"""

from .version import __version__, git_describe

__all__ = ["__version__", "git_describe"]
