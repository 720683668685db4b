"""counter_pallet.cli — developer command-line tools."""
