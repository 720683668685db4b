"""counter_pallet.version — package version and a `git describe` helper for logs."""

from __future__ import annotations

import os
import subprocess
from functools import lru_cache

__version__ = "0.1.0"


@lru_cache(maxsize=1)
def git_describe() -> str:
    """
    Describe the working tree, in this order:
    COUNTER_PALLET_GIT_DESCRIBE, `git describe --tags --dirty --always`,
    then '<__version__>+local'.
    """
    override = os.getenv("COUNTER_PALLET_GIT_DESCRIBE")
    if override:
        return override.strip()
    try:
        out = subprocess.run(
            ["git", "describe", "--tags", "--dirty", "--always"],
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return f"{__version__}+local"
    return out.stdout.strip() or f"{__version__}+local"


__all__ = ["__version__", "git_describe"]
