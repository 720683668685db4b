"""
counter_pallet.config — deployment configuration for the counter pallet.

Knobs:
  • CounterMaxValue — the u32 upper bound of the counter, fixed per deployment
  • Weight table source (YAML/JSON of per-call weights)
  • Pallet name (storage prefix)

Environment variables (all optional):
  COUNTER_PALLET_MAX_VALUE   -> u32 upper bound (default: 1000)
  COUNTER_PALLET_WEIGHTS     -> path to weights YAML/JSON (default: auto-discover spec/weights.yaml)
  COUNTER_PALLET_NAME        -> storage prefix name (default: "CustomPallet")

Programmatic usage:
    from counter_pallet.config import get_config, load_config
    cfg = load_config(overrides={"counter_max_value": 100})
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from .errors import ConfigError
from .types.u32 import U32_MAX

DEFAULT_COUNTER_MAX_VALUE = 1000
DEFAULT_PALLET_NAME = "CustomPallet"


@dataclass(frozen=True)
class PalletConfig:
    counter_max_value: int = DEFAULT_COUNTER_MAX_VALUE
    weights_path: Optional[Path] = None
    pallet_name: str = DEFAULT_PALLET_NAME

    def __post_init__(self) -> None:
        v = self.counter_max_value
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= U32_MAX:
            raise ConfigError(
                f"counter_max_value must be a u32 (got {v!r})",
                field_name="counter_max_value",
            )
        if not self.pallet_name:
            raise ConfigError("pallet_name must not be empty", field_name="pallet_name")

    def to_dict(self) -> Dict[str, object]:
        d = asdict(self)
        d["weights_path"] = None if self.weights_path is None else str(self.weights_path)
        return d


def _int_value(raw: Union[str, int], *, field_name: str) -> int:
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    try:
        return int(str(raw).strip().replace("_", ""), 0)
    except ValueError as e:
        raise ConfigError(f"{field_name}: not an integer: {raw!r}", field_name=field_name) from e


def load_config(
    env: Optional[Mapping[str, str]] = None,
    *,
    overrides: Optional[Mapping[str, Union[str, int, Path, None]]] = None,
) -> PalletConfig:
    """
    Build a PalletConfig from environment and optional overrides.

    Overrides take precedence over the environment. Supported keys:
    'counter_max_value', 'weights_path', 'pallet_name'.
    """
    env = os.environ if env is None else env
    overrides = dict(overrides or {})

    max_raw = overrides.get(
        "counter_max_value", env.get("COUNTER_PALLET_MAX_VALUE", DEFAULT_COUNTER_MAX_VALUE)
    )
    weights_raw = overrides.get("weights_path", env.get("COUNTER_PALLET_WEIGHTS"))
    name = overrides.get("pallet_name", env.get("COUNTER_PALLET_NAME", DEFAULT_PALLET_NAME))

    return PalletConfig(
        counter_max_value=_int_value(max_raw, field_name="counter_max_value"),  # type: ignore[arg-type]
        weights_path=Path(str(weights_raw)).expanduser() if weights_raw else None,
        pallet_name=str(name).strip(),
    )


@lru_cache(maxsize=1)
def get_config() -> PalletConfig:
    """Cached process-wide config read from the environment."""
    return load_config()


def summary(cfg: Optional[PalletConfig] = None) -> str:
    """One-line summary of the deployment knobs."""
    cfg = cfg or get_config()
    return (
        "counter{"
        f"pallet={cfg.pallet_name}, max={cfg.counter_max_value}, "
        f"weights={cfg.weights_path or 'default'}"
        "}"
    )


__all__ = [
    "DEFAULT_COUNTER_MAX_VALUE",
    "DEFAULT_PALLET_NAME",
    "PalletConfig",
    "load_config",
    "get_config",
    "summary",
]
