#!/usr/bin/env python3
"""
counter_pallet.cli.run_calls — replay a scenario of calls against a fresh in-memory state.

Scenario file (YAML or JSON), either a list of entries or a mapping:

    max_value: 100            # optional CounterMaxValue for this run
    calls:
      - {origin: root, call: set_counter_value, args: {new_value: 50}}
      - {origin: "0xaa..aa", call: increment, args: [30]}
      - {origin: {signed: "0xbb..bb"}, call: 2, args: {amount: 5}}

Usage:
    python -m counter_pallet.cli.run_calls scenario.yaml [--max-value N] [--json] [--quiet]

Exit codes: 0 when the scenario was replayed (individual calls may fail),
2 when the scenario or weights file is missing or malformed.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..config import load_config
from ..errors import PalletError
from ..logging import configure
from ..runtime.dispatcher import Call
from ..runtime.executor import CounterRuntime


def eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


def load_scenario(path: Path) -> Dict[str, Any]:
    """Parse a scenario file into {"max_value": Optional[int], "calls": [...]}."""
    txt = path.read_text(encoding="utf-8")
    data = json.loads(txt) if path.suffix.lower() == ".json" else yaml.safe_load(txt)
    if isinstance(data, list):
        data = {"calls": data}
    if not isinstance(data, dict) or not isinstance(data.get("calls"), list):
        raise ValueError(f"{path.name}: expected a list of calls or a mapping with 'calls'")
    for i, entry in enumerate(data["calls"]):
        if not isinstance(entry, dict):
            raise ValueError(f"{path.name}: calls[{i}] must be a mapping")
    return {"max_value": data.get("max_value"), "calls": data["calls"]}


def _parse_args(argv: List[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Replay counter pallet calls from a scenario file.")
    p.add_argument("scenario", type=Path, help="YAML/JSON scenario file")
    p.add_argument("--max-value", type=int, default=None, help="Override CounterMaxValue")
    p.add_argument("--weights", type=Path, default=None, help="Weights YAML/JSON")
    p.add_argument("--json", action="store_true", help="Print results and final state as JSON")
    p.add_argument("--quiet", action="store_true", help="Only print the final state")
    p.add_argument("--log-level", default="WARNING", help="Log level (default: WARNING)")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    ns = _parse_args(sys.argv[1:] if argv is None else argv)
    configure(json=False, level=ns.log_level, stream=sys.stderr)

    if not ns.scenario.exists():
        eprint(f"[run_calls] Scenario file not found: {ns.scenario}")
        return 2
    try:
        scenario = load_scenario(ns.scenario)
    except (ValueError, yaml.YAMLError) as ex:
        eprint(f"[run_calls] Bad scenario: {ex}")
        return 2

    overrides: Dict[str, Any] = {}
    max_value = ns.max_value if ns.max_value is not None else scenario["max_value"]
    if max_value is not None:
        overrides["counter_max_value"] = max_value
    if ns.weights is not None:
        overrides["weights_path"] = ns.weights
    try:
        cfg = load_config(overrides=overrides)
        rt = CounterRuntime.in_memory(config=cfg)
    except PalletError as ex:
        eprint(f"[run_calls] {ex}")
        return 2

    results = []
    for i, entry in enumerate(scenario["calls"]):
        try:
            call = Call.from_obj(entry)
        except PalletError as ex:
            eprint(f"[run_calls] calls[{i}]: {ex}")
            return 2
        res = rt.apply(entry.get("origin"), call)
        results.append(res)
        if not ns.quiet and not ns.json:
            if res.is_success:
                evs = ", ".join(f"{e.name}{e.to_dict()}" for e in res.events)
                print(f"#{i} {res.call}: ok weight={res.weight} {evs}")
            else:
                print(f"#{i} {res.call}: FAILED {res.error_code}")
    rt.finalize_block()

    if ns.json:
        out = {"results": [r.to_dict() for r in results], "state": rt.state()}
        print(json.dumps(out, indent=2, sort_keys=True))
    else:
        print(json.dumps(rt.state(), sort_keys=True))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
