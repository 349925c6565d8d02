#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List, Optional

import sys
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
sys.path.append(str(Path(__file__).resolve().parents[1]))

from workshop.core.simulation import simulate
from workshop.io.report import format_all
from eval.metrics import last_match_rate, sequence_match_rate, token_accuracy


def load_golden(path: Path) -> Optional[List[Dict]]:
    if not path.exists():
        return None
    rows: List[Dict] = []
    with path.open("r", encoding="utf-8") as f:
        for ln in f:
            ln = ln.strip()
            if not ln:
                continue
            try:
                rows.append(json.loads(ln))
            except json.JSONDecodeError:
                continue
    return rows or None


def run_scenario(tiers: List[int], items: List[int]) -> List[str]:
    return format_all(simulate(tiers, items))


def main() -> None:
    ap = argparse.ArgumentParser(description="Replay golden workshop scenarios.")
    ap.add_argument("--golden", default="eval/golden.jsonl", help="Path to golden dataset")
    ap.add_argument("--ci", action="store_true", help="CI mode: concise output")
    ap.add_argument("--gate", default="sequence>=1.0", help="Gate condition for CI")
    args = ap.parse_args()

    golden = load_golden(Path(args.golden))
    if not golden:
        print("NO_GOLDEN=1")
        print("SKIP_REASON=missing golden dataset")
        sys.exit(0)

    truths: List[List[str]] = []
    preds: List[List[str]] = []
    for row in golden:
        expected = [str(t) for t in row.get("expected") or []]
        items = [int(x) for x in row.get("items") or []]
        if not expected or not items:
            continue
        got = run_scenario([int(c) for c in row.get("tiers") or []], items)
        truths.append(expected)
        preds.append(got)
        if not args.ci and got != expected:
            print(f"MISMATCH id={row.get('id', '?')} expected={expected} got={got}")

    seq = sequence_match_rate(truths, preds)
    last = last_match_rate(truths, preds)
    tok = token_accuracy(truths, preds)
    print(f"SCENARIOS={len(truths)} sequence={seq:.3f} last={last:.3f} token={tok:.3f}")

    # Simple CI gate: "<metric>>=<threshold>"
    scores = {"sequence": seq, "last": last, "token": tok}
    ok = True
    gate = str(args.gate or "").lower().strip()
    if ">=" in gate:
        name, _, cond = gate.partition(">=")
        try:
            ok = scores[name.strip()] >= float(cond)
        except (KeyError, ValueError):
            print(f"UNKNOWN_GATE={gate}")
            ok = False
    print(f"GOLDEN_OK={'true' if ok else 'false'}")
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
