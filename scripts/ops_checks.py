#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List


def tail_runs(traces_dir: str, n: int = 50, prefix: str = "metrics") -> List[dict]:
    """Last `n` run records from the newest trace file (files are named by day)."""
    p = Path(traces_dir)
    if not p.exists():
        return []
    files = sorted(x for x in p.glob(f"{prefix}-*.jsonl") if x.is_file())
    if not files:
        return []
    latest = files[-1]
    lines = latest.read_text(encoding="utf-8").strip().splitlines()[-n:]
    out = []
    for ln in lines:
        try:
            row = json.loads(ln)
        except json.JSONDecodeError:
            continue
        if isinstance(row, dict) and row.get("type") == "metrics":
            out.append(row)
    return out


def main() -> None:
    ap = argparse.ArgumentParser(description="Basic ops checks for workshop run traces.")
    ap.add_argument("--traces", default="./traces", help="Traces directory")
    ap.add_argument("--tail", type=int, default=50, help="Tail last N entries")
    args = ap.parse_args()
    rows = tail_runs(args.traces, n=args.tail)
    latencies = []
    items = known = spills = errors = 0
    for r in rows:
        data = r.get("data") or {}
        try:
            latencies.append(float(data["total_latency_ms"]))
            items += int(data.get("items", 0))
            known += int(data.get("items", 0)) - int(data.get("new", 0))
            spills += int(data.get("overflow_spills", 0))
        except (KeyError, TypeError, ValueError):
            continue
        if data.get("error"):
            errors += 1
    if not latencies:
        print("No metrics entries found.")
        return
    latencies_sorted = sorted(latencies)
    p50 = latencies_sorted[int(0.50 * (len(latencies_sorted) - 1))]
    p95 = latencies_sorted[int(0.95 * (len(latencies_sorted) - 1))]
    print(f"runs={len(latencies_sorted)} p50_ms={p50:.1f} p95_ms={p95:.1f} errors={errors}")
    print(f"items={items} hit_ratio={known / max(1, items):.3f} overflow_spills={spills}")


if __name__ == "__main__":
    main()
