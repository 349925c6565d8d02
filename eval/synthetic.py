#!/usr/bin/env python3
from __future__ import annotations

import json
from pathlib import Path


def main() -> None:
    """
    Write the hand-traced golden scenarios if no golden file exists.
    """
    out = Path("eval/golden.jsonl")
    out.parent.mkdir(parents=True, exist_ok=True)
    if out.exists():
        print("golden exists, not overwriting:", out)
        return
    rows = [
        {"id": "single-tier", "tiers": [1], "items": [10, 20, 10, 30], "expected": ["NEW", "NEW", "OUTSIDE", "NEW"]},
        {"id": "two-tiers", "tiers": [1, 1], "items": [1, 2, 3, 1], "expected": ["NEW", "NEW", "NEW", "OUTSIDE"]},
        {"id": "no-tiers", "tiers": [], "items": [5, 5], "expected": ["NEW", "OUTSIDE"]},
        {"id": "repeat", "tiers": [2], "items": [7, 7], "expected": ["NEW", "1"]},
        {"id": "second-tier", "tiers": [1, 2], "items": [1, 2, 3, 1], "expected": ["NEW", "NEW", "NEW", "2"]},
    ]
    with out.open("w", encoding="utf-8") as f:
        for r in rows:
            f.write(json.dumps(r, ensure_ascii=False) + "\n")
    print("wrote synthetic golden:", out)


if __name__ == "__main__":
    main()
