from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict


def trace_file(traces_dir: Path, prefix: str = "metrics") -> Path:
    return traces_dir / f"{prefix}-{time.strftime('%Y%m%d')}.jsonl"


def write_trace_line(traces_dir: Path, payload: Dict[str, Any], *, prefix: str = "metrics") -> Path:
    """
    Append one JSON line to today's trace file and return its path.
    """
    traces_dir.mkdir(parents=True, exist_ok=True)
    fname = trace_file(traces_dir, prefix)
    with fname.open("a", encoding="utf-8") as f:
        f.write(json.dumps(payload, ensure_ascii=False, sort_keys=True) + "\n")
    return fname
