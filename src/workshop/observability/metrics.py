from __future__ import annotations

import time
from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, Optional

from workshop.core.provenance import Provenance
from .writer import write_trace_line


@dataclass
class RunMetric:
    label: str
    items: int = 0
    new: int = 0
    overflow: int = 0
    tier_hits: Dict[int, int] = field(default_factory=dict)
    max_cascade_depth: int = 0
    overflow_spills: int = 0
    process_latency_ms: float = 0.0
    total_latency_ms: float = 0.0
    error: Optional[str] = None

    @property
    def hit_ratio(self) -> float:
        """Share of items that were already known (tier or overflow)."""
        return (self.items - self.new) / max(1, self.items)


class MetricsRecorder:
    """
    Aggregates per-step outcomes of one simulation run. Nothing is kept per
    item, so long streams cost constant memory.
    """

    def __init__(self, traces_dir: str = "./traces", *, write: bool = True):
        self._traces_dir = Path(traces_dir)
        self._write = write
        self._t0: Optional[float] = None
        self._run: Optional[RunMetric] = None

    @property
    def current(self) -> Optional[RunMetric]:
        return self._run

    def start(self, label: str = "") -> None:
        self._t0 = time.time()
        self._run = RunMetric(label=label or "")

    def record_step(
        self,
        provenance: Provenance,
        *,
        t_start: float,
        t_end: float,
        cascade_depth: int = 0,
        spilled: bool = False,
    ) -> None:
        # no open run: begin a fresh one instead of growing the last finished one
        if self._run is None or self._t0 is None:
            self.start()
        run = self._run
        run.items += 1
        if provenance.is_new:
            run.new += 1
        elif provenance.is_overflow:
            run.overflow += 1
        elif provenance.is_tier:
            run.tier_hits[provenance.tier] = run.tier_hits.get(provenance.tier, 0) + 1
        run.max_cascade_depth = max(run.max_cascade_depth, int(cascade_depth))
        if spilled:
            run.overflow_spills += 1
        run.process_latency_ms += max(0.0, (t_end - t_start) * 1000.0)

    def end_and_write(self, *, error: Optional[str] = None) -> Optional[RunMetric]:
        if self._t0 is None or self._run is None:
            return None
        run = self._run
        run.total_latency_ms = max(0.0, (time.time() - self._t0) * 1000.0)
        run.error = error
        if self._write:
            data = asdict(run)
            # JSON object keys must be strings
            data["tier_hits"] = {str(k): v for k, v in sorted(run.tier_hits.items())}
            write_trace_line(self._traces_dir, {"type": "metrics", "data": data})
        self._t0 = None
        return run
