from __future__ import annotations

import time
from functools import wraps
from typing import Any, Callable

from workshop.core.provenance import Provenance
from .metrics import MetricsRecorder


def timed_step(recorder: MetricsRecorder, workshop: Any):
    """
    Decorator to measure one Workshop.process() call and record its outcome.
    The wrapped function must return a Provenance. Failed calls record
    nothing and re-raise.
    """
    def _decorator(fn: Callable[..., Provenance]):
        @wraps(fn)
        def _wrapped(*args, **kwargs):
            spills_before = workshop.overflow_spills
            t0 = time.time()
            result = fn(*args, **kwargs)
            t1 = time.time()
            recorder.record_step(
                result,
                t_start=t0,
                t_end=t1,
                cascade_depth=workshop.last_cascade_depth,
                spilled=workshop.overflow_spills > spills_before,
            )
            return result
        return _wrapped
    return _decorator
