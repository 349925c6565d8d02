from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

from workshop.core.provenance import Provenance
from workshop.core.workshop import Workshop
from workshop.errors import InvariantViolation
from workshop.io.reader import WorkshopInput
from workshop.observability.decorators import timed_step
from workshop.observability.logging import get_logger
from workshop.observability.metrics import MetricsRecorder

log = get_logger(__name__)


def _resolve_workshop(capacities: Sequence[int], workshop: Optional[Workshop]) -> Workshop:
    if workshop is None:
        return Workshop(capacities)
    if workshop.capacities != tuple(capacities):
        raise InvariantViolation(
            f"workshop tiers {list(workshop.capacities)} do not match capacities {list(capacities)}"
        )
    return workshop


def simulate(
    capacities: Sequence[int],
    items: Iterable[int],
    *,
    workshop: Optional[Workshop] = None,
    recorder: Optional[MetricsRecorder] = None,
) -> Iterator[Provenance]:
    """
    Feed `items` through a workshop one at a time, yielding each provenance.

    The generator is lazy: item n is fully placed before item n+1 is read.
    Pass `workshop` to inspect the final stores afterwards; its tiers must
    match `capacities`.
    """
    shop = _resolve_workshop(capacities, workshop)
    step = shop.process if recorder is None else timed_step(recorder, shop)(shop.process)
    for item in items:
        yield step(item)


def run_input(
    data: WorkshopInput,
    *,
    recorder: Optional[MetricsRecorder] = None,
    workshop: Optional[Workshop] = None,
    label: str = "",
) -> List[Provenance]:
    shop = _resolve_workshop(data.capacities, workshop)
    if recorder is not None:
        recorder.start(label)
    try:
        out = list(simulate(data.capacities, data.items, workshop=shop, recorder=recorder))
    except Exception as e:
        if recorder is not None:
            recorder.end_and_write(error=str(e))
        raise
    if recorder is not None:
        run = recorder.end_and_write()
        if run is not None:
            log.info(
                "run %s: items=%d new=%d overflow=%d hit_ratio=%.3f max_cascade=%d",
                run.label or "-", run.items, run.new, run.overflow, run.hit_ratio, run.max_cascade_depth,
            )
    return out
