from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

from workshop.core.provenance import New, Overflow, Provenance, Tier, Workbench
from workshop.errors import InvariantViolation
from workshop.observability.logging import get_logger
from workshop.stores.recency import BoundedRecencyStore, Item, UnboundedStore

log = get_logger(__name__)


class Workshop:
    """
    One workbench (capacity 1), tiers 1..N and an unbounded overflow store.

    process(item) drains the workbench into the tiers, then pulls `item`
    from wherever it sits (overflow first, then tiers in order) onto the
    workbench and reports where it came from.
    """

    def __init__(self, capacities: Sequence[int] = ()):
        self._workbench = BoundedRecencyStore(1)
        self._tiers: Tuple[BoundedRecencyStore, ...] = tuple(BoundedRecencyStore(c) for c in capacities)
        self._overflow = UnboundedStore()
        self.last_cascade_depth = 0
        self.overflow_spills = 0

    @property
    def capacities(self) -> Tuple[int, ...]:
        return tuple(t.capacity for t in self._tiers)

    @property
    def tiers(self) -> Tuple[BoundedRecencyStore, ...]:
        return self._tiers

    @property
    def overflow(self) -> UnboundedStore:
        return self._overflow

    @property
    def workbench_item(self) -> Optional[Any]:
        return next(iter(self._workbench), None)

    def process(self, item: Item) -> Provenance:
        if item is None:
            raise InvariantViolation("cannot process None")

        self.last_cascade_depth = 0
        if not self._workbench.is_empty():
            self._place(self._workbench.remove_oldest())

        provenance = self._take(item)
        evicted = self._workbench.insert_front(item)
        if evicted is not None:
            raise InvariantViolation(f"workbench still held {evicted!r} after draining")
        return provenance

    def locate(self, item: Item) -> Optional[Provenance]:
        """Report where `item` currently sits without moving anything."""
        if self._workbench.find(item) is not None:
            return Workbench
        if self._overflow.find(item) is not None:
            return Overflow
        for index, tier in enumerate(self._tiers, start=1):
            if tier.find(item) is not None:
                return Tier(index)
        return None

    def snapshot(self) -> Dict[str, Any]:
        return {
            "workbench": list(self._workbench),
            "tiers": [list(t) for t in self._tiers],
            "overflow": list(self._overflow),
        }

    def _take(self, item: Item) -> Provenance:
        pos = self._overflow.find(item)
        if pos is not None:
            self._overflow.remove_at(pos)
            return Overflow
        for index, tier in enumerate(self._tiers, start=1):
            pos = tier.find(item)
            if pos is not None:
                tier.remove_at(pos)
                return Tier(index)
        return New

    def _place(self, item: Any) -> None:
        # Fold over the tiers carrying whatever the previous insert pushed out.
        carry: Optional[Any] = item
        for tier in self._tiers:
            if carry is None:
                break
            self.last_cascade_depth += 1
            carry = tier.insert_front(carry)
        if carry is not None:
            # with zero tiers the drained item lands here directly
            self._overflow.insert_front(carry)
            self.overflow_spills += 1
            log.debug("item %r spilled to overflow (size=%d)", carry, len(self._overflow))
