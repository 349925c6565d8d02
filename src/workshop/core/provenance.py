from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Source(Enum):
    TIER = "tier"
    OVERFLOW = "overflow"
    NEW = "new"
    # only reported by Workshop.locate(), never by process()
    WORKBENCH = "workbench"


@dataclass(frozen=True)
class Provenance:
    """
    Where an item was found right before it moved to the workbench.
    `tier` is the 1-based tier index and is set only for Source.TIER.
    """
    source: Source
    tier: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.source is Source.TIER) != (self.tier is not None):
            raise ValueError(f"tier index is required exactly for tier provenance: {self!r}")
        if self.tier is not None and self.tier < 1:
            raise ValueError(f"tier index is 1-based, got {self.tier}")

    @property
    def is_tier(self) -> bool:
        return self.source is Source.TIER

    @property
    def is_new(self) -> bool:
        return self.source is Source.NEW

    @property
    def is_overflow(self) -> bool:
        return self.source is Source.OVERFLOW

    def __str__(self) -> str:
        if self.source is Source.TIER:
            return f"Tier({self.tier})"
        return self.source.name.capitalize()


def Tier(index: int) -> Provenance:
    return Provenance(Source.TIER, index)


Overflow = Provenance(Source.OVERFLOW)
New = Provenance(Source.NEW)
Workbench = Provenance(Source.WORKBENCH)
