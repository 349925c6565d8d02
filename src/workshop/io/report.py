from __future__ import annotations

from typing import Iterable, List

from workshop.core.provenance import Provenance

INPUT_ERROR_TOKEN = "INPUT_ERROR"
OVERFLOW_TOKEN = "OUTSIDE"
NEW_TOKEN = "NEW"


def format_provenance(p: Provenance) -> str:
    if p.is_tier:
        return str(p.tier)
    if p.is_overflow:
        return OVERFLOW_TOKEN
    if p.is_new:
        return NEW_TOKEN
    raise ValueError(f"{p} is not a processing outcome")


def format_all(provenances: Iterable[Provenance]) -> List[str]:
    return [format_provenance(p) for p in provenances]
