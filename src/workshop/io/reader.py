from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple

from workshop.errors import InputError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class WorkshopInput:
    capacities: Tuple[int, ...]
    items: Tuple[int, ...]


def _parse_int64(token: str, what: str) -> int:
    text = (token or "").strip()
    if not _INT_RE.fullmatch(text):
        raise InputError(f"{what} is not an integer: {token!r}")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InputError(f"{what} is out of the 64-bit range: {token!r}")
    return value


def parse_capacities(line: str, *, max_tiers: int = 64, max_capacity: int = 1023) -> Tuple[int, ...]:
    """
    First input line: tier capacities separated by spaces.
    Only digits and spaces are accepted; an empty line means no tiers.
    """
    line = line.rstrip("\r\n")
    if any(not (c == " " or c.isdigit()) for c in line):
        raise InputError(f"capacity line may only hold digits and spaces: {line!r}")
    caps: List[int] = []
    for tok in line.split():
        # isdigit() lets through non-ASCII digits that int() still understands
        if not tok.isascii():
            raise InputError(f"capacity is not an ASCII number: {tok!r}")
        size = int(tok)
        if size <= 0 or size > max_capacity:
            raise InputError(f"capacity {size} is outside 1..{max_capacity}")
        caps.append(size)
    if len(caps) > max_tiers:
        raise InputError(f"{len(caps)} tiers given, at most {max_tiers} allowed")
    return tuple(caps)


def read_input(lines: Iterable[str], *, max_tiers: int = 64, max_capacity: int = 1023) -> WorkshopInput:
    """
    Read and validate a whole simulation input before anything runs.

    Layout: capacities line, item count line, then one item per line.
    Lines after the last item are ignored.
    """
    it: Iterator[str] = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(it)
        except StopIteration:
            raise InputError(f"input ended before {what}") from None

    capacities = parse_capacities(next_line("the capacity line"), max_tiers=max_tiers, max_capacity=max_capacity)
    count = _parse_int64(next_line("the item count"), "item count")
    if count <= 0:
        raise InputError(f"item count must be positive, got {count}")

    items: List[int] = []
    for i in range(count):
        items.append(_parse_int64(next_line(f"item {i + 1} of {count}"), f"item {i + 1}"))
    return WorkshopInput(capacities=capacities, items=tuple(items))


def read_input_text(text: str, **limits: int) -> WorkshopInput:
    return read_input(text.splitlines(), **limits)
