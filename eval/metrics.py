from __future__ import annotations

from typing import Sequence


def sequence_match_rate(truths: Sequence[Sequence[str]], predictions: Sequence[Sequence[str]]) -> float:
    """
    truths: list of expected token sequences (one per scenario)
    predictions: list of produced token sequences, aligned with truths
    """
    if not truths or not predictions or len(truths) != len(predictions):
        return 0.0
    ok = sum(1 for t, p in zip(truths, predictions) if list(t) == list(p))
    return ok / max(1, len(truths))


def last_match_rate(truths: Sequence[Sequence[str]], predictions: Sequence[Sequence[str]]) -> float:
    if not truths or not predictions or len(truths) != len(predictions):
        return 0.0
    total = len(truths)
    ok = 0
    for t, p in zip(truths, predictions):
        if t and p and t[-1] == p[-1]:
            ok += 1
    return ok / max(1, total)


def token_accuracy(truths: Sequence[Sequence[str]], predictions: Sequence[Sequence[str]]) -> float:
    """Per-position agreement over all scenarios; a missing position counts as wrong."""
    if not truths or not predictions or len(truths) != len(predictions):
        return 0.0
    total = 0
    ok = 0
    for t, p in zip(truths, predictions):
        total += len(t)
        ok += sum(1 for a, b in zip(t, p) if a == b)
    return ok / max(1, total)
