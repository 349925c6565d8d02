from __future__ import annotations


class WorkshopError(Exception):
    """Base class for everything the workshop package raises on purpose."""


class InputError(WorkshopError, ValueError):
    """
    Malformed simulation input (bad capacities, counts or item tokens).
    Raised before any Workshop is built; the CLI reports it as INPUT_ERROR.
    """


class InvariantViolation(WorkshopError, RuntimeError):
    """
    Internal bookkeeping went wrong (bad position, empty pop, ...).
    This is a bug in the caller's orchestration, never a data error.
    """
