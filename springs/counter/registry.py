"""
Counting strategy registry.

A simple mapping from strategy name to a callable that takes a
ConditionRecord and returns its arrangement count. Both built-in strategies
are registered when this module is imported::

    from springs.counter.registry import get

    count = get("table")(record)
"""

from __future__ import annotations

from collections.abc import Callable

from springs.counter.counter import count_arrangements
from springs.counter.table import count_arrangements_table
from springs.schemas.record import ConditionRecord

CountFn = Callable[[ConditionRecord], int]

_REGISTRY: dict[str, CountFn] = {}


def register(name: str, count_fn: CountFn) -> None:
    """Register *count_fn* under *name*, replacing any previous entry."""
    _REGISTRY[name] = count_fn


def get(name: str) -> CountFn:
    """Return the counting callable registered under *name*.

    Raises
    ------
    KeyError
        If *name* has not been registered.
    """
    if name not in _REGISTRY:
        raise KeyError(f"Unknown counting strategy: {name!r}")
    return _REGISTRY[name]


def list_strategies() -> list[str]:
    """Return a sorted list of all registered strategy names."""
    return sorted(_REGISTRY.keys())


register("memoized", count_arrangements)
register("table", count_arrangements_table)
