"""counter — arrangement counting public API."""

from springs.counter.counter import ArrangementCounter, count_arrangements
from springs.counter.registry import get, list_strategies, register
from springs.counter.table import count_arrangements_table

__all__ = [
    "ArrangementCounter",
    "count_arrangements",
    "count_arrangements_table",
    "get",
    "list_strategies",
    "register",
]
