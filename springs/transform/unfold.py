"""
Unfold transform: replicate a condition record end to end.

The pattern copies are joined by a single UNKNOWN spring each; the group
copies are concatenated with no separator. The input record is untouched.
"""

from __future__ import annotations

from springs.schemas.record import ConditionRecord, SpringState

UNFOLD_MULTIPLICITY: int = 5


def unfold_n(record: ConditionRecord, copies: int) -> ConditionRecord:
    """Return a record holding *copies* copies of *record*.

    Raises:
        ValueError: If copies < 1.
    """
    if copies < 1:
        raise ValueError(f"copies must be >= 1, got {copies}")

    pattern: list[SpringState] = list(record.pattern)
    for _ in range(copies - 1):
        pattern.append(SpringState.UNKNOWN)
        pattern.extend(record.pattern)

    return ConditionRecord(pattern=tuple(pattern), groups=record.groups * copies)


def unfold(record: ConditionRecord) -> ConditionRecord:
    """Unfold *record* five times."""
    return unfold_n(record, UNFOLD_MULTIPLICITY)
