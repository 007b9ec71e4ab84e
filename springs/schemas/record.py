"""
Condition record schema: one row of springs plus its damaged-run constraints.

A ConditionRecord is created once (by the parser or by unfold) and never
mutated afterwards. Equality and hashing are by content, so two records
built from the same text compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SpringState(str, Enum):
    """
    Condition of a single spring, valued by its symbol in a condition record.

      OPERATIONAL → "."
      DAMAGED     → "#"
      UNKNOWN     → "?"
    """

    OPERATIONAL = "."
    DAMAGED = "#"
    UNKNOWN = "?"

    @classmethod
    def from_symbol(cls, symbol: str) -> SpringState:
        """Return the state for *symbol*, or raise ValueError naming it."""
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Cannot convert character {symbol!r} to a spring") from None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ConditionRecord:
    """
    A row of spring states and the required damaged-run lengths.

    Attributes:
        pattern: Spring states, left to right. May be empty.
        groups: Required lengths of the maximal damaged runs, left to right.
            Every entry is >= 1. An empty tuple means no damaged spring is
            allowed anywhere in the row.
    """

    pattern: tuple[SpringState, ...]
    groups: tuple[int, ...]

    def __post_init__(self) -> None:
        for group in self.groups:
            if isinstance(group, bool) or not isinstance(group, int):
                raise ValueError(f"group sizes must be integers, got {group!r}")
            if group < 1:
                raise ValueError(f"group sizes must be >= 1, got {group}")

    @property
    def unknown_count(self) -> int:
        """Number of springs whose state is still unresolved."""
        return sum(1 for state in self.pattern if state is SpringState.UNKNOWN)

    @property
    def damaged_total(self) -> int:
        """Total number of damaged springs any arrangement must contain."""
        return sum(self.groups)

    def to_line(self) -> str:
        """Render the record in its input form, e.g. ``"???.### 1,1,3"``."""
        pattern = "".join(state.value for state in self.pattern)
        return f"{pattern} {','.join(str(group) for group in self.groups)}"

    def __str__(self) -> str:
        return self.to_line()
