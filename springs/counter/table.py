"""
Bottom-up arrangement counter.

Fills the same suffix table the memoized counter resolves lazily, in order of
increasing suffix length, so there is no recursion depth limit and no hashing.
``table[i][j]`` is the count for ``pattern[i:]`` against ``groups[j:]``; row
``len(pattern) + 1`` exists so a run ending at the last spring can step past
its (absent) boundary without a special case.
"""

from __future__ import annotations

import logging

from springs.schemas.record import ConditionRecord, SpringState

logger = logging.getLogger(__name__)


def count_arrangements_table(record: ConditionRecord) -> int:
    """Return the arrangement count for *record* without recursion."""
    pattern = record.pattern
    groups = record.groups
    n = len(pattern)
    m = len(groups)

    operational_before = [0] * (n + 1)
    for i, state in enumerate(pattern):
        operational_before[i + 1] = operational_before[i] + (
            1 if state is SpringState.OPERATIONAL else 0
        )

    table = [[0] * (m + 1) for _ in range(n + 2)]

    # With no groups left, a suffix is valid iff it holds no damaged spring.
    table[n + 1][m] = 1
    table[n][m] = 1
    for i in range(n - 1, -1, -1):
        table[i][m] = 0 if pattern[i] is SpringState.DAMAGED else table[i + 1][m]

    for i in range(n - 1, -1, -1):
        head = pattern[i]
        for j in range(m - 1, -1, -1):
            if head is SpringState.OPERATIONAL:
                table[i][j] = table[i + 1][j]
                continue

            total = table[i + 1][j] if head is SpringState.UNKNOWN else 0
            end = i + groups[j]
            if (
                end <= n
                and operational_before[end] == operational_before[i]
                and (end == n or pattern[end] is not SpringState.DAMAGED)
            ):
                total += table[end + 1][j + 1]
            table[i][j] = total

    logger.debug("filled %dx%d table for %s", n + 2, m + 1, record)
    return table[0][0]
