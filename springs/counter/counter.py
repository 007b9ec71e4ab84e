"""
Memoized arrangement counter.

Counts the ways the unknown springs of a ConditionRecord can be resolved so
that the maximal damaged runs match ``groups`` in order. The recursion works
on the remaining suffix of the pattern and of the groups:

  groups exhausted   → 1 if no damaged spring remains, else 0
  pattern exhausted  → 0
  head OPERATIONAL   → count(rest, groups)
  head UNKNOWN       → count(rest, groups) + run
  head DAMAGED       → run

where ``run`` is the count after placing the first group at the head: the next
``g`` springs must all be forcible to damaged and the spring right after them
(if any) must be forcible to operational.

Suffixes are addressed by ``(pattern_offset, group_offset)`` into the one
record being counted, so the cache key is a pair of ints. The cache belongs
to a single ArrangementCounter and is dropped with it; nothing is shared
between records or between a record and its unfolded form.
"""

from __future__ import annotations

import logging

from springs.schemas.record import ConditionRecord, SpringState

logger = logging.getLogger(__name__)

CacheKey = tuple[int, int]


class ArrangementCounter:
    """
    Counts arrangements for one record, caching each resolved suffix pair.

    Instantiate once per top-level count. With ``memoize=False`` the same
    recursion runs uncached, which is exponential in the number of unknown
    springs, recurses once per spring, and is only useful for checking that
    the cache changes nothing on small records.
    """

    def __init__(self, record: ConditionRecord, *, memoize: bool = True) -> None:
        self._pattern = record.pattern
        self._groups = record.groups
        self._memoize = memoize
        self._cache: dict[CacheKey, int] = {}

        # _operational_before[i] == number of OPERATIONAL springs in pattern[:i]
        operational_before = [0]
        for state in self._pattern:
            operational_before.append(
                operational_before[-1] + (1 if state is SpringState.OPERATIONAL else 0)
            )
        self._operational_before = operational_before

        self._last_damaged = -1
        for index, state in enumerate(self._pattern):
            if state is SpringState.DAMAGED:
                self._last_damaged = index

    @property
    def cache_size(self) -> int:
        """Number of distinct suffix pairs resolved so far."""
        return len(self._cache)

    def count(self) -> int:
        """Return the number of valid arrangements of the whole record."""
        if self._memoize:
            self._prime_cache()
        return self._count(0, 0)

    def _prime_cache(self) -> None:
        """Resolve every suffix pair from the shortest pattern suffix up.

        Each pair only refers to pairs with a larger pattern offset, so once
        those are cached a lookup recurses at most one level and the stack
        depth no longer grows with the pattern length.
        """
        for offset in range(len(self._pattern), -1, -1):
            for group_offset in range(len(self._groups), -1, -1):
                self._count(offset, group_offset)

    # ── Recursion ──────────────────────────────────────────────────────────────

    def _count(self, offset: int, group_offset: int) -> int:
        if not self._memoize:
            return self._count_suffix(offset, group_offset)

        key = (offset, group_offset)
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        value = self._count_suffix(offset, group_offset)
        self._cache[key] = value
        return value

    def _count_suffix(self, offset: int, group_offset: int) -> int:
        if group_offset == len(self._groups):
            return 1 if self._last_damaged < offset else 0
        if offset == len(self._pattern):
            return 0

        head = self._pattern[offset]
        if head is SpringState.OPERATIONAL:
            return self._count(offset + 1, group_offset)

        total = 0
        if head is SpringState.UNKNOWN:
            total += self._count(offset + 1, group_offset)

        size = self._groups[group_offset]
        if self._run_fits(offset, size):
            # The boundary spring is consumed with the run.
            resume = min(offset + size + 1, len(self._pattern))
            total += self._count(resume, group_offset + 1)
        return total

    def _run_fits(self, offset: int, size: int) -> bool:
        """True if a damaged run of *size* can start at *offset* and end cleanly."""
        end = offset + size
        if end > len(self._pattern):
            return False
        if self._operational_before[end] != self._operational_before[offset]:
            return False
        return end == len(self._pattern) or self._pattern[end] is not SpringState.DAMAGED


def count_arrangements(record: ConditionRecord, *, memoize: bool = True) -> int:
    """
    Return the number of ways to resolve *record*'s unknown springs.

    Never raises for a well-formed record; returns 0 when no resolution
    satisfies the groups.
    """
    counter = ArrangementCounter(record, memoize=memoize)
    result = counter.count()
    logger.debug(
        "counted %d arrangement(s) for %d spring(s), %d group(s); %d state(s) cached",
        result,
        len(record.pattern),
        len(record.groups),
        counter.cache_size,
    )
    return result
