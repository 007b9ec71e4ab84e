"""Tests for the bottom-up table counter."""

import math
import random

import pytest

from springs.counter.counter import count_arrangements
from springs.counter.table import count_arrangements_table
from springs.schemas.record import ConditionRecord, SpringState
from springs.transform.unfold import unfold, unfold_n

SCENARIOS = [
    ("???.###", (1, 1, 3), 1, 1),
    (".??..??...?##.", (1, 1, 3), 4, 16384),
    ("?#?#?#?#?#?#?#?", (1, 3, 1, 6), 1, 1),
    ("????.#...#...", (4, 1, 1), 1, 16),
    ("????.######..#####.", (1, 6, 5), 4, 2500),
    ("?###????????", (3, 2, 1), 10, 506250),
]


def _record(pattern: str, *groups: int) -> ConditionRecord:
    return ConditionRecord(tuple(SpringState(c) for c in pattern), groups)


class TestScenarios:
    @pytest.mark.parametrize("pattern,groups,plain,unfolded", SCENARIOS)
    def test_plain_and_unfolded(self, pattern, groups, plain, unfolded):
        record = _record(pattern, *groups)
        assert count_arrangements_table(record) == plain
        assert count_arrangements_table(unfold(record)) == unfolded


class TestEdgeCases:
    def test_empty_record(self):
        assert count_arrangements_table(ConditionRecord((), ())) == 1

    def test_empty_pattern_with_groups(self):
        assert count_arrangements_table(ConditionRecord((), (2,))) == 0

    def test_damaged_without_groups(self):
        assert count_arrangements_table(_record(".#.")) == 0

    def test_run_ending_at_pattern_end(self):
        assert count_arrangements_table(_record("?.##", 2)) == 1

    def test_long_pattern_without_recursion(self):
        """k runs totalling D damaged springs fit C(n - D + 1, k) ways in n unknowns."""
        n = 5000
        record = _record("?" * n, 2, 2)
        assert count_arrangements_table(record) == math.comb(n - 4 + 1, 2)


class TestAgreesWithMemoizedCounter:
    @pytest.mark.parametrize("seed", range(5))
    def test_random_records(self, seed):
        rng = random.Random(seed)
        for _ in range(60):
            pattern = "".join(rng.choice(".#???") for _ in range(rng.randint(0, 14)))
            groups = tuple(rng.randint(1, 4) for _ in range(rng.randint(0, 4)))
            record = _record(pattern, *groups)
            assert count_arrangements_table(record) == count_arrangements(record), record

    def test_random_unfolded_records(self):
        rng = random.Random(99)
        for _ in range(25):
            pattern = "".join(rng.choice(".#??") for _ in range(rng.randint(1, 8)))
            groups = tuple(rng.randint(1, 3) for _ in range(rng.randint(1, 3)))
            record = unfold_n(_record(pattern, *groups), 3)
            assert count_arrangements_table(record) == count_arrangements(record), record
