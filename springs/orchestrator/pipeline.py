"""
Batch pipeline — lines of condition records to the two reported totals.

Pipeline stages:

  1. read the input file          → PipelineError("input") if unreadable
  2. parse_records()              → PipelineError("parser") on malformed lines
  3. count each record            → plain total
  4. count each unfolded record   → unfolded total

Each record is counted independently with a fresh cache, so stages 3 and 4
can be spread over worker processes (``Settings.workers``). Totals are sums
and do not depend on completion order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from springs.config.settings import Settings, get_settings
from springs.counter.registry import get as get_strategy
from springs.parser.parser import ParseError, parse_records
from springs.schemas.record import ConditionRecord
from springs.transform.unfold import unfold_n

logger = logging.getLogger(__name__)


class PipelineError(Exception):
    """Raised when a pipeline stage fails.

    Attributes:
        stage: Name of the stage that failed (``"input"`` or ``"parser"``).
        detail: Human-readable description of the failure.
    """

    def __init__(self, stage: str, detail: str) -> None:
        super().__init__(f"[{stage}] {detail}")
        self.stage = stage
        self.detail = detail


@dataclass(frozen=True)
class Totals:
    """Summed arrangement counts for a batch of records.

    Attributes:
        plain: Sum of counts over the records as given.
        unfolded: Sum of counts over the unfolded records.
        records: Number of records counted.
    """

    plain: int
    unfolded: int
    records: int


def _count_record(strategy: str, multiplicity: int, record: ConditionRecord) -> tuple[int, int]:
    """Return ``(plain, unfolded)`` counts for one record.

    Module-level so worker processes can unpickle it; the strategy is looked
    up by name in the worker.
    """
    count = get_strategy(strategy)
    return count(record), count(unfold_n(record, multiplicity))


def solve(records: Sequence[ConditionRecord], *, settings: Settings | None = None) -> Totals:
    """Count every record plainly and unfolded and return the summed totals."""
    settings = settings or get_settings()
    strategies = [settings.strategy] * len(records)
    multiplicities = [settings.multiplicity] * len(records)

    if settings.workers > 1 and len(records) > 1:
        logger.info("counting %d record(s) on %d workers", len(records), settings.workers)
        with ProcessPoolExecutor(max_workers=settings.workers) as pool:
            pairs = list(pool.map(_count_record, strategies, multiplicities, records))
    else:
        pairs = [_count_record(s, k, r) for s, k, r in zip(strategies, multiplicities, records)]

    totals = Totals(
        plain=sum(plain for plain, _ in pairs),
        unfolded=sum(unfolded for _, unfolded in pairs),
        records=len(records),
    )
    logger.info(
        "%d record(s): plain total %d, unfolded (x%d) total %d",
        totals.records,
        totals.plain,
        settings.multiplicity,
        totals.unfolded,
    )
    return totals


def solve_lines(lines: Iterable[str], *, settings: Settings | None = None) -> Totals:
    """Parse *lines* under the configured policy, then solve them.

    Raises:
        PipelineError: stage ``"parser"`` if any line is malformed.
    """
    settings = settings or get_settings()
    try:
        records = parse_records(lines, policy=settings.parse_policy)
    except ParseError as exc:
        raise PipelineError("parser", str(exc)) from exc
    return solve(records, settings=settings)


def solve_file(path: Path | str, *, settings: Settings | None = None) -> Totals:
    """Read condition records from the text file at *path* and solve them.

    Raises:
        PipelineError: stage ``"input"`` if the file cannot be read, or
            ``"parser"`` if any line is malformed.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise PipelineError("input", f"cannot read {str(path)!r}: {exc.strerror}") from exc
    except UnicodeDecodeError as exc:
        raise PipelineError("input", f"{str(path)!r} is not UTF-8 text: {exc.reason}") from exc
    return solve_lines(text.splitlines(), settings=settings)
