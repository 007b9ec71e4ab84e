"""
Condition record parser — text lines to ConditionRecord.

A line reads ``<pattern> <groups>``: the pattern over ``#``, ``.`` and ``?``,
then the comma-separated group sizes, separated by whitespace. Fields after
the second are ignored.

Batch parsing supports two policies:

  fail_fast → raise the first ParseError, tagged with its 1-based line number
  collect   → parse every line, then raise one ParseErrorGroup listing all
              failures

A blank line is missing its pattern and fails like any other malformed
line. Input read with ``str.splitlines()`` has no trailing empty line.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from springs.schemas.record import ConditionRecord, SpringState

logger = logging.getLogger(__name__)

PARSE_POLICIES: tuple[str, ...] = ("fail_fast", "collect")

_GROUP_TOKEN_RE = re.compile(r"[0-9]+")


class ParseError(ValueError):
    """Raised when a line cannot be converted to a ConditionRecord.

    Attributes:
        line: The offending line, without its trailing newline.
        reason: What is wrong with it.
        line_number: 1-based position in the batch, or None for a lone line.
    """

    def __init__(self, line: str, reason: str, line_number: int | None = None) -> None:
        self.line = line
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}" if line_number is not None else "line"
        super().__init__(f"{where} {line!r}: {reason}")


class ParseErrorGroup(ParseError):
    """Raised by the ``collect`` policy when one or more lines fail to parse.

    Raises:
        ValueError: If *errors* is empty.
    """

    def __init__(self, errors: list[ParseError]) -> None:
        if not errors:
            raise ValueError("ParseErrorGroup needs at least one ParseError")
        self.errors = tuple(errors)
        first = errors[0]
        super().__init__(first.line, first.reason, first.line_number)
        self.args = (
            f"{len(errors)} line(s) failed to parse:\n"
            + "\n".join(f"  • {error}" for error in errors),
        )


def parse_record(line: str) -> ConditionRecord:
    """Parse one ``<pattern> <groups>`` line.

    Raises:
        ParseError: If a field is missing, the pattern holds a character
            other than ``#.?``, or a group size is not a positive integer.
    """
    text = line.rstrip("\r\n")
    fields = text.split()
    if len(fields) < 2:
        missing = "pattern" if not fields else "group sizes"
        raise ParseError(text, f"missing {missing}")

    pattern_text, groups_text = fields[0], fields[1]

    pattern: list[SpringState] = []
    for symbol in pattern_text:
        try:
            pattern.append(SpringState.from_symbol(symbol))
        except ValueError as exc:
            raise ParseError(text, str(exc)) from None

    groups: list[int] = []
    for token in groups_text.split(","):
        if not _GROUP_TOKEN_RE.fullmatch(token):
            raise ParseError(text, f"invalid group size {token!r}")
        size = int(token)
        if size < 1:
            raise ParseError(text, f"group sizes must be >= 1, got {size}")
        groups.append(size)

    return ConditionRecord(pattern=tuple(pattern), groups=tuple(groups))


def parse_records(lines: Iterable[str], *, policy: str = "fail_fast") -> list[ConditionRecord]:
    """Parse every line of *lines* under *policy*.

    Raises:
        ValueError: If *policy* is not one of PARSE_POLICIES.
        ParseError: First failure under ``fail_fast``.
        ParseErrorGroup: All failures under ``collect``.
    """
    if policy not in PARSE_POLICIES:
        raise ValueError(f"policy must be one of {PARSE_POLICIES}, got {policy!r}")

    records: list[ConditionRecord] = []
    errors: list[ParseError] = []

    for line_number, line in enumerate(lines, start=1):
        try:
            records.append(parse_record(line))
        except ParseError as exc:
            tagged = ParseError(exc.line, exc.reason, line_number)
            if policy == "fail_fast":
                raise tagged from None
            errors.append(tagged)

    if errors:
        raise ParseErrorGroup(errors)
    logger.debug("parsed %d record(s)", len(records))
    return records
