"""
Meeting variables and their date domains.

Each meeting starts with every day of the shared range as a candidate.
Unary constraints are applied once, before search, to filter those
candidates. Binary constraints never prune: both of their operands are
still unknown at that point.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from .constraints import DateConstraint, UnaryDateConstraint, evaluate, unary_constraints
from .logging_utils import get_logger

logger = get_logger()

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class MeetingVariable:
    """A meeting's candidate dates and its committed date, if any."""
    index: int
    domain: tuple[date, ...]
    assignment: Optional[date] = None

    @property
    def is_assigned(self) -> bool:
        return self.assignment is not None

    def assign(self, value: Optional[date]) -> MeetingVariable:
        """Return a copy holding the given assignment (None clears it)."""
        return replace(self, assignment=value)

    def __str__(self) -> str:
        current = self.assignment.isoformat() if self.assignment else "unassigned"
        return f"meeting{self.index} ({len(self.domain)} candidates, {current})"


def build_domain(start: date, end: date) -> tuple[date, ...]:
    """
    Build every date from start to end, inclusive.

    Returns an empty domain when start is after end.

    Example:
        >>> build_domain(date(2024, 1, 1), date(2024, 1, 3))
        (datetime.date(2024, 1, 1), datetime.date(2024, 1, 2), datetime.date(2024, 1, 3))
    """
    num_days = (end - start).days + 1
    return tuple(start + ONE_DAY * offset for offset in range(max(num_days, 0)))


def create_variables(meeting_count: int, start: date, end: date) -> list[MeetingVariable]:
    """Create one unassigned variable per meeting, all sharing the full range."""
    domain = build_domain(start, end)
    return [MeetingVariable(index=i, domain=domain) for i in range(meeting_count)]


def prune(
    variables: Sequence[MeetingVariable],
    constraints: Iterable[DateConstraint],
) -> list[MeetingVariable]:
    """
    Remove candidate dates that violate a unary constraint.

    A date is kept only if it satisfies every unary constraint on its
    meeting, so the result is the same whatever order the constraints or
    dates arrive in, and pruning an already pruned list changes nothing.

    Args:
        variables: Meeting variables indexed by meeting
        constraints: Full constraint set; binary constraints are ignored

    Returns:
        New variables with filtered domains (input is left untouched)
    """
    by_meeting: dict[int, list[UnaryDateConstraint]] = {}
    for constraint in unary_constraints(list(constraints)):
        by_meeting.setdefault(constraint.meeting, []).append(constraint)

    pruned = []
    for variable in variables:
        checks = by_meeting.get(variable.index)
        if not checks:
            pruned.append(variable)
            continue

        domain = tuple(
            candidate for candidate in variable.domain
            if all(evaluate(candidate, c.value, c.op) for c in checks)
        )
        removed = len(variable.domain) - len(domain)
        if removed:
            logger.debug(
                "Pruned %d of %d dates from meeting %d",
                removed, len(variable.domain), variable.index,
            )
        pruned.append(replace(variable, domain=domain))

    return pruned


def has_empty_domain(variables: Iterable[MeetingVariable]) -> bool:
    """True if any meeting has no candidate dates left."""
    return any(not v.domain for v in variables)


def domain_sizes(variables: Iterable[MeetingVariable]) -> list[int]:
    """Number of candidate dates per meeting."""
    return [len(v.domain) for v in variables]
