"""
Depth-first backtracking search over meeting dates.

Meetings are assigned in index order. For the lowest unassigned meeting
each candidate date is tried in domain order; a candidate is kept only if
every constraint whose operands are all assigned still holds. Constraints
with an unassigned operand are skipped, not forward-checked.

Search state lives in immutable snapshots of the meeting variables, so
undoing an assignment is simply returning to the caller's snapshot.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from .constraints import DateConstraint
from .domain import MeetingVariable
from .logging_utils import get_logger

logger = get_logger()


# =============================================================================
# Statistics and Deadline
# =============================================================================

@dataclass
class SearchStats:
    """Counters collected during one search."""
    nodes: int = 0  # Candidate dates tried
    rejections: int = 0  # Candidates failing the consistency check
    backtracks: int = 0  # Consistent candidates whose subtree failed
    max_depth: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "nodes": self.nodes,
            "rejections": self.rejections,
            "backtracks": self.backtracks,
            "max_depth": self.max_depth,
        }


class SearchTimeout(Exception):
    """Raised when a search deadline passes before the search finishes."""
    pass


class Deadline:
    """
    Wall-clock limit checked before each candidate date is tried.

    Usage:
        deadline = Deadline(5.0)
        backtrack(variables, constraints, deadline=deadline)
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        if seconds <= 0:
            raise ValueError(f"Deadline must be positive, got {seconds}")
        self.seconds = seconds
        self._clock = clock
        self._expires_at = clock() + seconds

    @classmethod
    def from_seconds(cls, seconds: Optional[float]) -> Optional[Deadline]:
        """Build a deadline, or None when no limit is wanted."""
        return cls(seconds) if seconds else None

    @property
    def remaining(self) -> float:
        return max(self._expires_at - self._clock(), 0.0)

    def expired(self) -> bool:
        return self._clock() >= self._expires_at

    def check(self) -> None:
        if self.expired():
            raise SearchTimeout(f"Search exceeded time limit of {self.seconds}s")


# =============================================================================
# Consistency
# =============================================================================

def assigned_dates(variables: Sequence[MeetingVariable]) -> tuple[Optional[date], ...]:
    """Current assignment of every meeting, None where unassigned."""
    return tuple(v.assignment for v in variables)


def check_consistency(
    variables: Sequence[MeetingVariable],
    constraints: Iterable[DateConstraint],
) -> bool:
    """
    Check every constraint against the current partial assignment.

    A constraint with an unassigned operand cannot be violated yet and is
    skipped.
    """
    dates = assigned_dates(variables)
    return all(c.is_satisfied(dates) for c in constraints)


def next_unassigned(variables: Sequence[MeetingVariable]) -> Optional[int]:
    """Position of the lowest-index meeting without an assignment."""
    for position, variable in enumerate(variables):
        if not variable.is_assigned:
            return position
    return None


# =============================================================================
# Backtracking
# =============================================================================

def backtrack(
    variables: Sequence[MeetingVariable],
    constraints: Iterable[DateConstraint],
    stats: Optional[SearchStats] = None,
    deadline: Optional[Deadline] = None,
) -> Optional[tuple[date, ...]]:
    """
    Find the first complete consistent assignment.

    Args:
        variables: Meeting variables with (pruned) domains, indexed by meeting
        constraints: Full constraint set, unary and binary
        stats: Optional counters updated in place
        deadline: Optional time limit; SearchTimeout is raised on expiry

    Returns:
        Dates in meeting order, or None if no assignment satisfies
        every constraint

    Raises:
        SearchTimeout: If the deadline passes during the search
    """
    if stats is None:
        stats = SearchStats()

    result = _search(tuple(variables), tuple(constraints), stats, deadline, depth=0)

    logger.debug(
        "Search %s after %d nodes (%d rejections, %d backtracks)",
        "succeeded" if result is not None else "failed",
        stats.nodes, stats.rejections, stats.backtracks,
    )
    return result


def _search(
    variables: tuple[MeetingVariable, ...],
    constraints: tuple[DateConstraint, ...],
    stats: SearchStats,
    deadline: Optional[Deadline],
    depth: int,
) -> Optional[tuple[date, ...]]:
    position = next_unassigned(variables)
    if position is None:
        return assigned_dates(variables)
    current = variables[position]

    stats.max_depth = max(stats.max_depth, depth + 1)

    for candidate in current.domain:
        if deadline is not None:
            deadline.check()
        stats.nodes += 1

        trial = variables[:position] + (current.assign(candidate),) + variables[position + 1:]

        if not check_consistency(trial, constraints):
            stats.rejections += 1
            continue

        result = _search(trial, constraints, stats, deadline, depth + 1)
        if result is not None:
            return result

        stats.backtracks += 1

    return None
