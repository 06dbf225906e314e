"""
Meeting date scheduler.

Builds one date domain per meeting, prunes them with the unary
constraints, then runs the backtracking search.

Usage:
    dates = solve(2, date(2024, 1, 1), date(2024, 1, 3), {
        BinaryDateConstraint(meeting=0, op="<", other=1),
    })

    scheduler = MeetingScheduler(2, date(2024, 1, 1), date(2024, 1, 3), constraints)
    solution = scheduler.solve(time_limit_seconds=5)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from .constraints import DateConstraint, binary_constraints, unary_constraints
from .domain import MeetingVariable, create_variables, domain_sizes, has_empty_domain, prune
from .logging_utils import get_logger
from .search import Deadline, SearchStats, SearchTimeout, backtrack
from .validation import ProblemValidationError, validate_problem

logger = get_logger()


# =============================================================================
# Results
# =============================================================================

class SolverStatus(str, Enum):
    """Solver result status."""
    FEASIBLE = "FEASIBLE"
    INFEASIBLE = "INFEASIBLE"
    TIMEOUT = "TIMEOUT"


@dataclass
class SolverSolution:
    """Outcome of one scheduling run."""
    status: SolverStatus
    dates: Optional[list[date]]
    solve_time_ms: int
    stats: SearchStats = field(default_factory=SearchStats)
    domain_sizes: list[int] = field(default_factory=list)

    @property
    def is_feasible(self) -> bool:
        return self.status == SolverStatus.FEASIBLE


# =============================================================================
# Scheduler
# =============================================================================

class MeetingScheduler:
    """
    Assigns a date to every meeting subject to date constraints.

    The stages can be driven one at a time or all at once through solve():

        scheduler = MeetingScheduler(3, start, end, constraints)
        scheduler.create_variables()
        scheduler.prune()
        solution = scheduler.solve()

    Raises ProblemValidationError on construction if the problem is
    malformed.
    """

    def __init__(
        self,
        meeting_count: int,
        range_start: date,
        range_end: date,
        constraints: Iterable[DateConstraint],
    ):
        self.constraints: tuple[DateConstraint, ...] = tuple(constraints)
        validate_problem(meeting_count, range_start, range_end, self.constraints)

        self.meeting_count = meeting_count
        self.range_start = range_start
        self.range_end = range_end

        self.variables: list[MeetingVariable] = []

        # State tracking
        self._variables_created = False
        self._pruned = False

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def create_variables(self) -> None:
        """Create one variable per meeting with the full date range."""
        if self._variables_created:
            return

        self.variables = create_variables(self.meeting_count, self.range_start, self.range_end)
        self._variables_created = True

    def prune(self) -> None:
        """Filter every domain with the unary constraints."""
        if not self._variables_created:
            raise RuntimeError("Must call create_variables() before prune()")

        if self._pruned:
            return

        self.variables = prune(self.variables, self.constraints)
        self._pruned = True

        logger.debug("Domain sizes after pruning: %s", domain_sizes(self.variables))

    def solve(self, time_limit_seconds: Optional[float] = None) -> SolverSolution:
        """
        Find the first assignment that satisfies every constraint.

        Args:
            time_limit_seconds: Optional wall-clock limit for the search

        Returns:
            SolverSolution with status and, when feasible, one date per meeting
        """
        started = time.perf_counter()

        if not self._variables_created:
            self.create_variables()
        if not self._pruned:
            self.prune()

        stats = SearchStats()
        sizes = domain_sizes(self.variables)

        if has_empty_domain(self.variables):
            logger.info("A meeting has no candidate dates left after pruning")
            return SolverSolution(
                status=SolverStatus.INFEASIBLE,
                dates=None,
                solve_time_ms=_elapsed_ms(started),
                stats=stats,
                domain_sizes=sizes,
            )

        try:
            result = backtrack(
                self.variables,
                self.constraints,
                stats=stats,
                deadline=Deadline.from_seconds(time_limit_seconds),
            )
        except SearchTimeout as e:
            logger.warning("%s", e)
            return SolverSolution(
                status=SolverStatus.TIMEOUT,
                dates=None,
                solve_time_ms=_elapsed_ms(started),
                stats=stats,
                domain_sizes=sizes,
            )

        status = SolverStatus.FEASIBLE if result is not None else SolverStatus.INFEASIBLE
        logger.info("Scheduled %d meetings: %s", self.meeting_count, status.value)

        return SolverSolution(
            status=status,
            dates=list(result) if result is not None else None,
            solve_time_ms=_elapsed_ms(started),
            stats=stats,
            domain_sizes=sizes,
        )

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def get_statistics(self) -> dict[str, Any]:
        """Get problem statistics."""
        return {
            "num_meetings": self.meeting_count,
            "range_start": self.range_start.isoformat(),
            "range_end": self.range_end.isoformat(),
            "num_days": max((self.range_end - self.range_start).days + 1, 0),
            "num_constraints": len(self.constraints),
            "num_unary": len(unary_constraints(self.constraints)),
            "num_binary": len(binary_constraints(self.constraints)),
            "domain_sizes": domain_sizes(self.variables),
            "variables_created": self._variables_created,
            "pruned": self._pruned,
        }


# =============================================================================
# Functional API
# =============================================================================

def solve(
    meeting_count: int,
    range_start: date,
    range_end: date,
    constraints: Iterable[DateConstraint],
) -> Optional[list[date]]:
    """
    Schedule meetings within a date range.

    Args:
        meeting_count: Number of meetings, indexed 0 to meeting_count - 1
        range_start: First allowable date for every meeting (inclusive)
        range_end: Last allowable date for every meeting (inclusive)
        constraints: Unary and binary date constraints

    Returns:
        One date per meeting, indexed by meeting, or None if no
        assignment satisfies every constraint

    Raises:
        ProblemValidationError: If the problem is malformed
    """
    solution = MeetingScheduler(meeting_count, range_start, range_end, constraints).solve()
    return solution.dates


def verify_solution(
    dates: Sequence[date],
    constraints: Iterable[DateConstraint],
    meeting_count: Optional[int] = None,
) -> list[DateConstraint]:
    """
    Find the constraints a complete assignment violates.

    Args:
        dates: One date per meeting
        constraints: Constraints to check
        meeting_count: Expected number of dates, if known

    Returns:
        Violated constraints; empty when the assignment is sound

    Raises:
        ProblemValidationError: If the assignment has the wrong length or
            a constraint references a meeting with no date
    """
    if meeting_count is not None and len(dates) != meeting_count:
        raise ProblemValidationError(
            f"Expected {meeting_count} dates, got {len(dates)}"
        )

    violated = []
    for constraint in constraints:
        if any(not 0 <= index < len(dates) for index in constraint.meetings):
            raise ProblemValidationError(
                f"Constraint {constraint} references a meeting outside the assignment"
            )
        if not constraint.is_satisfied(dates):
            violated.append(constraint)
    return violated


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
