"""
Output schema for solved schedules.

Defines the JSON format written by the solver, including a by-date view
listing which meetings fall on each day.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from ..config import DAY_NAMES
from ..scheduler import SolverSolution, SolverStatus


# =============================================================================
# Enums
# =============================================================================

class OutputStatus(str, Enum):
    """Solution status for output."""
    FEASIBLE = "feasible"
    INFEASIBLE = "infeasible"
    TIMEOUT = "timeout"


# =============================================================================
# Meeting Output
# =============================================================================

class MeetingOutput(BaseModel):
    """The date assigned to one meeting."""
    meeting: int
    date: str  # 'YYYY-MM-DD'
    weekday: str

    @classmethod
    def from_date(cls, meeting: int, value: date) -> MeetingOutput:
        return cls(
            meeting=meeting,
            date=value.isoformat(),
            weekday=DAY_NAMES[value.weekday()],
        )


# =============================================================================
# Search Metrics
# =============================================================================

class SearchMetrics(BaseModel):
    """Counters reported by the search."""
    nodes: int = 0
    rejections: int = 0
    backtracks: int = 0
    max_depth: int = Field(default=0, alias="maxDepth")
    domain_sizes: list[int] = Field(default_factory=list, alias="domainSizes")

    model_config = {"populate_by_name": True}


# =============================================================================
# Complete Output
# =============================================================================

class ScheduleOutput(BaseModel):
    """Complete output for one scheduling run."""
    status: OutputStatus
    solve_time_seconds: float = Field(alias="solveTimeSeconds")
    meetings: list[MeetingOutput] = Field(default_factory=list)
    by_date: dict[str, list[int]] = Field(default_factory=dict, alias="byDate")
    stats: SearchMetrics = Field(default_factory=SearchMetrics)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_meeting_numbers(self) -> ScheduleOutput:
        """Meetings must be numbered 0..N-1, each exactly once."""
        numbers = sorted(m.meeting for m in self.meetings)
        if numbers != list(range(len(numbers))):
            raise ValueError(
                f"Meetings must be numbered 0..{len(numbers) - 1} exactly once, got {numbers}"
            )
        return self

    @property
    def is_feasible(self) -> bool:
        return self.status == OutputStatus.FEASIBLE

    def dates(self) -> Optional[list[date]]:
        """Assigned dates in meeting order, or None without a solution."""
        if not self.is_feasible:
            return None
        ordered = sorted(self.meetings, key=lambda m: m.meeting)
        return [date.fromisoformat(m.date) for m in ordered]

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(by_alias=True)


# =============================================================================
# Conversion Functions
# =============================================================================

def _status_to_output(status: SolverStatus) -> OutputStatus:
    """Convert SolverStatus to OutputStatus."""
    mapping = {
        SolverStatus.FEASIBLE: OutputStatus.FEASIBLE,
        SolverStatus.INFEASIBLE: OutputStatus.INFEASIBLE,
        SolverStatus.TIMEOUT: OutputStatus.TIMEOUT,
    }
    return mapping[status]


def create_schedule_output(solution: SolverSolution) -> ScheduleOutput:
    """
    Create a ScheduleOutput from a SolverSolution.

    Args:
        solution: The solver solution

    Returns:
        ScheduleOutput with meetings and the by-date view populated
    """
    meetings = [
        MeetingOutput.from_date(index, value)
        for index, value in enumerate(solution.dates or [])
    ]

    by_date: dict[str, list[int]] = {}
    for m in sorted(meetings, key=lambda m: (m.date, m.meeting)):
        by_date.setdefault(m.date, []).append(m.meeting)

    stats = SearchMetrics(
        nodes=solution.stats.nodes,
        rejections=solution.stats.rejections,
        backtracks=solution.stats.backtracks,
        maxDepth=solution.stats.max_depth,
        domainSizes=solution.domain_sizes,
    )

    return ScheduleOutput(
        status=_status_to_output(solution.status),
        solveTimeSeconds=solution.solve_time_ms / 1000.0,
        meetings=meetings,
        byDate=by_date,
        stats=stats,
    )


def solution_to_json(solution: SolverSolution, indent: int = 2) -> str:
    """Convert a SolverSolution directly to JSON string."""
    return create_schedule_output(solution).to_json(indent=indent)


def solution_to_dict(solution: SolverSolution) -> dict[str, Any]:
    """Convert a SolverSolution directly to dictionary."""
    return create_schedule_output(solution).to_dict()
