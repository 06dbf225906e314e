"""Tests for the schedule output schema."""

from __future__ import annotations

import json
from datetime import date

import pytest
from pydantic import ValidationError

from datecsp.output.schema import (
    MeetingOutput,
    OutputStatus,
    ScheduleOutput,
    create_schedule_output,
    solution_to_dict,
    solution_to_json,
)
from datecsp.scheduler import SolverSolution, SolverStatus
from datecsp.search import SearchStats


@pytest.fixture
def feasible_solution() -> SolverSolution:
    return SolverSolution(
        status=SolverStatus.FEASIBLE,
        dates=[date(2024, 1, 2), date(2024, 1, 1), date(2024, 1, 2)],
        solve_time_ms=1500,
        stats=SearchStats(nodes=7, rejections=3, backtracks=1, max_depth=3),
        domain_sizes=[3, 3, 2],
    )


@pytest.fixture
def infeasible_solution() -> SolverSolution:
    return SolverSolution(
        status=SolverStatus.INFEASIBLE,
        dates=None,
        solve_time_ms=10,
    )


class TestMeetingOutput:
    """Tests for MeetingOutput."""

    def test_from_date(self):
        m = MeetingOutput.from_date(0, date(2024, 1, 1))
        assert m.date == "2024-01-01"
        assert m.weekday == "Monday"


class TestCreateScheduleOutput:
    """Tests for converting a SolverSolution."""

    def test_feasible(self, feasible_solution):
        output = create_schedule_output(feasible_solution)
        assert output.status == OutputStatus.FEASIBLE
        assert output.solve_time_seconds == 1.5
        assert [m.meeting for m in output.meetings] == [0, 1, 2]
        assert output.by_date == {"2024-01-01": [1], "2024-01-02": [0, 2]}
        assert output.stats.nodes == 7
        assert output.stats.max_depth == 3
        assert output.stats.domain_sizes == [3, 3, 2]

    def test_infeasible(self, infeasible_solution):
        output = create_schedule_output(infeasible_solution)
        assert output.status == OutputStatus.INFEASIBLE
        assert output.meetings == []
        assert output.dates() is None

    def test_timeout(self):
        solution = SolverSolution(status=SolverStatus.TIMEOUT, dates=None, solve_time_ms=0)
        assert create_schedule_output(solution).status == OutputStatus.TIMEOUT

    def test_dates_in_meeting_order(self, feasible_solution):
        output = create_schedule_output(feasible_solution)
        assert output.dates() == feasible_solution.dates


class TestSerialization:
    """Tests for JSON output."""

    def test_json_uses_camel_case(self, feasible_solution):
        data = json.loads(solution_to_json(feasible_solution))
        assert data["status"] == "feasible"
        assert data["solveTimeSeconds"] == 1.5
        assert data["byDate"]["2024-01-02"] == [0, 2]
        assert data["stats"]["maxDepth"] == 3
        assert data["stats"]["domainSizes"] == [3, 3, 2]
        assert data["meetings"][1] == {"meeting": 1, "date": "2024-01-01", "weekday": "Monday"}

    def test_to_dict(self, feasible_solution):
        data = solution_to_dict(feasible_solution)
        assert data["status"] == OutputStatus.FEASIBLE
        assert len(data["meetings"]) == 3

    def test_reload(self, feasible_solution):
        text = solution_to_json(feasible_solution)
        output = ScheduleOutput.model_validate(json.loads(text))
        assert output.dates() == feasible_solution.dates

    @pytest.mark.parametrize("numbers", [[0, 0], [1, 2], [0, 2]])
    def test_rejects_duplicate_or_missing_meetings(self, numbers):
        data = {
            "status": "feasible",
            "solveTimeSeconds": 0.0,
            "meetings": [
                {"meeting": n, "date": "2024-01-01", "weekday": "Monday"} for n in numbers
            ],
        }
        with pytest.raises(ValidationError, match="exactly once"):
            ScheduleOutput.model_validate(data)
