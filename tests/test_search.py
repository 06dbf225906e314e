"""Tests for the backtracking search."""

from __future__ import annotations

from datetime import date

import pytest

from datecsp.constraints import BinaryDateConstraint, UnaryDateConstraint
from datecsp.domain import MeetingVariable, create_variables
from datecsp.search import (
    Deadline,
    SearchStats,
    SearchTimeout,
    backtrack,
    check_consistency,
    next_unassigned,
)


D1 = date(2024, 1, 1)
D2 = date(2024, 1, 2)
D3 = date(2024, 1, 3)


class FakeClock:
    """Manually advanced clock for deadline tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestCheckConsistency:
    """Tests for the partial-assignment consistency check."""

    def test_unassigned_operand_is_skipped(self):
        variables = (
            MeetingVariable(0, (D1, D2), assignment=D2),
            MeetingVariable(1, (D1, D2)),
        )
        assert check_consistency(variables, [BinaryDateConstraint(0, "<", 1)])

    def test_violated_binary(self):
        variables = (
            MeetingVariable(0, (D1, D2), assignment=D2),
            MeetingVariable(1, (D1, D2), assignment=D1),
        )
        assert not check_consistency(variables, [BinaryDateConstraint(0, "<", 1)])

    def test_unary_checked_on_assigned_meeting(self):
        variables = (MeetingVariable(0, (D1, D2), assignment=D1),)
        assert not check_consistency(variables, [UnaryDateConstraint(0, "!=", D1)])
        assert check_consistency(variables, [UnaryDateConstraint(0, "!=", D2)])

    def test_no_constraints(self):
        assert check_consistency((MeetingVariable(0, (D1,)),), [])


class TestNextUnassigned:
    """Tests for variable selection."""

    def test_lowest_index_first(self):
        variables = (
            MeetingVariable(0, (D1,), assignment=D1),
            MeetingVariable(1, (D1,)),
            MeetingVariable(2, (D1,)),
        )
        assert next_unassigned(variables) == 1

    def test_all_assigned(self):
        variables = (MeetingVariable(0, (D1,), assignment=D1),)
        assert next_unassigned(variables) is None


class TestBacktrack:
    """Tests for the depth-first search."""

    def test_first_solution_in_domain_order(self):
        variables = create_variables(2, D1, D3)
        result = backtrack(variables, [BinaryDateConstraint(0, "<", 1)])
        assert result == (D1, D2)

    def test_no_meetings(self):
        assert backtrack((), []) == ()

    def test_no_solution(self):
        variables = create_variables(2, D1, D1)
        assert backtrack(variables, [BinaryDateConstraint(0, "!=", 1)]) is None

    def test_empty_domain(self):
        variables = (MeetingVariable(0, ()),)
        assert backtrack(variables, []) is None

    def test_does_not_mutate_input(self):
        variables = create_variables(2, D1, D2)
        backtrack(variables, [BinaryDateConstraint(0, ">", 1)])
        assert all(not v.is_assigned for v in variables)

    def test_accepts_generator_of_constraints(self):
        variables = create_variables(2, D1, D2)
        constraints = (c for c in [BinaryDateConstraint(0, ">", 1)])
        assert backtrack(variables, constraints) == (D2, D1)


class TestSearchStats:
    """Tests for the search counters."""

    def test_counts(self):
        variables = create_variables(2, D1, D2)
        stats = SearchStats()
        result = backtrack(variables, [BinaryDateConstraint(0, ">", 1)], stats=stats)

        assert result == (D2, D1)
        # m0=D1 (ok), m1=D1 (x), m1=D2 (x), m0=D2 (ok), m1=D1 (ok)
        assert stats.nodes == 5
        assert stats.rejections == 2
        assert stats.backtracks == 1
        assert stats.max_depth == 2

    def test_to_dict(self):
        stats = SearchStats(nodes=3, rejections=1, backtracks=0, max_depth=2)
        assert stats.to_dict() == {"nodes": 3, "rejections": 1, "backtracks": 0, "max_depth": 2}


class TestDeadline:
    """Tests for the search deadline."""

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            Deadline(0)
        with pytest.raises(ValueError):
            Deadline(-1.5)

    def test_from_seconds_none_means_no_limit(self):
        assert Deadline.from_seconds(None) is None
        assert Deadline.from_seconds(0) is None
        assert isinstance(Deadline.from_seconds(2), Deadline)

    def test_expiry(self):
        clock = FakeClock()
        deadline = Deadline(2.0, clock=clock)
        assert not deadline.expired()
        assert deadline.remaining == 2.0

        clock.now = 2.5
        assert deadline.expired()
        assert deadline.remaining == 0.0
        with pytest.raises(SearchTimeout, match="2.0s"):
            deadline.check()

    def test_search_raises_on_expiry(self):
        clock = FakeClock()
        deadline = Deadline(1.0, clock=clock)
        clock.now = 5.0

        with pytest.raises(SearchTimeout):
            backtrack(create_variables(3, D1, D3), [], deadline=deadline)

    def test_search_finishes_within_deadline(self):
        deadline = Deadline(1.0, clock=FakeClock())
        result = backtrack(create_variables(2, D1, D2), [], deadline=deadline)
        assert result == (D1, D1)
