"""Tests for date constraints and the operator evaluator."""

from __future__ import annotations

from datetime import date

import pytest

from datecsp.constraints import (
    BinaryDateConstraint,
    Operator,
    UnaryDateConstraint,
    binary_constraints,
    evaluate,
    unary_constraints,
)
from datecsp.validation import ProblemValidationError


JAN_1 = date(2024, 1, 1)
JAN_2 = date(2024, 1, 2)


class TestEvaluate:
    """Tests for comparing two dates."""

    @pytest.mark.parametrize("op,expected", [
        ("==", False),
        ("!=", True),
        ("<", True),
        (">", False),
        ("<=", True),
        (">=", False),
    ])
    def test_earlier_left(self, op, expected):
        assert evaluate(JAN_1, JAN_2, op) is expected

    @pytest.mark.parametrize("op,expected", [
        ("==", True),
        ("!=", False),
        ("<", False),
        (">", False),
        ("<=", True),
        (">=", True),
    ])
    def test_same_date(self, op, expected):
        assert evaluate(JAN_2, JAN_2, op) is expected

    def test_later_left(self):
        assert evaluate(JAN_2, JAN_1, Operator.GT)
        assert evaluate(JAN_2, JAN_1, Operator.GE)
        assert not evaluate(JAN_2, JAN_1, Operator.LE)

    def test_across_year_boundary(self):
        assert evaluate(date(2023, 12, 31), date(2024, 1, 1), "<")

    def test_unknown_operator(self):
        with pytest.raises(ProblemValidationError, match="Unrecognized operator"):
            evaluate(JAN_1, JAN_2, "=>")


class TestOperator:
    """Tests for operator parsing."""

    def test_parse_string(self):
        assert Operator.parse("<=") is Operator.LE

    def test_parse_operator(self):
        assert Operator.parse(Operator.NE) is Operator.NE

    def test_parse_invalid(self):
        with pytest.raises(ProblemValidationError, match="expected one of"):
            Operator.parse("<>")

    def test_str(self):
        assert str(Operator.GE) == ">="


class TestUnaryDateConstraint:
    """Tests for meeting-vs-fixed-date constraints."""

    def test_operator_is_coerced(self):
        c = UnaryDateConstraint(meeting=0, op="<", value=JAN_2)
        assert c.op is Operator.LT

    def test_invalid_operator_rejected(self):
        with pytest.raises(ProblemValidationError):
            UnaryDateConstraint(meeting=0, op="~", value=JAN_2)

    def test_arity_and_meetings(self):
        c = UnaryDateConstraint(meeting=3, op="==", value=JAN_1)
        assert c.arity == 1
        assert c.meetings == (3,)

    def test_resolve(self):
        c = UnaryDateConstraint(meeting=1, op="==", value=JAN_1)
        assert c.resolve([None, JAN_2]) == (JAN_2, JAN_1)

    def test_unassigned_is_satisfied(self):
        c = UnaryDateConstraint(meeting=0, op="==", value=JAN_1)
        assert c.is_satisfied([None])

    def test_assigned_is_checked(self):
        c = UnaryDateConstraint(meeting=0, op="==", value=JAN_1)
        assert c.is_satisfied([JAN_1])
        assert not c.is_satisfied([JAN_2])

    def test_hashable_and_equal(self):
        a = UnaryDateConstraint(meeting=0, op="<", value=JAN_2)
        b = UnaryDateConstraint(meeting=0, op=Operator.LT, value=JAN_2)
        assert a == b
        assert len({a, b}) == 1

    def test_immutable(self):
        c = UnaryDateConstraint(meeting=0, op="<", value=JAN_2)
        with pytest.raises(AttributeError):
            c.meeting = 1

    def test_str(self):
        c = UnaryDateConstraint(meeting=0, op="<=", value=JAN_2)
        assert str(c) == "meeting0 <= 2024-01-02"


class TestBinaryDateConstraint:
    """Tests for meeting-vs-meeting constraints."""

    def test_arity_and_meetings(self):
        c = BinaryDateConstraint(meeting=0, op="<", other=2)
        assert c.arity == 2
        assert c.meetings == (0, 2)

    def test_resolve(self):
        c = BinaryDateConstraint(meeting=1, op="<", other=0)
        assert c.resolve([JAN_1, JAN_2]) == (JAN_2, JAN_1)

    def test_skipped_until_both_assigned(self):
        c = BinaryDateConstraint(meeting=0, op="<", other=1)
        assert c.is_satisfied([None, None])
        assert c.is_satisfied([JAN_2, None])
        assert c.is_satisfied([None, JAN_1])

    def test_checked_once_both_assigned(self):
        c = BinaryDateConstraint(meeting=0, op="<", other=1)
        assert c.is_satisfied([JAN_1, JAN_2])
        assert not c.is_satisfied([JAN_2, JAN_1])

    def test_str(self):
        c = BinaryDateConstraint(meeting=0, op="!=", other=1)
        assert str(c) == "meeting0 != meeting1"


class TestFiltering:
    """Tests for splitting constraint sets by arity."""

    def test_split(self):
        u = UnaryDateConstraint(meeting=0, op="<", value=JAN_2)
        b = BinaryDateConstraint(meeting=0, op="<", other=1)
        assert unary_constraints([u, b]) == [u]
        assert binary_constraints([u, b]) == [b]
