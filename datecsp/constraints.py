"""
Date constraints between meetings.

A constraint compares the date of one meeting (the left operand) against
either a fixed date (unary) or the date of another meeting (binary):

    UnaryDateConstraint(meeting=0, op="<=", value=date(2024, 1, 5))
    BinaryDateConstraint(meeting=0, op="<", other=1)

Both variants share the same evaluator; arity only decides how the right
operand is resolved.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, ClassVar, Optional, Sequence, Union

from .validation import ProblemValidationError


# Dates indexed by meeting; None marks an unassigned meeting
Dates = Sequence[Optional[date]]


# =============================================================================
# Operators
# =============================================================================

class Operator(str, Enum):
    """Comparison operator between two dates."""
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="

    @classmethod
    def parse(cls, value: Union[str, Operator]) -> Operator:
        """Coerce a string such as '<=' to an Operator."""
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(op.value for op in cls)
            raise ProblemValidationError(
                f"Unrecognized operator {value!r} (expected one of: {valid})"
            ) from None

    def __str__(self) -> str:
        return self.value


_COMPARATORS: dict[Operator, Callable[[date, date], bool]] = {
    Operator.EQ: operator.eq,
    Operator.NE: operator.ne,
    Operator.LT: operator.lt,
    Operator.GT: operator.gt,
    Operator.LE: operator.le,
    Operator.GE: operator.ge,
}


def evaluate(left: date, right: date, op: Union[str, Operator]) -> bool:
    """
    Compare two dates with the given operator.

    Args:
        left: Date on the left side of the operator
        right: Date on the right side of the operator
        op: One of ==, !=, <, >, <=, >=

    Returns:
        True if `left op right` holds in calendar order

    Raises:
        ProblemValidationError: If the operator is not recognized

    Example:
        >>> evaluate(date(2024, 1, 1), date(2024, 1, 2), "<")
        True
    """
    comparator = _COMPARATORS.get(op)
    if comparator is None:
        comparator = _COMPARATORS[Operator.parse(op)]
    return comparator(left, right)


# =============================================================================
# Constraint Variants
# =============================================================================

@dataclass(frozen=True)
class UnaryDateConstraint:
    """A meeting's date compared against a fixed date."""
    meeting: int
    op: Operator
    value: date

    arity: ClassVar[int] = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", Operator.parse(self.op))

    @property
    def meetings(self) -> tuple[int, ...]:
        return (self.meeting,)

    def resolve(self, dates: Dates) -> tuple[Optional[date], Optional[date]]:
        """Return (left, right) dates; left is None while unassigned."""
        return dates[self.meeting], self.value

    def is_satisfied(self, dates: Dates) -> bool:
        left, right = self.resolve(dates)
        if left is None:
            return True
        return evaluate(left, right, self.op)

    def __str__(self) -> str:
        return f"meeting{self.meeting} {self.op} {self.value}"


@dataclass(frozen=True)
class BinaryDateConstraint:
    """A meeting's date compared against another meeting's date."""
    meeting: int
    op: Operator
    other: int

    arity: ClassVar[int] = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", Operator.parse(self.op))

    @property
    def meetings(self) -> tuple[int, ...]:
        return (self.meeting, self.other)

    def resolve(self, dates: Dates) -> tuple[Optional[date], Optional[date]]:
        """Return (left, right) dates; either is None while unassigned."""
        return dates[self.meeting], dates[self.other]

    def is_satisfied(self, dates: Dates) -> bool:
        left, right = self.resolve(dates)
        if left is None or right is None:
            return True
        return evaluate(left, right, self.op)

    def __str__(self) -> str:
        return f"meeting{self.meeting} {self.op} meeting{self.other}"


DateConstraint = Union[UnaryDateConstraint, BinaryDateConstraint]


def unary_constraints(constraints: Sequence[DateConstraint]) -> list[UnaryDateConstraint]:
    """Get the constraints that compare a meeting against a fixed date."""
    return [c for c in constraints if c.arity == 1]


def binary_constraints(constraints: Sequence[DateConstraint]) -> list[BinaryDateConstraint]:
    """Get the constraints that compare two meetings."""
    return [c for c in constraints if c.arity == 2]
