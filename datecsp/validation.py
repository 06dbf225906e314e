"""Validate a scheduling problem before any domain is built."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .constraints import DateConstraint


class ProblemValidationError(ValueError):
    """Raised when a problem definition is malformed."""
    pass


def validate_problem(
    meeting_count: int,
    range_start: date,
    range_end: date,
    constraints: Iterable[DateConstraint],
) -> None:
    """
    Validate meeting count, date range and constraint references.

    All problems are collected and reported together.

    Args:
        meeting_count: Number of meetings to schedule
        range_start: First allowable date (inclusive)
        range_end: Last allowable date (inclusive)
        constraints: Constraints referencing meetings by index

    Raises:
        ProblemValidationError: If validation fails
    """
    errors = []

    if isinstance(meeting_count, bool) or not isinstance(meeting_count, int):
        raise ProblemValidationError(
            f"Meeting count must be an integer, got {meeting_count!r}"
        )
    if meeting_count < 0:
        errors.append(f"Meeting count must be non-negative, got {meeting_count}")

    for name, value in (("range_start", range_start), ("range_end", range_end)):
        if not _is_calendar_date(value):
            errors.append(f"{name} must be a date, got {value!r}")

    if errors:
        raise ProblemValidationError("; ".join(errors))

    if range_start > range_end:
        errors.append(
            f"range_start ({range_start.isoformat()}) is after "
            f"range_end ({range_end.isoformat()})"
        )

    for constraint in constraints:
        for index in constraint.meetings:
            if isinstance(index, bool) or not isinstance(index, int):
                errors.append(f"Constraint {constraint} has non-integer meeting index {index!r}")
            elif not 0 <= index < meeting_count:
                errors.append(
                    f"Constraint {constraint} references unknown meeting {index} "
                    f"(meeting count is {meeting_count})"
                )

        if constraint.arity == 1 and not _is_calendar_date(constraint.value):
            errors.append(f"Constraint {constraint} needs a date value, got {constraint.value!r}")

        if constraint.arity == 2 and constraint.meeting == constraint.other:
            errors.append(f"Constraint {constraint} compares meeting {constraint.meeting} with itself")

    if errors:
        raise ProblemValidationError("; ".join(errors))


def _is_calendar_date(value: object) -> bool:
    # datetime subclasses date but never compares equal to one
    return isinstance(value, date) and not isinstance(value, datetime)
