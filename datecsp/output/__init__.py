"""Solution output formatting."""

from .schema import (
    OutputStatus,
    MeetingOutput,
    SearchMetrics,
    ScheduleOutput,
    create_schedule_output,
    solution_to_json,
    solution_to_dict,
)

__all__ = [
    "OutputStatus",
    "MeetingOutput",
    "SearchMetrics",
    "ScheduleOutput",
    "create_schedule_output",
    "solution_to_json",
    "solution_to_dict",
]
