"""
Pydantic models for meeting scheduling problems.

A problem file looks like:

    {
      "meetingCount": 2,
      "rangeStart": "2024-01-01",
      "rangeEnd": "2024-01-03",
      "constraints": [
        {"meeting": 0, "op": "<", "other": 1},
        {"meeting": 1, "op": "!=", "date": "2024-01-02"}
      ],
      "config": {"timeLimitSeconds": 10}
    }

An entry with "date" is a unary constraint, one with "other" is binary.
Keys may be camelCase or snake_case.
"""

from __future__ import annotations

import json
import re
from datetime import date
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)

from ..constraints import (
    BinaryDateConstraint,
    DateConstraint,
    Operator,
    UnaryDateConstraint,
)
from ..validation import validate_problem


# =============================================================================
# Constraint Specs
# =============================================================================

class ConstraintSpec(BaseModel):
    """A constraint as written in a problem file."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    meeting: int = Field(ge=0, description="Left meeting index")
    op: Operator = Field(description="Comparison operator")
    value: Optional[date] = Field(default=None, alias="date", description="Fixed date (unary)")
    other: Optional[int] = Field(default=None, ge=0, description="Right meeting index (binary)")

    @model_validator(mode="after")
    def validate_operand(self) -> "ConstraintSpec":
        """Exactly one right operand must be given."""
        if (self.value is None) == (self.other is None):
            raise ValueError(
                f"Constraint on meeting {self.meeting} needs exactly one of 'date' or 'other'"
            )
        return self

    @property
    def is_unary(self) -> bool:
        return self.value is not None

    def to_constraint(self) -> DateConstraint:
        """Convert to the solver's constraint type."""
        if self.value is not None:
            return UnaryDateConstraint(meeting=self.meeting, op=self.op, value=self.value)
        return BinaryDateConstraint(meeting=self.meeting, op=self.op, other=self.other)

    @classmethod
    def from_constraint(cls, constraint: DateConstraint) -> ConstraintSpec:
        if constraint.arity == 1:
            return cls(meeting=constraint.meeting, op=constraint.op, value=constraint.value)
        return cls(meeting=constraint.meeting, op=constraint.op, other=constraint.other)

    def __str__(self) -> str:
        return str(self.to_constraint())


# =============================================================================
# Problem Input
# =============================================================================

class SolverConfig(BaseModel):
    """Solver settings carried in the problem file."""
    model_config = ConfigDict(extra="forbid")

    time_limit_seconds: Optional[float] = Field(
        default=None, gt=0, description="Wall-clock limit for the search"
    )


class ProblemInput(BaseModel):
    """
    Complete scheduling problem.

    Validates that the range is ordered and that every constraint refers
    to an existing meeting.
    """
    model_config = ConfigDict(extra="forbid")

    meeting_count: int = Field(ge=0, description="Number of meetings")
    range_start: date = Field(description="First allowable date (inclusive)")
    range_end: date = Field(description="Last allowable date (inclusive)")
    constraints: list[ConstraintSpec] = Field(default_factory=list)
    config: SolverConfig = Field(default_factory=SolverConfig)

    @model_validator(mode="after")
    def validate_problem_definition(self) -> "ProblemInput":
        validate_problem(
            self.meeting_count,
            self.range_start,
            self.range_end,
            self.to_constraints(),
        )
        return self

    def to_constraints(self) -> list[DateConstraint]:
        """Convert every spec to the solver's constraint type."""
        return [spec.to_constraint() for spec in self.constraints]

    @property
    def num_days(self) -> int:
        return (self.range_end - self.range_start).days + 1

    def summary(self) -> dict[str, Any]:
        """Get a summary of the problem."""
        unary = sum(1 for c in self.constraints if c.is_unary)
        return {
            "meetings": self.meeting_count,
            "range_start": self.range_start.isoformat(),
            "range_end": self.range_end.isoformat(),
            "days": self.num_days,
            "constraints": len(self.constraints),
            "unary_constraints": unary,
            "binary_constraints": len(self.constraints) - unary,
        }


# =============================================================================
# JSON Helpers
# =============================================================================

def load_problem_from_json(path: Union[str, Path]) -> ProblemInput:
    """
    Load and validate a problem from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Validated ProblemInput model

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If invalid JSON
        pydantic.ValidationError: If validation fails
    """
    with open(Path(path)) as f:
        data = json.load(f)

    return ProblemInput.model_validate(_convert_keys_to_snake_case(data))


def problem_to_dict(problem: ProblemInput) -> dict:
    """Convert a problem to the camelCase JSON layout."""
    data: dict[str, Any] = {
        "meetingCount": problem.meeting_count,
        "rangeStart": problem.range_start.isoformat(),
        "rangeEnd": problem.range_end.isoformat(),
        "constraints": [
            spec.model_dump(mode="json", by_alias=True, exclude_none=True)
            for spec in problem.constraints
        ],
    }
    if problem.config.time_limit_seconds is not None:
        data["config"] = {"timeLimitSeconds": problem.config.time_limit_seconds}
    return data


def save_problem(problem: ProblemInput, path: Union[str, Path]) -> None:
    """Write a problem to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(problem_to_dict(problem), f, indent=2)


def _convert_keys_to_snake_case(obj: Any) -> Any:
    """Recursively convert dictionary keys from camelCase to snake_case."""

    def to_snake_case(name: str) -> str:
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
        return name.lower()

    if isinstance(obj, dict):
        return {to_snake_case(k): _convert_keys_to_snake_case(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_keys_to_snake_case(item) for item in obj]
    else:
        return obj
