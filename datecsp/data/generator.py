"""
Random problem generator for testing the meeting scheduler.

Usage:
    from datecsp.data.generator import generate_problem, GeneratorConfig

    # Guaranteed solvable: constraints are drawn to agree with a hidden plan
    problem = generate_problem(GeneratorConfig(num_meetings=6, seed=1))

    # Arbitrary constraints, may have no solution
    problem = generate_problem(GeneratorConfig(satisfiable=False, seed=2))
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..config import (
    DEFAULT_NUM_BINARY,
    DEFAULT_NUM_DAYS,
    DEFAULT_NUM_MEETINGS,
    DEFAULT_NUM_UNARY,
)
from ..constraints import Operator, evaluate
from .models import ConstraintSpec, ProblemInput


@dataclass
class GeneratorConfig:
    """Configuration for problem generation."""
    num_meetings: int = DEFAULT_NUM_MEETINGS
    num_days: int = DEFAULT_NUM_DAYS
    num_unary: int = DEFAULT_NUM_UNARY
    num_binary: int = DEFAULT_NUM_BINARY
    range_start: date = date(2024, 1, 1)

    # Draw constraints that hold for a hidden reference schedule
    satisfiable: bool = True

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.num_meetings < 0:
            raise ValueError("num_meetings must be non-negative")
        if self.num_days < 1:
            raise ValueError("num_days must be at least 1")
        if self.num_binary > 0 and self.num_meetings < 2:
            raise ValueError("binary constraints need at least two meetings")
        if self.num_unary > 0 and self.num_meetings < 1:
            raise ValueError("unary constraints need at least one meeting")

    @property
    def range_end(self) -> date:
        return self.range_start + timedelta(days=self.num_days - 1)


def generate_problem(config: GeneratorConfig | None = None) -> ProblemInput:
    """
    Generate a problem from the given configuration.

    With config.satisfiable set, a reference schedule is drawn first and
    each constraint is sampled until it holds for that schedule, so at
    least one solution always exists.
    """
    config = config or GeneratorConfig()
    rng = random.Random(config.seed)

    reference = _draw_reference(rng, config)

    specs: list[ConstraintSpec] = []
    for _ in range(config.num_unary):
        specs.append(_draw_unary(rng, config, reference))
    for _ in range(config.num_binary):
        specs.append(_draw_binary(rng, config, reference))

    return ProblemInput(
        meeting_count=config.num_meetings,
        range_start=config.range_start,
        range_end=config.range_end,
        constraints=specs,
    )


def generate_reference_schedule(config: GeneratorConfig) -> list[date]:
    """The hidden schedule a satisfiable problem is built around."""
    return _draw_reference(random.Random(config.seed), config)


def _draw_reference(rng: random.Random, config: GeneratorConfig) -> list[date]:
    return [
        config.range_start + timedelta(days=rng.randrange(config.num_days))
        for _ in range(config.num_meetings)
    ]


def _draw_unary(rng: random.Random, config: GeneratorConfig, reference: list[date]) -> ConstraintSpec:
    while True:
        meeting = rng.randrange(config.num_meetings)
        op = rng.choice(list(Operator))
        value = config.range_start + timedelta(days=rng.randrange(config.num_days))
        if not config.satisfiable or evaluate(reference[meeting], value, op):
            return ConstraintSpec(meeting=meeting, op=op, value=value)


def _draw_binary(rng: random.Random, config: GeneratorConfig, reference: list[date]) -> ConstraintSpec:
    while True:
        meeting, other = rng.sample(range(config.num_meetings), 2)
        op = rng.choice(list(Operator))
        if not config.satisfiable or evaluate(reference[meeting], reference[other], op):
            return ConstraintSpec(meeting=meeting, op=op, other=other)


def get_generation_stats(problem: ProblemInput) -> dict:
    """Get statistics about a generated problem."""
    stats = problem.summary()
    by_operator: dict[str, int] = {}
    for spec in problem.constraints:
        by_operator[spec.op.value] = by_operator.get(spec.op.value, 0) + 1
    stats["by_operator"] = by_operator
    return stats
