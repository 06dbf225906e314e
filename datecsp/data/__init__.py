"""Problem input models, JSON loading and generation."""

from .models import (
    ConstraintSpec,
    SolverConfig,
    ProblemInput,
    load_problem_from_json,
    problem_to_dict,
    save_problem,
)
from .generator import (
    GeneratorConfig,
    generate_problem,
    generate_reference_schedule,
    get_generation_stats,
)

__all__ = [
    # Models
    "ConstraintSpec",
    "SolverConfig",
    "ProblemInput",
    "load_problem_from_json",
    "problem_to_dict",
    "save_problem",
    # Generator
    "GeneratorConfig",
    "generate_problem",
    "generate_reference_schedule",
    "get_generation_stats",
]
