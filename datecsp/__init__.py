"""Meeting date scheduler - backtracking CSP over calendar dates."""

from .constraints import (
    Operator,
    UnaryDateConstraint,
    BinaryDateConstraint,
    DateConstraint,
    evaluate,
)
from .domain import MeetingVariable, build_domain, prune
from .scheduler import (
    MeetingScheduler,
    SolverSolution,
    SolverStatus,
    solve,
    verify_solution,
)
from .search import SearchStats, backtrack, check_consistency
from .validation import ProblemValidationError

__all__ = [
    # Constraints
    "Operator",
    "UnaryDateConstraint",
    "BinaryDateConstraint",
    "DateConstraint",
    "evaluate",
    # Domains and search
    "MeetingVariable",
    "build_domain",
    "prune",
    "SearchStats",
    "backtrack",
    "check_consistency",
    # Entry points
    "MeetingScheduler",
    "SolverSolution",
    "SolverStatus",
    "solve",
    "verify_solution",
    "ProblemValidationError",
]
