"""Tableau Optimizer: tableau simplex for canonical maximisation LPs."""

from .exceptions import (
    IterationLimitError,
    LPError,
    MalformedProblemError,
    NoConstraintsError,
    UnboundedObjectiveError,
)
from .schemas import Constraint, LPProblem, LPResult, LPVariable, Objective, SolveOptions, Term
from .lp import LPSolver, SimplexLPSolver, Tableau, parse_problem, simplex_solve

__all__ = [
    "Constraint",
    "IterationLimitError",
    "LPError",
    "LPProblem",
    "LPResult",
    "LPSolver",
    "LPVariable",
    "MalformedProblemError",
    "NoConstraintsError",
    "Objective",
    "SimplexLPSolver",
    "SolveOptions",
    "Tableau",
    "Term",
    "UnboundedObjectiveError",
    "parse_problem",
    "simplex_solve",
]
