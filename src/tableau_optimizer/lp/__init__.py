"""Tableau simplex for canonical maximisation problems."""

from .simplex import LPSolver, SimplexLPSolver, simplex_solve
from .tableau import Tableau
from .parser import parse_problem

__all__ = ["LPSolver", "SimplexLPSolver", "simplex_solve", "Tableau", "parse_problem"]
