"""Errors raised by the tableau optimizer."""

from __future__ import annotations

from typing import Optional


class LPError(Exception):
    """Base class for every solver failure.

    Catch this to handle any outcome of ``maximize`` that is not an optimum.
    ``status`` is the short machine-readable tag the server reports.
    """

    status = "error"


class MalformedProblemError(LPError):
    """Raised when a problem is not in canonical ``<=`` form.

    This includes:
    - A negative right-hand side (the all-slack basis would be infeasible)
    - A non-finite coefficient or bound
    - The same label appearing twice in one expression
    - A decision variable named like a slack variable (``S0``, ``S1``, ...)
    """

    status = "malformed"


class UnboundedObjectiveError(LPError):
    """Raised when the objective can grow without limit.

    Detected during the ratio test when no row has a positive entry in the
    entering column, or up front when an objective variable with a positive
    weight appears in no constraint.
    """

    status = "unbounded"

    def __init__(self, message: str, entering: Optional[str] = None, iterations: int = 0):
        super().__init__(message)
        self.entering = entering
        self.iterations = iterations


class NoConstraintsError(LPError):
    """Raised when ``maximize`` is called before any constraint was added."""

    status = "no_constraints"


class IterationLimitError(LPError):
    """Raised when the pivot loop hits ``SolveOptions.max_iters``."""

    status = "iteration_limit"

    def __init__(self, message: str, iterations: int = 0):
        super().__init__(message)
        self.iterations = iterations
