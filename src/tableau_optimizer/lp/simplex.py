import logging
from typing import List, Optional, Protocol, Tuple, runtime_checkable

from ..exceptions import IterationLimitError, NoConstraintsError, UnboundedObjectiveError
from ..schemas import Constraint, LPProblem, LPResult, Objective, SolveOptions
from .tableau import Tableau
from .utils import VariableIndex, validate_constraint, validate_objective

logger = logging.getLogger(__name__)


@runtime_checkable
class LPSolver(Protocol):
    """Accumulates <= constraints and maximizes objectives against them."""

    def add_constraint(self, constraint: Constraint) -> Constraint: ...

    def maximize(self, objective: Objective) -> LPResult: ...


class SimplexLPSolver:
    """
    Tableau simplex for problems of the form

        maximize   a1*x1 + a2*x2 + ... + an*xn
        subject to c11*x1 + ... + c1n*xn <= b1
                   ...
                   cm1*x1 + ... + cmn*xn <= bm
                   x >= 0, b >= 0

    Constraints are accumulated with ``add_constraint``; each one gets a slack
    variable ``S<k>`` where ``k`` is its position. ``maximize`` can be called
    any number of times against the constraints added so far.
    """

    def __init__(self, options: Optional[SolveOptions] = None) -> None:
        self.options = options or SolveOptions()
        self._index = VariableIndex()
        self._constraints: List[Constraint] = []

    @property
    def constraints(self) -> Tuple[Constraint, ...]:
        """Accumulated constraints, each carrying its slack term."""
        return tuple(self._constraints)

    @property
    def total_variable_count(self) -> int:
        return self._index.total_count

    @property
    def slack_count(self) -> int:
        return self._index.slack_count

    def add_constraint(self, constraint: Constraint) -> Constraint:
        validate_constraint(constraint)
        with_slack = constraint.with_slack(self._index.next_slack_label())
        self._index.register(with_slack)
        self._constraints.append(with_slack)
        return with_slack

    def maximize(self, objective: Objective) -> LPResult:
        validate_objective(objective)
        if not self._constraints:
            raise NoConstraintsError("Add at least one constraint before calling maximize.")

        for term in objective.terms:
            if term.coef > 0 and not self._index.contains(term.var):
                raise UnboundedObjectiveError(
                    f"Objective variable '{term.var}' appears in no constraint.",
                    entering=term.var,
                )

        snapshot = self._index.snapshot(self._constraints)
        logger.info(
            "maximize: %d constraints, %d decision variables",
            snapshot.basic_count,
            snapshot.non_basic_count,
        )

        tableau = Tableau.from_snapshot(snapshot, objective)
        while not tableau.is_optimal():
            if tableau.iterations >= self.options.max_iters:
                raise IterationLimitError(
                    f"No optimum after {tableau.iterations} pivots.",
                    iterations=tableau.iterations,
                )
            tableau.pivot()

        result = tableau.result()
        logger.info(
            "maximize: optimum %.6g after %d pivots", result.objective_value, result.iterations
        )
        return result


def simplex_solve(problem: LPProblem, opts: Optional[SolveOptions] = None) -> LPResult:
    """Solve a whole ``LPProblem`` in one call."""

    solver = SimplexLPSolver(opts)
    for constraint in problem.constraints:
        solver.add_constraint(constraint)
    return solver.maximize(problem.objective)
