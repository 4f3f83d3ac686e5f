"""Dense simplex tableau for ``max c^T x  s.t.  A x <= b, x >= 0``.

For ``maximize 40x + 30y`` subject to ``x + y <= 12`` and ``2x + y <= 16``
the starting tableau is::

            x    y    S0   S1  |  b
    S0      1    1    1    0   |  12
    S1      2    1    0    1   |  16
    cj-zj   40   30   0    0      0

The last cj-zj entry holds the negated objective value.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..exceptions import UnboundedObjectiveError
from ..schemas import Constraint, LPResult, LPVariable, Objective
from .utils import ProblemSnapshot

logger = logging.getLogger(__name__)


class Tableau:
    def __init__(
        self,
        basic_count: int,
        non_basic_count: int,
        basis: Sequence[int],
        objective: Objective,
        labels: Sequence[str],
        constraints: Sequence[Constraint],
    ) -> None:
        if len(basis) != basic_count or len(constraints) != basic_count:
            raise ValueError("Need exactly one basic variable and one constraint per row.")
        if len(labels) != basic_count + non_basic_count:
            raise ValueError("Every column needs a label.")

        self.rows = basic_count
        self.cols = basic_count + non_basic_count
        self._objective = objective
        self._labels = tuple(labels)
        self._basis: List[int] = list(basis)
        self._iterations = 0

        self._matrix = np.zeros((self.rows, self.cols), dtype=float)
        self._constants = np.zeros(self.rows, dtype=float)
        self._reduced_costs = np.zeros(self.cols + 1, dtype=float)

        self._entering: Optional[int] = None
        self._optimal = True
        self._fill(objective, constraints)

    @classmethod
    def from_snapshot(cls, snapshot: ProblemSnapshot, objective: Objective) -> "Tableau":
        return cls(
            snapshot.basic_count,
            snapshot.non_basic_count,
            snapshot.slack_indices,
            objective,
            snapshot.labels,
            snapshot.constraints,
        )

    def _fill(self, objective: Objective, constraints: Sequence[Constraint]) -> None:
        for row, constraint in enumerate(constraints):
            for col, label in enumerate(self._labels):
                self._matrix[row, col] = constraint.coefficient_of(label)
            self._constants[row] = constraint.rhs

        # cj-zj only comes from the objective while every basic variable is a slack
        if self.rows:
            for col, label in enumerate(self._labels):
                self._reduced_costs[col] = objective.coefficient_of(label)
        self._select_entering()

    def _select_entering(self) -> None:
        costs = self._reduced_costs[: self.cols]
        if costs.size == 0:
            self._entering = None
            self._optimal = True
            return
        # argmax returns the first maximum, so ties go to the lowest column
        best = int(np.argmax(costs))
        if costs[best] > 0:
            self._entering = best
            self._optimal = False
        else:
            self._entering = None
            self._optimal = True

    # -- queries -----------------------------------------------------------

    def is_optimal(self) -> bool:
        return self._optimal

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def entering(self) -> Optional[int]:
        return self._entering

    @property
    def objective_value(self) -> float:
        return float(0.0 - self._reduced_costs[-1])

    @property
    def labels(self) -> Tuple[str, ...]:
        return self._labels

    @property
    def basis(self) -> List[int]:
        return list(self._basis)

    @property
    def matrix(self) -> np.ndarray:
        return self._matrix.copy()

    @property
    def constants(self) -> np.ndarray:
        return self._constants.copy()

    @property
    def reduced_costs(self) -> np.ndarray:
        return self._reduced_costs.copy()

    # -- pivoting ----------------------------------------------------------

    def pivot(self) -> None:
        """Run one simplex iteration: swap the entering column into the basis."""

        if self._optimal or self._entering is None:
            raise RuntimeError("Tableau is already optimal; nothing to pivot.")

        pivot_col = self._entering
        pivot_row = self._leaving_row(pivot_col)
        leaving = self._basis[pivot_row]
        self._basis[pivot_row] = pivot_col

        self._divide_row(pivot_row, self._matrix[pivot_row, pivot_col])
        self._eliminate(pivot_row, pivot_col)
        self._make_basis_identity()
        self._select_entering()
        self._iterations += 1

        logger.debug(
            "pivot %d: %s enters, %s leaves (row %d), objective %.6g",
            self._iterations,
            self._labels[pivot_col],
            self._labels[leaving],
            pivot_row,
            self.objective_value,
        )

    def _leaving_row(self, entering: int) -> int:
        """Minimum ratio test over rows with a positive entry in ``entering``.

        Ties keep the first row found.
        """

        column = self._matrix[:, entering]
        best_row = -1
        best_ratio = np.inf
        for row in range(self.rows):
            if column[row] <= 0:
                continue
            ratio = self._constants[row] / column[row]
            if ratio < best_ratio:
                best_ratio = ratio
                best_row = row
        if best_row < 0:
            label = self._labels[entering]
            raise UnboundedObjectiveError(
                f"Objective is unbounded: '{label}' can increase without limit.",
                entering=label,
                iterations=self._iterations,
            )
        return best_row

    def _divide_row(self, row: int, divisor: float) -> None:
        self._matrix[row] /= divisor
        self._constants[row] /= divisor

    def _eliminate(self, pivot_row: int, pivot_col: int) -> None:
        """Clear ``pivot_col`` from every other row and from the cj-zj row.

        Expects ``pivot_row`` to be normalised already.
        """

        factors = self._matrix[:, pivot_col].copy()
        factors[pivot_row] = 0.0
        self._matrix -= np.outer(factors, self._matrix[pivot_row])
        self._constants -= factors * self._constants[pivot_row]

        cost = self._reduced_costs[pivot_col]
        self._reduced_costs[: self.cols] -= cost * self._matrix[pivot_row]
        self._reduced_costs[-1] -= cost * self._constants[pivot_row]
        self._reduced_costs[pivot_col] = 0.0

    def _make_basis_identity(self) -> None:
        for row, col in enumerate(self._basis):
            self._matrix[:, col] = 0.0
            self._matrix[row, col] = 1.0
            self._reduced_costs[col] = 0.0

    # -- results -----------------------------------------------------------

    def result(self) -> LPResult:
        """Values of every objective variable at the optimum.

        Non-basic variables are reported as 0. Variables are listed in column
        order; objective variables that no constraint mentions come last.
        """

        if not self._optimal:
            raise RuntimeError("Tableau is not optimal yet.")

        basic_values = {col: float(self._constants[row]) + 0.0 for row, col in enumerate(self._basis)}
        weighted = [term.var for term in self._objective.terms if term.coef != 0]
        column_of = {label: col for col, label in enumerate(self._labels)}
        ordered = sorted(weighted, key=lambda label: column_of.get(label, self.cols))

        variables = [
            LPVariable(name=label, value=basic_values.get(column_of.get(label, -1), 0.0))
            for label in ordered
        ]
        return LPResult(
            variables=variables,
            objective_value=self.objective_value,
            iterations=self._iterations,
        )

    def __str__(self) -> str:
        lines = ["\t" + "\t".join(self._labels)]
        for row, col in enumerate(self._basis):
            cells = [self._labels[col]]
            cells.extend(repr(float(value)) for value in self._matrix[row])
            cells.append(repr(float(self._constants[row])))
            lines.append("\t".join(cells))
        lines.append("\t" + "\t".join(repr(float(value)) for value in self._reduced_costs))
        return "\n".join(lines) + "\n"
