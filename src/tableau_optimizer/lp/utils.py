import math
import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..exceptions import MalformedProblemError
from ..schemas import Constraint, Objective

SLACK_PREFIX = "S"
_SLACK_LABEL = re.compile(rf"^{SLACK_PREFIX}\d+$")


@dataclass(frozen=True)
class ProblemSnapshot:
    """Frozen view of the column layout handed to the tableau.

    ``labels[i]`` is the variable in column ``i``: decision variables first, in
    the order they were first seen across constraints, then one slack per
    constraint in the order the constraints were added.
    """

    labels: Tuple[str, ...]
    slack_indices: Tuple[int, ...]
    constraints: Tuple[Constraint, ...]

    @property
    def basic_count(self) -> int:
        return len(self.slack_indices)

    @property
    def non_basic_count(self) -> int:
        return len(self.labels) - len(self.slack_indices)


class VariableIndex:
    """Assigns column indices to labels as constraints are accumulated.

    Slack columns are kept apart while constraints arrive and are appended
    after every decision variable when a snapshot is taken, so a decision
    variable first seen in a late constraint still precedes all slacks.
    """

    def __init__(self) -> None:
        self._decision: Dict[str, int] = {}
        self._slacks: List[str] = []

    @property
    def slack_count(self) -> int:
        return len(self._slacks)

    @property
    def total_count(self) -> int:
        return len(self._decision) + len(self._slacks)

    def next_slack_label(self) -> str:
        return f"{SLACK_PREFIX}{len(self._slacks)}"

    def register(self, constraint: Constraint) -> None:
        for term in constraint.terms:
            if term.var not in self._decision:
                self._decision[term.var] = len(self._decision)
        if constraint.slack is not None:
            self._slacks.append(constraint.slack.var)

    def contains(self, label: str) -> bool:
        return label in self._decision or label in self._slacks

    def snapshot(self, constraints: Sequence[Constraint]) -> ProblemSnapshot:
        labels = list(self._decision) + list(self._slacks)
        offset = len(self._decision)
        slack_indices = tuple(offset + idx for idx in range(len(self._slacks)))
        return ProblemSnapshot(
            labels=tuple(labels),
            slack_indices=slack_indices,
            constraints=tuple(constraints),
        )


def validate_constraint(constraint: Constraint) -> None:
    """Reject constraints the all-slack starting basis cannot handle."""

    if not math.isfinite(constraint.rhs):
        raise MalformedProblemError(f"Constraint bound {constraint.rhs} is not finite.")
    if constraint.rhs < 0:
        raise MalformedProblemError(
            f"Constraint bound {constraint.rhs} is negative; only non-negative bounds are supported."
        )
    if constraint.slack is not None:
        raise MalformedProblemError("Constraint already carries a slack variable.")
    _validate_terms(constraint.labels(), [term.coef for term in constraint.terms], "Constraint")


def validate_objective(objective: Objective) -> None:
    _validate_terms(objective.labels(), [term.coef for term in objective.terms], "Objective")


def _validate_terms(labels: List[str], coefs: List[float], owner: str) -> None:
    seen = set()
    for label, coef in zip(labels, coefs):
        if not label:
            raise MalformedProblemError(f"{owner} has a term with an empty label.")
        if label in seen:
            raise MalformedProblemError(f"{owner} mentions variable '{label}' more than once.")
        if _SLACK_LABEL.match(label):
            raise MalformedProblemError(
                f"{owner} variable '{label}' clashes with the reserved slack labels {SLACK_PREFIX}<k>."
            )
        if not math.isfinite(coef):
            raise MalformedProblemError(f"{owner} coefficient {coef} of '{label}' is not finite.")
        seen.add(label)
