import numpy as np
import pytest
from scipy.optimize import linprog

from tableau_optimizer.exceptions import UnboundedObjectiveError
from tableau_optimizer.lp.tableau import Tableau
from tableau_optimizer.lp.utils import VariableIndex
from tableau_optimizer.schemas import Constraint, LPProblem, Objective
from scripts.generate_instances import generate_random_lp


def make_tableau(constraints, objective: Objective) -> Tableau:
    index = VariableIndex()
    with_slacks = []
    for constraint in constraints:
        constraint = constraint.with_slack(index.next_slack_label())
        index.register(constraint)
        with_slacks.append(constraint)
    return Tableau.from_snapshot(index.snapshot(with_slacks), objective)


def make_textbook_tableau() -> Tableau:
    return make_tableau(
        [Constraint.of(["x", "y"], 12), Constraint.of([(2, "x"), "y"], 16)],
        Objective.of([(40, "x"), (30, "y")]),
    )


def assert_invariants(tableau: Tableau) -> None:
    matrix = tableau.matrix
    basis = tableau.basis
    assert np.array_equal(matrix[:, basis], np.eye(tableau.rows))
    assert np.all(tableau.reduced_costs[basis] == 0.0)
    assert np.all(tableau.constants >= -1e-9)


def run_to_optimum(tableau: Tableau, max_pivots: int = 100) -> list:
    objectives = [tableau.objective_value]
    assert_invariants(tableau)
    while not tableau.is_optimal():
        assert tableau.iterations < max_pivots
        tableau.pivot()
        assert_invariants(tableau)
        objectives.append(tableau.objective_value)
    return objectives


def test_initial_tableau_layout():
    tableau = make_textbook_tableau()

    assert tableau.labels == ("x", "y", "S0", "S1")
    assert tableau.basis == [2, 3]
    np.testing.assert_array_equal(tableau.matrix, [[1, 1, 1, 0], [2, 1, 0, 1]])
    np.testing.assert_array_equal(tableau.constants, [12, 16])
    np.testing.assert_array_equal(tableau.reduced_costs, [40, 30, 0, 0, 0])
    assert tableau.entering == 0
    assert not tableau.is_optimal()


def test_textbook_pivots():
    tableau = make_textbook_tableau()

    tableau.pivot()
    assert tableau.basis == [2, 0]
    np.testing.assert_allclose(tableau.constants, [4, 8])
    np.testing.assert_allclose(tableau.reduced_costs, [0, 10, 0, -20, -320])
    assert tableau.entering == 1

    tableau.pivot()
    assert tableau.is_optimal()
    assert tableau.basis == [1, 0]
    np.testing.assert_allclose(tableau.constants, [8, 4])
    assert tableau.objective_value == pytest.approx(400.0)

    result = tableau.result()
    assert result.values == {"x": pytest.approx(4.0), "y": pytest.approx(8.0)}


def test_ties_pick_lowest_column():
    for _ in range(3):
        tableau = make_tableau(
            [Constraint.of(["x", "y"], 4), Constraint.of(["x", (2, "y")], 6)],
            Objective.of([(5, "x"), (5, "y")]),
        )
        assert tableau.entering == 0


def test_degenerate_tie_stays_feasible():
    tableau = make_tableau(
        [Constraint.of(["x"], 2), Constraint.of(["x", "y"], 2), Constraint.of(["y"], 2)],
        Objective.of(["x", "y"]),
    )

    objectives = run_to_optimum(tableau)

    assert tableau.iterations == 2
    assert objectives == pytest.approx([0.0, 2.0, 2.0])
    result = tableau.result()
    assert result.objective_value == pytest.approx(2.0)
    assert result.values == {"x": pytest.approx(2.0), "y": 0.0}


def test_unbounded_column_raises():
    tableau = make_tableau([Constraint.of([(-1, "y"), (1, "x")], 3)], Objective.of(["y"]))

    with pytest.raises(UnboundedObjectiveError) as info:
        tableau.pivot()
    assert info.value.entering == "y"
    assert info.value.iterations == 0


def test_empty_tableau_is_optimal():
    tableau = Tableau(0, 0, [], Objective.of([(3, "x")]), [], [])

    assert tableau.is_optimal()
    assert tableau.objective_value == 0.0
    assert tableau.result().values == {"x": 0.0}


def test_pivot_and_result_preconditions():
    tableau = make_textbook_tableau()
    with pytest.raises(RuntimeError):
        tableau.result()

    run_to_optimum(tableau)
    with pytest.raises(RuntimeError):
        tableau.pivot()


def test_render_lists_labels_and_rows():
    text = str(make_textbook_tableau())
    lines = text.splitlines()

    assert lines[0] == "\tx\ty\tS0\tS1"
    assert lines[1].split("\t") == ["S0", "1.0", "1.0", "1.0", "0.0", "12.0"]
    assert lines[3].split("\t")[1:] == ["40.0", "30.0", "0.0", "0.0", "0.0"]


def solve_with_linprog(problem: LPProblem) -> float:
    labels = sorted({term.var for cons in problem.constraints for term in cons.terms})
    A = [[cons.coefficient_of(label) for label in labels] for cons in problem.constraints]
    b = [cons.rhs for cons in problem.constraints]
    c = [-problem.objective.coefficient_of(label) for label in labels]
    res = linprog(c, A_ub=A, b_ub=b, bounds=[(0, None)] * len(labels), method="highs")
    assert res.success
    return -res.fun


@pytest.mark.parametrize("seed", range(8))
def test_random_instances_keep_invariants_and_match_linprog(seed):
    problem = generate_random_lp(5, 4, seed, density=0.7)
    tableau = make_tableau(problem.constraints, problem.objective)

    objectives = run_to_optimum(tableau, max_pivots=50)

    assert all(later >= earlier - 1e-9 for earlier, later in zip(objectives, objectives[1:]))
    assert tableau.objective_value == pytest.approx(solve_with_linprog(problem), rel=1e-6)

    result = tableau.result()
    recomputed = sum(
        problem.objective.coefficient_of(var.name) * var.value for var in result.variables
    )
    assert recomputed == pytest.approx(result.objective_value, rel=1e-6)
    for cons in problem.constraints:
        lhs = sum(cons.coefficient_of(var.name) * var.value for var in result.variables)
        assert lhs <= cons.rhs + 1e-6


def test_labels_are_a_string_tuple():
    labels = make_textbook_tableau().labels

    assert isinstance(labels, tuple)
    assert all(isinstance(label, str) for label in labels)
