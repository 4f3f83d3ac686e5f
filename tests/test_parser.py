import pytest

from tableau_optimizer.exceptions import MalformedProblemError
from tableau_optimizer.lp.parser import parse_problem
from tableau_optimizer.lp.simplex import simplex_solve


def test_parser_outputs_expected_problem():
    spec = "maximize 40x + 30y subject to x + y <= 12, 2x + y <= 16, x, y >= 0"
    problem = parse_problem(spec)

    assert problem.objective.labels() == ["x", "y"]
    assert problem.objective.coefficient_of("x") == 40.0
    assert len(problem.constraints) == 2
    assert problem.constraints[1].coefficient_of("x") == 2.0
    assert problem.constraints[1].rhs == 16.0

    result = simplex_solve(problem)
    assert result.objective_value == pytest.approx(400.0)


def test_parser_handles_constants_and_separators():
    spec = "max 3*x1 + 2.5*x2 s.t. x1 + 2 <= 6; x2 - x1 <= 1 and x1 >= 0"
    problem = parse_problem(spec)

    assert [cons.rhs for cons in problem.constraints] == [4.0, 1.0]
    assert problem.constraints[1].coefficient_of("x1") == -1.0
    assert problem.objective.coefficient_of("x2") == 2.5


def test_parser_merges_repeated_terms():
    problem = parse_problem("maximize x + x + y subject to x + y <= 3")

    assert problem.objective.coefficient_of("x") == 2.0


@pytest.mark.parametrize(
    "spec",
    [
        "",
        "   ",
        "minimize 3x subject to x <= 4",
        "3x + y subject to x <= 4",
        "maximize subject to x <= 4",
        "maximize x + 5 subject to x <= 4",
        "maximize x subject to x + y >= 2",
        "maximize x subject to x + y = 2",
        "maximize x subject to x + y",
        "maximize x subject to x <= four",
        "maximize x subject to <= 4",
    ],
)
def test_parser_rejects_non_canonical_specs(spec):
    with pytest.raises(MalformedProblemError):
        parse_problem(spec)
