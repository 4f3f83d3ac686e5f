#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import List, Optional

from tableau_optimizer.schemas import Constraint, LPProblem, Objective, Term


def generate_random_lp(
    num_vars: int,
    num_constraints: int,
    seed: Optional[int] = None,
    density: float = 1.0,
    integral: bool = False,
) -> LPProblem:
    """Random canonical LP: non-negative coefficients and bounds, so it is always feasible.

    Every variable appears in at least one constraint with a positive
    coefficient, so the problem is also bounded.
    """

    rng = random.Random(seed)

    def draw(low: float, high: float) -> float:
        return float(rng.randint(int(low), int(high))) if integral else rng.uniform(low, high)

    constraints: List[Constraint] = []
    for j in range(num_constraints):
        terms = [
            Term(var=f"x{i}", coef=draw(1.0, 5.0))
            for i in range(num_vars)
            if rng.random() < density or i % num_constraints == j
        ]
        rhs = draw(num_vars * 2.0, num_vars * 6.0)
        constraints.append(Constraint(terms=terms, rhs=rhs))
    objective = Objective(
        terms=[Term(var=f"x{i}", coef=draw(1.0, 4.0)) for i in range(num_vars)],
    )
    return LPProblem(name="random-lp", objective=objective, constraints=constraints)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random canonical LP instances.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--density", type=float, default=1.0, help="Chance a variable appears in a row")
    parser.add_argument("--integral", action="store_true", help="Draw whole-number data")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    instances = [
        generate_random_lp(
            args.vars,
            args.constraints,
            (args.seed or 0) + idx,
            density=args.density,
            integral=args.integral,
        )
        for idx in range(args.count)
    ]
    payload = [instance.model_dump() for instance in instances]

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
