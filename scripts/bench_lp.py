#!/usr/bin/env python3
import json
import time
from pathlib import Path

from tableau_optimizer.exceptions import LPError
from tableau_optimizer.lp.simplex import simplex_solve
from tableau_optimizer.schemas import LPProblem, SolveOptions
from scripts.generate_instances import generate_random_lp


def load_example(name: str) -> LPProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return LPProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    opts = SolveOptions()
    cases = [
        ("examples/textbook_lp.json", load_example("textbook_lp.json")),
        ("examples/production_lp.json", load_example("production_lp.json")),
    ]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(8, 6, seed)))

    print("name,status,objective,iterations,time_ms")
    for name, problem in cases:
        start = time.perf_counter()
        try:
            result = simplex_solve(problem, opts)
            status, objective, iterations = "optimal", result.objective_value, result.iterations
        except LPError as exc:
            status, objective, iterations = exc.status, None, getattr(exc, "iterations", 0)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(f"{name},{status},{objective},{iterations},{elapsed_ms:.2f}")


if __name__ == "__main__":
    main()
