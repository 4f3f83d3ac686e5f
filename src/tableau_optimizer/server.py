from __future__ import annotations

import logging
import os

from mcp.server.fastmcp import FastMCP

from .exceptions import LPError
from .schemas import LPProblem, LPResult, SolveOptions
from .lp.simplex import simplex_solve
from .lp.parser import parse_problem

mcp = FastMCP("Tableau Optimizer")


def _optimal_payload(result: LPResult) -> dict:
    return {
        "status": "optimal",
        "result": result.model_dump(),
        "text": str(result),
    }


def _error_payload(exc: LPError) -> dict:
    payload = {"status": exc.status, "message": str(exc), "result": None}
    iterations = getattr(exc, "iterations", None)
    if iterations is not None:
        payload["iterations"] = iterations
    return payload


@mcp.tool()
def maximize_lp(problem: LPProblem, options: SolveOptions | None = None) -> dict:
    "Maximize a canonical LP (<= constraints, non-negative bounds) with the tableau simplex."
    opts = options or SolveOptions()
    try:
        return _optimal_payload(simplex_solve(problem, opts))
    except LPError as exc:
        return _error_payload(exc)


@mcp.tool()
def parse_lp_text(spec: str) -> dict:
    "Parse text like 'maximize 3x + 2y subject to x + y <= 4' into structured LPProblem JSON."
    try:
        return {"status": "parsed", "problem": parse_problem(spec).model_dump()}
    except LPError as exc:
        return _error_payload(exc)


@mcp.tool()
def solve_lp_text(spec: str, options: SolveOptions | None = None) -> dict:
    "Parse a textual LP and maximize it in one step."
    try:
        problem = parse_problem(spec)
    except LPError as exc:
        return _error_payload(exc)
    return maximize_lp(problem, options)


def main() -> None:
    logging.basicConfig(
        level=os.environ.get("TABLEAU_LOG_LEVEL", "WARNING").upper(),
        format="[%(asctime)s] [%(levelname)-8s] [%(name)s] - %(message)s",
    )
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        mcp.settings.host = os.environ.get("HOST", "0.0.0.0")
        mcp.settings.port = int(os.environ.get("PORT", "8081"))
        mcp.run(transport="streamable-http")


if __name__ == "__main__":
    # Allow: `uv run mcp dev src/tableau_optimizer/server.py` or `python -m tableau_optimizer.server`
    main()
