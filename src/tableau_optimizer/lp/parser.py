import re
from collections import OrderedDict
from typing import List, Tuple

from ..exceptions import MalformedProblemError
from ..schemas import Constraint, LPProblem, Objective, Term

_TOKEN_SPLIT = re.compile(r",|;|\band\b", re.IGNORECASE)
_COMPARATOR = re.compile(r"(<=|>=|==|=<|=>|=|<|>)")
_NON_NEGATIVITY = re.compile(
    r"(?<![\w.])([A-Za-z_][\w]*(?:\s*,\s*[A-Za-z_][\w]*)*)\s*>=\s*0(?:\.0*)?(?![\w.])"
)
_TERM_PATTERN = re.compile(r"([+-]?\s*\d*\.?\d*)\s*([A-Za-z_][\w]*)")
_NUMBER_PATTERN = re.compile(r"[+-]?\s*\d+(?:\.\d+)?")


def parse_problem(spec: str) -> LPProblem:
    """
    Small rule-based parser for canonical maximisation problems such as:
      "maximize 40x + 30y subject to x + y <= 12, 2x + y <= 16, x, y >= 0"
    Non-negativity clauses are accepted and dropped; every variable is already
    non-negative. Anything outside the canonical form is rejected.
    """

    if not spec or not spec.strip():
        raise MalformedProblemError("Specification is empty.")

    normalized = " ".join(spec.replace("\n", " ").split())
    pieces = re.split(r"subject to|such that|s\.t\.", normalized, flags=re.IGNORECASE)
    if len(pieces) > 2:
        raise MalformedProblemError("Specification has more than one 'subject to' section.")
    objective_part = pieces[0].strip()
    constraints_part = pieces[1].strip() if len(pieces) > 1 else ""

    match = re.match(r"(maximize|maximise|minimize|minimise|max|min)\b\s*(.*)", objective_part, flags=re.IGNORECASE)
    if not match:
        raise MalformedProblemError("Objective must start with 'maximize'.")
    if match.group(1).lower().startswith("min"):
        raise MalformedProblemError("Only maximisation problems are supported.")
    objective_expr_str = match.group(2).strip()
    if not objective_expr_str:
        raise MalformedProblemError("Objective expression is missing.")

    objective_terms, objective_constant = _parse_linear_expr(objective_expr_str)
    if objective_constant:
        raise MalformedProblemError("Objective constants are not supported.")

    # drop "x, y >= 0" before splitting on commas
    constraints_part = _NON_NEGATIVITY.sub(" ", constraints_part)
    tokens = [tok.strip() for tok in _TOKEN_SPLIT.split(constraints_part) if tok.strip()]

    constraints: List[Constraint] = []
    for token in tokens:
        comp_match = _COMPARATOR.search(token)
        if not comp_match:
            raise MalformedProblemError(f"Could not parse constraint segment '{token}'.")
        cmp = comp_match.group(1)
        lhs_str = token[: comp_match.start()].strip()
        rhs_str = token[comp_match.end() :].strip()
        if not lhs_str or not rhs_str:
            raise MalformedProblemError(f"Incomplete constraint expression '{token}'.")
        if cmp not in ("<=", "=<"):
            raise MalformedProblemError(
                f"Constraint '{token}' uses '{cmp}'; only '<=' constraints are supported."
            )
        terms, constant = _parse_linear_expr(lhs_str)
        try:
            rhs_value = float(rhs_str)
        except ValueError as exc:
            raise MalformedProblemError(f"Right-hand side '{rhs_str}' is not numeric.") from exc
        constraints.append(Constraint(terms=terms, rhs=rhs_value - constant))

    return LPProblem(
        name="parsed",
        objective=Objective(terms=objective_terms),
        constraints=constraints,
    )


def _parse_linear_expr(expr_str: str) -> Tuple[List[Term], float]:
    expr_clean = expr_str.replace("*", "")
    coeffs: "OrderedDict[str, float]" = OrderedDict()
    spans: List[Tuple[int, int]] = []

    for match in _TERM_PATTERN.finditer(expr_clean):
        coef_text = match.group(1).replace(" ", "")
        var_name = match.group(2)
        if coef_text in ("", "+"):
            coef = 1.0
        elif coef_text == "-":
            coef = -1.0
        else:
            try:
                coef = float(coef_text)
            except ValueError as exc:
                raise MalformedProblemError(f"Bad coefficient '{coef_text}' for '{var_name}'.") from exc
        coeffs[var_name] = coeffs.get(var_name, 0.0) + coef
        spans.append(match.span())

    remaining = list(expr_clean)
    for start, end in spans:
        for idx in range(start, end):
            remaining[idx] = " "
    remaining_str = "".join(remaining)

    constant = 0.0
    for num_match in _NUMBER_PATTERN.finditer(remaining_str):
        text = num_match.group(0).replace(" ", "")
        if text:
            constant += float(text)

    terms = [Term(var=name, coef=coef) for name, coef in coeffs.items() if coef != 0]
    return terms, constant
