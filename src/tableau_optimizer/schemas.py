from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

TermSpec = Union[str, Tuple[float, str]]


class Term(BaseModel):
    model_config = ConfigDict(frozen=True)

    var: str
    coef: float = 1.0
    is_slack: bool = False

    @classmethod
    def slack(cls, label: str) -> "Term":
        return cls(var=label, coef=1.0, is_slack=True)


def _terms_from_pairs(pairs: Iterable[TermSpec]) -> List[Term]:
    terms: List[Term] = []
    for item in pairs:
        if isinstance(item, str):
            terms.append(Term(var=item))
        else:
            coef, label = item
            terms.append(Term(var=label, coef=coef))
    return terms


class _LinearForm(BaseModel):
    """Ordered terms with a label -> coefficient lookup built once."""

    model_config = ConfigDict(frozen=True)

    terms: List[Term] = Field(default_factory=list)
    _coefficients: Dict[str, float] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self._coefficients = {term.var: term.coef for term in self.all_terms()}

    def all_terms(self) -> Iterator[Term]:
        yield from self.terms

    def coefficient_of(self, label: str) -> float:
        return self._coefficients.get(label, 0.0)

    def labels(self) -> List[str]:
        return [term.var for term in self.all_terms()]


class Objective(_LinearForm):
    @classmethod
    def of(cls, pairs: Iterable[TermSpec]) -> "Objective":
        """Build from ``(coef, label)`` pairs; a bare label means coefficient 1."""
        return cls(terms=_terms_from_pairs(pairs))

    def var_count(self) -> int:
        return len(self.terms)


class Constraint(_LinearForm):
    """``sum(coef * var) <= rhs``, optionally carrying its slack term."""

    rhs: float
    slack: Optional[Term] = None

    @classmethod
    def of(cls, pairs: Iterable[TermSpec], rhs: float) -> "Constraint":
        return cls(terms=_terms_from_pairs(pairs), rhs=rhs)

    def all_terms(self) -> Iterator[Term]:
        yield from self.terms
        if self.slack is not None:
            yield self.slack

    def with_slack(self, label: str) -> "Constraint":
        return Constraint(terms=list(self.terms), rhs=self.rhs, slack=Term.slack(label))


class LPProblem(BaseModel):
    name: str = "problem"
    objective: Objective
    constraints: List[Constraint] = Field(default_factory=list)


class SolveOptions(BaseModel):
    max_iters: int = Field(default=10_000, ge=1)


class LPVariable(BaseModel):
    name: str
    value: float

    def __str__(self) -> str:
        return f"{{{self.name} = {self.value}}}"


class LPResult(BaseModel):
    variables: List[LPVariable]
    objective_value: float
    iterations: int = 0

    @property
    def values(self) -> Dict[str, float]:
        return {var.name: var.value for var in self.variables}

    def value_of(self, label: str) -> float:
        return self.values.get(label, 0.0)

    def __str__(self) -> str:
        lines = ["{", "\toptimum_variable_values: {"]
        lines.extend(f"\t\t{var}" for var in self.variables)
        lines.append("\t}")
        lines.append(f"\toptimum_obj_func_value: {self.objective_value}")
        lines.append("}")
        return "\n".join(lines) + "\n"
