"""
cxplain/models/knowledge_base.py
================================
Finite-domain knowledge bases whose constraints are Statements.

Each variable ``v`` with domain ⟨d₀, …, d_{n-1}⟩ becomes a Z3 integer
with 0 ≤ v < n, and ``v = d_i`` is encoded as ``v == i``. Constraints
are named Statements carrying a Z3 formula, so the explanation search
sees only labels while the oracle sees the logic.

Example (car configuration, Friedrich — "Elimination of spurious
explanations"):
    kb = car_configuration_kb()
    kb.constraints[0]           # Statement('rec-park <-> video')
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Tuple, Union

import z3

from cxplain.core.exceptions import TranslationError
from cxplain.core.types import Statement
from cxplain.core.validators import require_variable
from cxplain.models.assignments import Assignment

logger = logging.getLogger(__name__)

FormulaBuilder = Callable[["KnowledgeBase"], "z3.BoolRef"]


@dataclass(frozen=True)
class Variable:
    name:   str
    domain: Tuple[str, ...]

    def index_of(self, value: str) -> int:
        try:
            return self.domain.index(value)
        except ValueError:
            raise TranslationError(
                f"Value '{value}' not in domain of '{self.name}' {list(self.domain)}",
                context={"variable": self.name, "value": value},
            ) from None


class KnowledgeBase:
    """Variables, their domains, and an ordered list of constraints.

    Usage:
        kb = KnowledgeBase("toy")
        kb.add_variable("a", ["n", "y"])
        kb.add_variable("b", ["n", "y"])
        kb.add_constraint("a -> b", lambda k: z3.Implies(k.eq("a", "y"), k.eq("b", "y")))
    """

    def __init__(self, name: str):
        self.name = name
        self._variables: Dict[str, Variable] = {}
        self._z3_vars: Dict[str, z3.ArithRef] = {}
        self._constraints: List[Statement] = []

    # ─── VARIABLES ─────────────────────────────────────────────────

    def add_variable(self, name: str, domain: Iterable[str]) -> Variable:
        domain = tuple(domain)
        require_variable(name, domain)
        if name in self._variables:
            raise TranslationError(
                f"Variable '{name}' already defined in KB '{self.name}'",
                context={"variable": name},
            )
        variable = Variable(name, domain)
        self._variables[name] = variable
        self._z3_vars[name] = z3.Int(name)
        logger.debug("KB '%s': variable %s ∈ %s", self.name, name, list(domain))
        return variable

    def variable(self, name: str) -> Variable:
        try:
            return self._variables[name]
        except KeyError:
            raise TranslationError(
                f"Unknown variable '{name}' in KB '{self.name}'",
                context={"variable": name, "available": list(self._variables)},
            ) from None

    def var(self, name: str) -> "z3.ArithRef":
        self.variable(name)
        return self._z3_vars[name]

    def eq(self, name: str, value: str) -> "z3.BoolRef":
        """Z3 formula for ``name = value``."""
        return self.var(name) == self.variable(name).index_of(value)

    @property
    def variables(self) -> List[Variable]:
        return list(self._variables.values())

    def domain_assertions(self) -> List["z3.BoolRef"]:
        """Bounds keeping every variable inside its domain."""
        return [
            z3.And(self._z3_vars[v.name] >= 0, self._z3_vars[v.name] < len(v.domain))
            for v in self._variables.values()
        ]

    # ─── CONSTRAINTS ───────────────────────────────────────────────

    def add_constraint(
        self,
        label: str,
        formula: Union["z3.BoolRef", FormulaBuilder],
    ) -> Statement:
        if any(c.label == label for c in self._constraints):
            raise TranslationError(
                f"Constraint '{label}' already defined in KB '{self.name}'",
                context={"constraint": label},
            )
        if callable(formula) and not z3.is_expr(formula):
            formula = formula(self)
        statement = Statement(label, formula)
        self._constraints.append(statement)
        logger.debug("KB '%s': constraint %s", self.name, label)
        return statement

    @property
    def constraints(self) -> List[Statement]:
        return list(self._constraints)

    # ─── TRANSLATION ───────────────────────────────────────────────

    def assignment_statement(self, assignment: Assignment, suffix: str = "") -> Statement:
        return Statement(
            f"{assignment}{suffix}",
            self.eq(assignment.variable, assignment.value),
        )

    def translate(self, assignments: Iterable[Assignment], suffix: str = "") -> List[Statement]:
        """One Statement per assignment, in order."""
        return [self.assignment_statement(a, suffix) for a in assignments]

    def __repr__(self) -> str:
        return (
            f"KnowledgeBase({self.name!r}, {len(self._variables)} variables, "
            f"{len(self._constraints)} constraints)"
        )


# ─── EXAMPLE KNOWLEDGE BASES ──────────────────────────────────────

def car_configuration_kb() -> KnowledgeBase:
    """Car configuration problem with parking and communication options."""
    kb = KnowledgeBase("Car Configuration Problem")
    for name in ("biz-park", "rec-park", "video", "sensor", "GSM-radio", "easy-parking", "free-com"):
        kb.add_variable(name, ("n", "y"))

    def yes(name: str) -> "z3.BoolRef":
        return kb.eq(name, "y")

    kb.add_constraint("rec-park <-> video", yes("rec-park") == yes("video"))
    kb.add_constraint(
        r"(biz-park /\ !rec-park -> sensor) /\ !(rec-park /\ sensor)",
        z3.And(
            z3.Implies(z3.And(yes("biz-park"), z3.Not(yes("rec-park"))), yes("sensor")),
            z3.Not(z3.And(yes("rec-park"), yes("sensor"))),
        ),
    )
    kb.add_constraint(
        "(video or sensor) <-> easy-parking",
        z3.Or(yes("video"), yes("sensor")) == yes("easy-parking"),
    )
    kb.add_constraint("biz-park <-> GSM-radio", yes("biz-park") == yes("GSM-radio"))
    kb.add_constraint("GSM-radio <-> free-com", yes("GSM-radio") == yes("free-com"))
    return kb
