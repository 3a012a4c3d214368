"""
cxplain/oracle/z3_oracle.py
===========================
Consistency oracle backed by the Z3 SMT solver.

Each statement carries its meaning as a Z3 ``BoolRef`` in
``Statement.formula``. The oracle asserts every formula of the queried
set on a fresh solver, together with a fixed list of base assertions
(variable domain bounds, typically), and reports SAT as consistent.

A fresh ``z3.Solver`` per query keeps the oracle a pure function of its
input: nothing asserted for one query can leak into the next.

Mathematical basis:
    consistent(S) ⇔ ∃ model M : M ⊨ base ∧ ⋀_{s ∈ S} formula(s)

    Reference: De Moura & Bjørner (2008) "Z3: An Efficient SMT Solver".
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import z3

from cxplain.core.config import OracleConfig
from cxplain.core.exceptions import OracleFailure
from cxplain.core.registry import Registry
from cxplain.core.types import StatementSet
from cxplain.oracle.base import ORACLE_CATEGORY, ConsistencyOracle

logger = logging.getLogger(__name__)


@Registry.decorator("z3", category=ORACLE_CATEGORY)
class Z3Oracle(ConsistencyOracle):
    """SMT-backed consistency oracle.

    Usage:
        x = z3.Int("x")
        oracle = Z3Oracle(base_assertions=[x >= 0])
        oracle.is_consistent(StatementSet.of(Statement("x<0", x < 0)))  # False
    """

    def __init__(
        self,
        base_assertions: Iterable["z3.BoolRef"] = (),
        config: Optional[OracleConfig] = None,
    ) -> None:
        self._base: List[z3.BoolRef] = list(base_assertions)
        self.config = config or OracleConfig()

    @property
    def base_assertions(self) -> List["z3.BoolRef"]:
        return list(self._base)

    # ─── MAIN CHECK ────────────────────────────────────────────────

    def is_consistent(self, statements: StatementSet) -> bool:
        """Check joint satisfiability of ``statements`` and the base.

        Raises:
            OracleFailure: if a statement has no Z3 formula, Z3 raises,
                or Z3 answers ``unknown`` under the ``"raise"`` policy.
        """
        solver = z3.Solver()
        if self.config.timeout_ms:
            solver.set("timeout", self.config.timeout_ms)

        try:
            solver.add(*self._base)
            for statement in statements:
                solver.add(self._formula_of(statement))
            result = solver.check()
        except z3.Z3Exception as exc:
            raise OracleFailure(
                f"Z3 failed while checking {len(statements)} statement(s): {exc}",
                reason="z3_exception",
                context={"statements": [str(s) for s in statements]},
            ) from exc

        if result == z3.sat:
            logger.debug("Z3 SAT — %d statement(s)", len(statements))
            return True
        if result == z3.unsat:
            logger.debug("Z3 UNSAT — %d statement(s)", len(statements))
            return False
        return self._handle_unknown(solver, statements)

    def _handle_unknown(self, solver: "z3.Solver", statements: StatementSet) -> bool:
        # z3.unknown: solver timeout or incomplete theory
        reason = solver.reason_unknown()
        policy = self.config.unknown_policy
        if policy == "raise":
            raise OracleFailure(
                f"Z3 returned UNKNOWN ({reason}) for {len(statements)} statement(s)",
                reason=reason,
                context={
                    "statements": [str(s) for s in statements],
                    "timeout_ms": self.config.timeout_ms,
                },
            )
        logger.warning("Z3 returned UNKNOWN (%s) — treating as %s.", reason, policy)
        return policy == "consistent"

    @staticmethod
    def _formula_of(statement) -> "z3.BoolRef":
        formula = getattr(statement, "formula", None)
        if formula is None:
            raise OracleFailure(
                f"Statement '{statement}' carries no Z3 formula",
                reason="missing_formula",
                context={"statement": str(statement)},
            )
        if not z3.is_bool(formula):
            raise OracleFailure(
                f"Statement '{statement}' formula is not a Z3 boolean expression",
                reason="not_boolean",
                context={"statement": str(statement), "type": type(formula).__name__},
            )
        return formula
