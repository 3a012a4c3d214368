"""
cxplain/explain/search.py
=========================
MinimalConflictSearch — the recursive divide-and-conquer ``cxp``
procedure.

Algorithm:
    cxp(Δ, C = ⟨c₁ … c_q⟩, B):
        IF C = ∅                         return ∅
        IF Δ ≠ ∅ AND inconsistent(B)     return ∅
        IF |C| = 1                       return C
        k  ← ⌊q/2⌋
        C1 ← ⟨c₁ … c_k⟩;  C2 ← ⟨c_{k+1} … c_q⟩
        CS1 ← cxp(C2,  C1, B ∪ C2)
        CS2 ← cxp(CS1, C2, B ∪ CS1)
        return CS1 ∪ CS2

Contract:
    Given B ∪ C inconsistent, and B consistent whenever Δ = ∅, the
    result E ⊆ C is a minimal conflict: B ∪ E is inconsistent and
    B ∪ (E \\ {e}) is consistent for every e ∈ E.

    Correctness rests on monotonicity of inconsistency. A minimal
    conflict E over C = C1 ⊎ C2 decomposes into E1 ⊆ C1, found while
    all of C2 sits in the background, and E2 ⊆ C2, found once E1 is
    fixed in the background. CS2 therefore depends on CS1 and the two
    calls run strictly in that order.

    The consistency check is skipped when Δ = ∅: the direct caller
    already guarantees that B is consistent there. That keeps the
    number of oracle calls linear in q rather than O(q log q).

Reference: Junker (2004), "QuickXPlain: Preferred Explanations and
Relaxations for Over-Constrained Problems".
"""

from __future__ import annotations

import logging
from typing import Hashable, Iterable, Optional

from cxplain.core.config import SearchConfig
from cxplain.core.types import StatementSet
from cxplain.explain.instrumentation import (
    COUNTER_CONSISTENCY_CHECKS,
    COUNTER_CXP_CALLS,
    COUNTER_LEFT_BRANCH_CALLS,
    COUNTER_RIGHT_BRANCH_CALLS,
    COUNTER_SPLIT_OPERATIONS,
    COUNTER_UNION_OPERATIONS,
    Instrumentation,
)
from cxplain.oracle.base import ConsistencyOracle

logger = logging.getLogger(__name__)


class MinimalConflictSearch:
    """Finds one minimal conflict inside a candidate set.

    The search is generic over the statement type: it only unions,
    splits and hands sets to the oracle.

    Usage:
        search = MinimalConflictSearch(oracle)
        conflict = search.cxp(StatementSet.empty(), candidates, background)
    """

    def __init__(
        self,
        oracle: ConsistencyOracle,
        instrumentation: Optional[Instrumentation] = None,
        config: Optional[SearchConfig] = None,
    ):
        self.oracle = oracle
        self.instrumentation = instrumentation if instrumentation is not None else Instrumentation()
        self.config = config or SearchConfig()

    def cxp(
        self,
        delta: Iterable[Hashable],
        candidates: Iterable[Hashable],
        background: Iterable[Hashable],
    ) -> StatementSet:
        """Return a minimal subset of ``candidates`` inconsistent with
        ``background``.

        Args:
            delta:
                The set most recently added to the background by the
                caller. Empty means "``background`` is known to be
                consistent", which skips the pruning check.
            candidates:
                The possibly-faulty statements C.
            background:
                Statements assumed true while searching, B.

        Returns:
            The conflict as a ``StatementSet`` (empty if pruned).
        """
        return self._cxp(
            StatementSet(delta),
            StatementSet(candidates),
            StatementSet(background),
            depth=0,
        )

    # ─── RECURSION ─────────────────────────────────────────────────

    def _cxp(
        self,
        delta: StatementSet,
        candidates: StatementSet,
        background: StatementSet,
        depth: int,
    ) -> StatementSet:
        tab = self._tab(depth)
        logger.debug("%sCXP [D=%s, C=%s, B=%s] >>>", tab, delta, candidates, background)

        if candidates.is_empty:
            logger.debug("%s<<< return Φ (empty candidate set)", tab)
            return StatementSet.empty()

        # IF (Δ != Φ AND inconsistent(B)) return Φ
        if not delta.is_empty:
            self.instrumentation.increment(COUNTER_CONSISTENCY_CHECKS)
            if not self.oracle.is_consistent(background):
                logger.debug("%s<<< return Φ (background inconsistent)", tab)
                return StatementSet.empty()

        if candidates.is_singleton:
            logger.debug("%s<<< return %s", tab, candidates)
            return candidates

        c1, c2 = candidates.split()
        self.instrumentation.increment(COUNTER_SPLIT_OPERATIONS)
        if self.config.trace_recursion:
            logger.debug("%sSplit C into [C1=%s, C2=%s]", tab, c1, c2)

        # CS1 ← cxp(C2, C1, B ∪ C2)
        background_with_c2 = background.union(c2)
        self.instrumentation.increment(COUNTER_UNION_OPERATIONS)
        self.instrumentation.increment(COUNTER_LEFT_BRANCH_CALLS)
        self.instrumentation.increment(COUNTER_CXP_CALLS)
        cs1 = self._cxp(c2, c1, background_with_c2, depth + 1)

        # CS2 ← cxp(CS1, C2, B ∪ CS1)
        background_with_cs1 = background.union(cs1)
        self.instrumentation.increment(COUNTER_UNION_OPERATIONS)
        self.instrumentation.increment(COUNTER_RIGHT_BRANCH_CALLS)
        self.instrumentation.increment(COUNTER_CXP_CALLS)
        cs2 = self._cxp(cs1, c2, background_with_cs1, depth + 1)

        logger.debug("%s<<< return [CS1=%s ∪ CS2=%s]", tab, cs1, cs2)
        self.instrumentation.increment(COUNTER_UNION_OPERATIONS)
        return cs1.union(cs2)

    def _tab(self, depth: int) -> str:
        return "  " * depth if self.config.trace_recursion else ""
