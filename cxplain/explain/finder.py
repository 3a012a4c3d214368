"""
cxplain/explain/finder.py
=========================
ExplanationFinder — the CXPlain driver.

Algorithm:
    CXPlain(REQ, KB, CONF, NSCONF):
        IF consistent(CONF ∪ REQ ∪ KB)
            return cxp(∅, CONF ∪ REQ ∪ KB, NSCONF)
        ELSE
            return ∅        # no explanation possible

NSCONF is the negated sub-configuration whose causes we want to
explain. Its own consistency is a caller obligation: the search starts
with Δ = ∅, which tells ``cxp`` that its background needs no check.

An inconsistent forward scenario is a defined outcome, not an error.
"No explanation" and "empty explanation" are both the empty set.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from cxplain.core.config import SearchConfig
from cxplain.core.types import StatementSet
from cxplain.core.validators import require_statement_sets
from cxplain.explain.instrumentation import (
    COUNTER_CONSISTENCY_CHECKS,
    COUNTER_CXP_CALLS,
    COUNTER_UNION_OPERATIONS,
    TIMER_CXPLAIN,
    Instrumentation,
)
from cxplain.explain.search import MinimalConflictSearch
from cxplain.oracle.base import ConsistencyOracle

logger = logging.getLogger(__name__)


class ExplanationFinder:
    """Finds a minimal explanation for a negated sub-configuration.

    Usage:
        finder = ExplanationFinder(oracle)
        explanation = finder.find_explanation(REQ, KB, CONF, NSCONF)
        finder.instrumentation.consistency_checks
    """

    def __init__(
        self,
        oracle: ConsistencyOracle,
        instrumentation: Optional[Instrumentation] = None,
        config: Optional[SearchConfig] = None,
    ):
        self.oracle = oracle
        self.config = config or SearchConfig()
        self.instrumentation = instrumentation if instrumentation is not None else Instrumentation()
        self._search = MinimalConflictSearch(oracle, self.instrumentation, self.config)

    def find_explanation(
        self,
        req: Any,
        kb: Any,
        conf: Any,
        nsconf: Any,
    ) -> StatementSet:
        """Explain why NSCONF conflicts with CONF ∪ REQ ∪ KB.

        Args:
            req:    User requirement statements.
            kb:     Knowledge-base constraints.
            conf:   Configuration assignments.
            nsconf: Negated sub-configuration (known to be consistent).

        Returns:
            A minimal subset of CONF ∪ REQ ∪ KB that is inconsistent with
            NSCONF, or the empty set when CONF ∪ REQ ∪ KB is itself
            inconsistent.

        Raises:
            InvalidArgumentError: if any input is missing or malformed.
                Raised before any oracle call.
        """
        sets = require_statement_sets(req=req, kb=kb, conf=conf, nsconf=nsconf)
        req, kb, conf, nsconf = sets["req"], sets["kb"], sets["conf"], sets["nsconf"]

        logger.debug(
            "Identifying explanation for [REQ=%s, KB=%s, CONF=%s, NSCONF=%s] >>>",
            req, kb, conf, nsconf,
        )

        conf_with_req = conf.union(req)
        self.instrumentation.increment(COUNTER_UNION_OPERATIONS)
        conf_with_req_with_kb = conf_with_req.union(kb)
        self.instrumentation.increment(COUNTER_UNION_OPERATIONS)

        self.instrumentation.increment(COUNTER_CONSISTENCY_CHECKS)
        if not self.oracle.is_consistent(conf_with_req_with_kb):
            logger.info("No explanation possible: CONF ∪ REQ ∪ KB is inconsistent")
            return StatementSet.empty()

        self.instrumentation.increment(COUNTER_CXP_CALLS)
        if self.config.collect_timings:
            with self.instrumentation.timer(TIMER_CXPLAIN):
                explanation = self._search.cxp(StatementSet.empty(), conf_with_req_with_kb, nsconf)
        else:
            explanation = self._search.cxp(StatementSet.empty(), conf_with_req_with_kb, nsconf)

        logger.info(
            "Found explanation of %d statement(s) after %d consistency check(s)",
            len(explanation), self.instrumentation.consistency_checks,
        )
        logger.debug("<<< Found explanation [exp=%s]", explanation)
        return explanation
