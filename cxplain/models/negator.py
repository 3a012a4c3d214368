"""
cxplain/models/negator.py
=========================
Negation of (sub-)configurations.

    negate([license=true, statistics=true])
        → Statement("not(license=true and statistics=true)",
                    ¬(license = true ∧ statistics = true))

The negated sub-configuration is the background B of the explanation
search: the search looks for the part of CONF ∪ REQ ∪ KB that forces
the sub-configuration to hold.
"""
from __future__ import annotations

import logging
from typing import Iterable

import z3

from cxplain.core.exceptions import TranslationError
from cxplain.core.registry import Registry
from cxplain.core.types import Statement
from cxplain.models.assignments import Assignment
from cxplain.models.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)

NEGATOR_CATEGORY = "negator"


@Registry.decorator("solution", category=NEGATOR_CATEGORY)
class SolutionNegator:
    """Negates a conjunction of assignments into one Statement."""

    def negate(self, assignments: Iterable[Assignment], kb: KnowledgeBase) -> Statement:
        assignments = list(assignments)
        if not assignments:
            raise TranslationError(
                "Cannot negate an empty sub-configuration",
                context={"kb": kb.name},
            )
        label = "not(" + " and ".join(str(a) for a in assignments) + ")"
        formula = z3.Not(z3.And(*[kb.eq(a.variable, a.value) for a in assignments]))
        logger.debug("Negated sub-configuration: %s", label)
        return Statement(label, formula)
