"""
cxplain/models/explanation_model.py
===================================
Builds the four statement sets of a causal explanation task from a
knowledge base (or feature model), a user requirement, a configuration
and the sub-configuration to explain:

    CONF    one statement per configuration assignment
    REQ     one statement per requirement assignment, labelled
            "<assignment> [copied]" so it stays distinct from the
            identical configuration assignment
    CF      the KB constraints, in reverse order
    NSCONF  the negated sub-configuration (a single statement)

The possibly-faulty set is CONF ∪ REQ ∪ CF; the background is NSCONF.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from cxplain.core.config import CXPlainConfig, OracleConfig
from cxplain.core.types import StatementSet
from cxplain.explain.finder import ExplanationFinder
from cxplain.explain.instrumentation import Instrumentation
from cxplain.models.assignments import Assignment, as_assignments
from cxplain.models.feature_model import FeatureModel
from cxplain.models.knowledge_base import KnowledgeBase
from cxplain.models.negator import SolutionNegator
from cxplain.oracle.z3_oracle import Z3Oracle

logger = logging.getLogger(__name__)

REQUIREMENT_SUFFIX = " [copied]"

AssignmentsLike = Union[str, Iterable[Assignment]]


@dataclass(frozen=True)
class ExplanationTask:
    """The inputs of ``ExplanationFinder.find_explanation``."""
    req:    StatementSet
    cf:     StatementSet
    conf:   StatementSet
    nsconf: StatementSet

    @property
    def possibly_faulty(self) -> StatementSet:
        return self.conf.union(self.req).union(self.cf)

    @property
    def size(self) -> int:
        return len(self.possibly_faulty) + len(self.nsconf)


class CausalExplanationModel:
    """Explains why a sub-configuration holds in a configuration.

    Usage:
        model = CausalExplanationModel(
            survey_fm,
            sub_configuration="license=true",
            requirement="ABtesting=true",
            configuration="pay=true,nonlicense=false,ABtesting=true",
        )
        explanation = model.explain()
    """

    def __init__(
        self,
        kb: Union[KnowledgeBase, FeatureModel],
        sub_configuration: AssignmentsLike,
        requirement: AssignmentsLike,
        configuration: AssignmentsLike,
        negator: Optional[SolutionNegator] = None,
    ):
        self.kb = kb.to_knowledge_base() if isinstance(kb, FeatureModel) else kb
        self.sub_configuration = as_assignments(sub_configuration)
        self.requirement = as_assignments(requirement)
        self.configuration = as_assignments(configuration)
        self.negator = negator or SolutionNegator()
        self._task: Optional[ExplanationTask] = None

    def build(self) -> ExplanationTask:
        """Translate everything into statements (cached after first call)."""
        if self._task is not None:
            return self._task

        logger.debug("Building explanation task for KB '%s' >>>", self.kb.name)
        conf = StatementSet(self.kb.translate(self.configuration))
        req = StatementSet(self.kb.translate(self.requirement, suffix=REQUIREMENT_SUFFIX))
        cf = StatementSet(reversed(self.kb.constraints))
        nsconf = StatementSet.of(self.negator.negate(self.sub_configuration, self.kb))

        self._task = ExplanationTask(req=req, cf=cf, conf=conf, nsconf=nsconf)
        logger.debug(
            "<<< Task built: |CONF|=%d, |REQ|=%d, |CF|=%d, NSCONF=%s",
            len(conf), len(req), len(cf), nsconf,
        )
        return self._task

    def create_oracle(self, config: Optional[OracleConfig] = None) -> Z3Oracle:
        return Z3Oracle(base_assertions=self.kb.domain_assertions(), config=config)

    def explain(
        self,
        config: Optional[CXPlainConfig] = None,
        instrumentation: Optional[Instrumentation] = None,
    ) -> StatementSet:
        """Run CXPlain end to end on this task."""
        config = config or CXPlainConfig()
        task = self.build()
        finder = ExplanationFinder(
            self.create_oracle(config.oracle),
            instrumentation=instrumentation,
            config=config.search,
        )
        return finder.find_explanation(task.req, task.cf, task.conf, task.nsconf)
