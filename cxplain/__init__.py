"""
cxplain/__init__.py — Public API exports
"""

from cxplain.core.config import CXPlainConfig, OracleConfig, SearchConfig
from cxplain.core.exceptions import (
    CXPlainError,
    InvalidArgumentError,
    OracleFailure,
    TranslationError,
)
from cxplain.core.types import Statement, StatementSet
from cxplain.explain import ExplanationFinder, Instrumentation, MinimalConflictSearch
from cxplain.models import (
    Assignment,
    CausalExplanationModel,
    ExplanationTask,
    FeatureModel,
    KnowledgeBase,
    parse_assignments,
)
from cxplain.oracle import ConsistencyOracle, PredicateOracle, Z3Oracle, create_oracle
from cxplain.version import __version__

__all__ = [
    "Statement",
    "StatementSet",
    "ConsistencyOracle",
    "PredicateOracle",
    "Z3Oracle",
    "create_oracle",
    "MinimalConflictSearch",
    "ExplanationFinder",
    "Instrumentation",
    "CXPlainConfig",
    "SearchConfig",
    "OracleConfig",
    "CXPlainError",
    "InvalidArgumentError",
    "OracleFailure",
    "TranslationError",
    "Assignment",
    "parse_assignments",
    "KnowledgeBase",
    "FeatureModel",
    "CausalExplanationModel",
    "ExplanationTask",
    "__version__",
]
