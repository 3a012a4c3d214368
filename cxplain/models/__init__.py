"""cxplain/models — Translation of knowledge bases and feature models into statements."""

from cxplain.models.assignments import Assignment, as_assignments, parse_assignments
from cxplain.models.explanation_model import (
    REQUIREMENT_SUFFIX,
    CausalExplanationModel,
    ExplanationTask,
)
from cxplain.models.feature_model import BOOLEAN_DOMAIN, FeatureModel, Relationship
from cxplain.models.knowledge_base import KnowledgeBase, Variable, car_configuration_kb
from cxplain.models.negator import NEGATOR_CATEGORY, SolutionNegator

__all__ = [
    "Assignment",
    "parse_assignments",
    "as_assignments",
    "KnowledgeBase",
    "Variable",
    "car_configuration_kb",
    "FeatureModel",
    "Relationship",
    "BOOLEAN_DOMAIN",
    "SolutionNegator",
    "NEGATOR_CATEGORY",
    "CausalExplanationModel",
    "ExplanationTask",
    "REQUIREMENT_SUFFIX",
]
