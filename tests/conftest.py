"""
tests/conftest.py
==================
Shared pytest fixtures for all CXPlain-Core tests.
"""

from typing import Iterable, List

import pytest

from cxplain.core.types import StatementSet
from cxplain.explain.instrumentation import Instrumentation
from cxplain.models.feature_model import FeatureModel
from cxplain.oracle.base import ConsistencyOracle


# ─── SCRIPTED ORACLE ──────────────────────────────────────────────


class ConflictSetOracle(ConsistencyOracle):
    """Inconsistent iff the queried set contains every statement of at
    least one known conflict. Records every query."""

    def __init__(self, conflicts: Iterable[Iterable[str]]):
        self.conflicts = [frozenset(c) for c in conflicts]
        self.queries: List[StatementSet] = []

    def is_consistent(self, statements: StatementSet) -> bool:
        self.queries.append(statements)
        members = frozenset(statements)
        return not any(conflict <= members for conflict in self.conflicts)


def _is_minimal_conflict(oracle: ConsistencyOracle, explanation, background) -> bool:
    """B ∪ E inconsistent and B ∪ (E \\ {e}) consistent for every e."""
    background = StatementSet(background)
    if oracle.is_consistent(background.union(explanation)):
        return False
    for e in explanation:
        rest = StatementSet(s for s in explanation if s != e)
        if not oracle.is_consistent(background.union(rest)):
            return False
    return True


@pytest.fixture
def is_minimal_conflict():
    return _is_minimal_conflict


@pytest.fixture
def conflict_oracle_factory():
    return ConflictSetOracle


@pytest.fixture
def instrumentation():
    return Instrumentation()


@pytest.fixture
def letters():
    """Sixteen candidate statements a … p."""
    return StatementSet(chr(ord("a") + i) for i in range(16))


# ─── FEATURE MODEL ────────────────────────────────────────────────


@pytest.fixture
def survey_fm():
    fm = FeatureModel("survey")
    fm.add_root("survey")
    for name in (
        "pay", "ABtesting", "statistics", "qa",
        "license", "nonlicense", "multiplechoice", "multiplemedia",
    ):
        fm.add_feature(name)

    fm.add_mandatory("survey", "pay")
    fm.add_optional("survey", "ABtesting")
    fm.add_optional("survey", "statistics")
    fm.add_mandatory("survey", "qa")
    fm.add_alternative("pay", ["license", "nonlicense"])
    fm.add_or("qa", ["multiplechoice", "multiplemedia"])

    fm.add_excludes("ABtesting", "nonlicense")
    fm.add_requires("ABtesting", "statistics")
    return fm


@pytest.fixture
def full_survey_configuration():
    return (
        "survey=true,pay=true,license=true,nonlicense=false,ABtesting=true,"
        "statistics=true,qa=true,multiplechoice=true,multiplemedia=false"
    )
