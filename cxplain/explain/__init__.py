"""cxplain/explain — Minimal-conflict search and the CXPlain driver."""

from cxplain.explain.finder import ExplanationFinder
from cxplain.explain.instrumentation import (
    COUNTERS,
    TIMER_CXPLAIN,
    Instrumentation,
)
from cxplain.explain.search import MinimalConflictSearch

__all__ = [
    "ExplanationFinder",
    "MinimalConflictSearch",
    "Instrumentation",
    "COUNTERS",
    "TIMER_CXPLAIN",
]
