"""
cxplain/oracle/base.py
======================
The consistency oracle capability.

The search depends on exactly one operation:

    is_consistent(StatementSet) -> bool

Implementations must be pure, deterministic predicates over the whole
set: the same statements always give the same answer, and no hidden
state carries over between calls. A backend that cannot answer raises
``OracleFailure``; the search lets it propagate.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable

from cxplain.core.registry import Registry
from cxplain.core.types import StatementSet

logger = logging.getLogger(__name__)

ORACLE_CATEGORY = "oracle"


class ConsistencyOracle(ABC):
    """Decides whether a set of statements is jointly satisfiable."""

    @abstractmethod
    def is_consistent(self, statements: StatementSet) -> bool:
        ...

    def __call__(self, statements: StatementSet) -> bool:
        return self.is_consistent(statements)


@Registry.decorator("predicate", category=ORACLE_CATEGORY)
class PredicateOracle(ConsistencyOracle):
    """Adapts a plain ``Callable[[StatementSet], bool]``.

    Usage:
        oracle = PredicateOracle(lambda s: not {"a", "b"} <= set(s))
    """

    def __init__(self, predicate: Callable[[StatementSet], bool]):
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")
        self._predicate = predicate

    def is_consistent(self, statements: StatementSet) -> bool:
        return bool(self._predicate(statements))


def create_oracle(name: str, **kwargs) -> ConsistencyOracle:
    """Instantiate a registered oracle backend by name."""
    cls = Registry.get(name, category=ORACLE_CATEGORY)
    logger.debug("Creating oracle backend '%s'", name)
    return cls(**kwargs)
