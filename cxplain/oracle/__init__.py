"""cxplain/oracle — Consistency oracle capability and its backends."""

from cxplain.oracle.base import (
    ORACLE_CATEGORY,
    ConsistencyOracle,
    PredicateOracle,
    create_oracle,
)
from cxplain.oracle.z3_oracle import Z3Oracle

__all__ = [
    "ORACLE_CATEGORY",
    "ConsistencyOracle",
    "PredicateOracle",
    "Z3Oracle",
    "create_oracle",
]
