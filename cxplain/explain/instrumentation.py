"""
cxplain/explain/instrumentation.py
==================================
Call counters and wall-clock timers for the explanation search.

An ``Instrumentation`` object is an explicit context owned by the
finder (or passed in by the caller). Nothing here is module-global, so
repeated or concurrent runs with separate objects never interfere.

Counters are side-channel output only: the returned explanation never
depends on them.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator

TIMER_CXPLAIN = "cxplain"

COUNTER_CONSISTENCY_CHECKS = "consistency_checks"
COUNTER_UNION_OPERATIONS   = "union_operations"
COUNTER_SPLIT_OPERATIONS   = "split_operations"
COUNTER_CXP_CALLS          = "cxp_calls"
COUNTER_LEFT_BRANCH_CALLS  = "left_branch_calls"
COUNTER_RIGHT_BRANCH_CALLS = "right_branch_calls"

COUNTERS = (
    COUNTER_CONSISTENCY_CHECKS,
    COUNTER_UNION_OPERATIONS,
    COUNTER_SPLIT_OPERATIONS,
    COUNTER_CXP_CALLS,
    COUNTER_LEFT_BRANCH_CALLS,
    COUNTER_RIGHT_BRANCH_CALLS,
)


@dataclass
class Instrumentation:
    """Counters for oracle calls, set operations and recursion branches,
    plus cumulative timers in seconds.

    Usage:
        inst = Instrumentation()
        finder = ExplanationFinder(oracle, instrumentation=inst)
        finder.find_explanation(req, kb, conf, nsconf)
        inst.consistency_checks        # → oracle calls made
        inst.reset()
    """
    consistency_checks: int = 0
    union_operations:   int = 0
    split_operations:   int = 0
    cxp_calls:          int = 0
    left_branch_calls:  int = 0
    right_branch_calls: int = 0
    timings: Dict[str, float] = field(default_factory=dict)

    def increment(self, counter: str, step: int = 1) -> None:
        if counter not in COUNTERS:
            raise KeyError(f"Unknown counter '{counter}'. Available: {list(COUNTERS)}")
        setattr(self, counter, getattr(self, counter) + step)

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        """Accumulate wall-clock time spent inside the ``with`` block."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = self.timings.get(name, 0.0) + (time.perf_counter() - t0)

    def elapsed(self, name: str = TIMER_CXPLAIN) -> float:
        return self.timings.get(name, 0.0)

    def reset(self) -> None:
        for counter in COUNTERS:
            setattr(self, counter, 0)
        self.timings.clear()

    def snapshot(self) -> Dict[str, float]:
        """Counters and timers as a flat dict (timers prefixed ``time_``)."""
        data: Dict[str, float] = {c: getattr(self, c) for c in COUNTERS}
        for name, seconds in self.timings.items():
            data[f"time_{name}"] = seconds
        return data

    def summary(self) -> str:
        return (
            f"Instrumentation({self.consistency_checks} consistency checks, "
            f"{self.cxp_calls} cxp calls "
            f"[{self.left_branch_calls} left / {self.right_branch_calls} right], "
            f"{self.union_operations} unions, "
            f"{self.elapsed() * 1000:.2f} ms)"
        )
