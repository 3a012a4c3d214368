"""
tests/unit/test_finder.py
=========================
Tests for cxplain/explain/finder.py — the CXPlain driver.

Covers:
    - argument validation before any oracle call
    - inconsistent forward scenario → empty result
    - result equals a direct cxp(∅, CONF ∪ REQ ∪ KB, NSCONF) call
    - candidate order CONF, REQ, KB
    - driver-level counters and timing
"""

import logging

import pytest

from cxplain.core.config import SearchConfig
from cxplain.core.exceptions import InvalidArgumentError
from cxplain.core.types import StatementSet
from cxplain.explain.finder import ExplanationFinder
from cxplain.explain.instrumentation import TIMER_CXPLAIN, Instrumentation
from cxplain.explain.search import MinimalConflictSearch


REQ = StatementSet(["r1", "r2"])
KB = StatementSet(["k1", "k2", "k3"])
CONF = StatementSet(["c1", "c2"])
NSCONF = StatementSet(["neg"])


# ═══════════════════════════════════════════════════════════════════
#  Validation
# ═══════════════════════════════════════════════════════════════════


class TestValidation:
    @pytest.mark.parametrize("missing", ["req", "kb", "conf", "nsconf"])
    def test_none_argument_raises_before_oracle(self, conflict_oracle_factory, missing):
        oracle = conflict_oracle_factory([{"neg", "k1"}])
        finder = ExplanationFinder(oracle)
        args = {"req": REQ, "kb": KB, "conf": CONF, "nsconf": NSCONF}
        args[missing] = None

        with pytest.raises(InvalidArgumentError) as exc_info:
            finder.find_explanation(**args)

        assert exc_info.value.argument == missing
        assert "is not set" in str(exc_info.value)
        assert oracle.queries == []
        assert finder.instrumentation.consistency_checks == 0

    def test_string_argument_rejected(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([]))
        with pytest.raises(InvalidArgumentError, match="not a string"):
            finder.find_explanation("r1", KB, CONF, NSCONF)

    def test_non_iterable_rejected(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([]))
        with pytest.raises(InvalidArgumentError, match="must be iterable"):
            finder.find_explanation(REQ, 42, CONF, NSCONF)

    def test_all_bad_arguments_reported(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([]))
        with pytest.raises(InvalidArgumentError) as exc_info:
            finder.find_explanation(None, KB, None, NSCONF)
        err = exc_info.value
        assert err.argument == "req"
        assert len(err.errors) == 2
        assert err.context["arguments"] == ["conf", "req"]

    def test_unhashable_element_rejected(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([]))
        with pytest.raises(InvalidArgumentError, match="not hashable"):
            finder.find_explanation(REQ, [["k1"]], CONF, NSCONF)

    def test_plain_lists_accepted(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([{"neg", "k2"}]))
        result = finder.find_explanation(["r1"], ["k1", "k2"], ["c1"], ["neg"])
        assert result == StatementSet.of("k2")

    def test_generators_accepted(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([{"neg", "c2"}]))
        result = finder.find_explanation(
            (r for r in REQ), (k for k in KB), (c for c in CONF), (n for n in NSCONF),
        )
        assert result == StatementSet.of("c2")


# ═══════════════════════════════════════════════════════════════════
#  Explanation
# ═══════════════════════════════════════════════════════════════════


class TestFindExplanation:
    def test_inconsistent_forward_scenario_returns_empty(self, conflict_oracle_factory):
        oracle = conflict_oracle_factory([{"c1", "k2"}])
        inst = Instrumentation()
        finder = ExplanationFinder(oracle, inst)

        result = finder.find_explanation(REQ, KB, CONF, NSCONF)

        assert result.is_empty
        assert inst.consistency_checks == 1
        assert inst.cxp_calls == 0
        assert oracle.queries == [StatementSet(["c1", "c2", "r1", "r2", "k1", "k2", "k3"])]

    def test_inconsistent_forward_scenario_logged(self, conflict_oracle_factory, caplog):
        finder = ExplanationFinder(conflict_oracle_factory([{"r2"}]))
        with caplog.at_level(logging.INFO, logger="cxplain.explain.finder"):
            finder.find_explanation(REQ, KB, CONF, NSCONF)
        assert "No explanation possible" in caplog.text

    def test_explanation_spans_all_sources(self, conflict_oracle_factory, is_minimal_conflict):
        oracle = conflict_oracle_factory([{"neg", "c2", "r1", "k3"}])
        result = ExplanationFinder(oracle).find_explanation(REQ, KB, CONF, NSCONF)
        assert result.to_list() == ["c2", "r1", "k3"]
        assert is_minimal_conflict(oracle, result, NSCONF)

    def test_equals_direct_cxp_call(self, conflict_oracle_factory):
        conflicts = [{"neg", "k1", "c1"}, {"neg", "r2", "k3"}]
        via_finder = ExplanationFinder(conflict_oracle_factory(conflicts)).find_explanation(
            REQ, KB, CONF, NSCONF
        )
        direct = MinimalConflictSearch(conflict_oracle_factory(conflicts)).cxp(
            StatementSet.empty(), CONF.union(REQ).union(KB), NSCONF
        )
        assert via_finder == direct

    def test_background_without_conflict_still_returns_subset(self, conflict_oracle_factory):
        # NSCONF does not conflict with anything: a caller precondition
        # violation, reported as an arbitrary subset rather than an error
        oracle = conflict_oracle_factory([])
        result = ExplanationFinder(oracle).find_explanation(REQ, KB, CONF, NSCONF)
        assert result.issubset(CONF.union(REQ).union(KB))

    def test_duplicates_across_sources_collapse(self, conflict_oracle_factory):
        oracle = conflict_oracle_factory([{"neg", "shared"}])
        result = ExplanationFinder(oracle).find_explanation(
            ["shared"], ["k1", "shared"], ["shared", "c1"], ["neg"]
        )
        assert result == StatementSet.of("shared")


# ═══════════════════════════════════════════════════════════════════
#  Instrumentation
# ═══════════════════════════════════════════════════════════════════


class TestFinderInstrumentation:
    def test_driver_counts(self, conflict_oracle_factory):
        inst = Instrumentation()
        search_inst = Instrumentation()
        conflicts = [{"neg", "k1"}]

        ExplanationFinder(conflict_oracle_factory(conflicts), inst).find_explanation(
            REQ, KB, CONF, NSCONF
        )
        MinimalConflictSearch(conflict_oracle_factory(conflicts), search_inst).cxp(
            StatementSet.empty(), CONF.union(REQ).union(KB), NSCONF
        )

        assert inst.union_operations == search_inst.union_operations + 2
        assert inst.consistency_checks == search_inst.consistency_checks + 1
        assert inst.cxp_calls == search_inst.cxp_calls + 1

    def test_timer_recorded(self, conflict_oracle_factory):
        finder = ExplanationFinder(conflict_oracle_factory([{"neg", "k1"}]))
        finder.find_explanation(REQ, KB, CONF, NSCONF)
        assert TIMER_CXPLAIN in finder.instrumentation.timings
        assert finder.instrumentation.elapsed() >= 0.0

    def test_timer_disabled(self, conflict_oracle_factory):
        finder = ExplanationFinder(
            conflict_oracle_factory([{"neg", "k1"}]),
            config=SearchConfig(collect_timings=False),
        )
        finder.find_explanation(REQ, KB, CONF, NSCONF)
        assert finder.instrumentation.timings == {}

    def test_counters_are_side_channel_only(self, conflict_oracle_factory):
        conflicts = [{"neg", "c1", "k2"}]
        inst = Instrumentation(consistency_checks=1000, union_operations=7)
        with_dirty = ExplanationFinder(conflict_oracle_factory(conflicts), inst).find_explanation(
            REQ, KB, CONF, NSCONF
        )
        clean = ExplanationFinder(conflict_oracle_factory(conflicts)).find_explanation(
            REQ, KB, CONF, NSCONF
        )
        assert with_dirty == clean
