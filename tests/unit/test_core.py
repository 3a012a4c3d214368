"""
tests/unit/test_core.py
=======================
Tests for the cxplain/core support modules:
config profiles, the plugin registry, the exception hierarchy,
the input validators and version information.
"""

import pytest

from cxplain.core.config import (
    DEFAULT_CONFIG,
    CXPlainConfig,
    OracleConfig,
    SearchConfig,
)
from cxplain.core.exceptions import (
    CXPlainError,
    InvalidArgumentError,
    OracleFailure,
    TranslationError,
)
from cxplain.core.registry import Registry
from cxplain.core.types import StatementSet
from cxplain.core.validators import (
    require_statement_set,
    require_statement_sets,
    require_variable,
    validate_statement_set,
    validate_variable,
)
from cxplain.version import VERSION_INFO, VersionInfo, __version__


# ═══════════════════════════════════════════════════════════════════
#  Config
# ═══════════════════════════════════════════════════════════════════


class TestConfig:
    def test_defaults(self):
        cfg = CXPlainConfig()
        assert cfg.profile == "default"
        assert cfg.search.trace_recursion is False
        assert cfg.search.collect_timings is True
        assert cfg.oracle.timeout_ms == 0
        assert cfg.oracle.unknown_policy == "raise"

    def test_default_singleton(self):
        assert isinstance(DEFAULT_CONFIG, CXPlainConfig)
        assert DEFAULT_CONFIG.profile == "default"

    def test_debug_profile(self):
        assert CXPlainConfig.for_profile("debug").search.trace_recursion is True

    def test_lenient_profile(self):
        assert CXPlainConfig.for_profile("lenient").oracle.unknown_policy == "consistent"

    def test_bounded_profile(self):
        cfg = CXPlainConfig.for_profile("bounded")
        assert cfg.oracle.timeout_ms == 5000
        assert cfg.profile == "bounded"

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            CXPlainConfig.for_profile("turbo")

    def test_profiles_do_not_share_state(self):
        CXPlainConfig.for_profile("debug")
        assert CXPlainConfig.for_profile("default").search.trace_recursion is False
        assert SearchConfig().trace_recursion is False

    def test_negative_timeout(self):
        with pytest.raises(ValueError, match="timeout_ms"):
            OracleConfig(timeout_ms=-1)

    def test_invalid_policy(self):
        with pytest.raises(ValueError, match="unknown_policy"):
            OracleConfig(unknown_policy="guess")


# ═══════════════════════════════════════════════════════════════════
#  Registry
# ═══════════════════════════════════════════════════════════════════


class TestRegistry:
    def test_register_and_get(self):
        class Dummy:
            pass

        Registry.register("dummy", Dummy, category="test_core")
        try:
            assert Registry.get("dummy", category="test_core") is Dummy
            assert "dummy" in Registry.list_all("test_core")
        finally:
            Registry.unregister("dummy", category="test_core")

    def test_duplicate_raises(self):
        Registry.register("dup", object, category="test_core")
        try:
            with pytest.raises(KeyError, match="already registered"):
                Registry.register("dup", int, category="test_core")
            Registry.register("dup", int, category="test_core", override=True)
            assert Registry.get("dup", category="test_core") is int
        finally:
            Registry.unregister("dup", category="test_core")

    def test_get_missing_lists_available(self):
        with pytest.raises(KeyError, match="Available"):
            Registry.get("nope", category="oracle")

    def test_builtin_backends_registered(self):
        import cxplain.oracle  # noqa: F401
        import cxplain.models  # noqa: F401

        assert {"z3", "predicate"} <= set(Registry.list_all("oracle"))
        assert "solution" in Registry.list_all("negator")
        assert "oracle" in Registry.list_all()

    def test_decorator(self):
        @Registry.decorator("decorated", category="test_core")
        class Decorated:
            pass

        try:
            assert Registry.get("decorated", category="test_core") is Decorated
        finally:
            Registry.unregister("decorated", category="test_core")

    def test_unregister_missing_is_noop(self):
        Registry.unregister("ghost", category="no_such_category")


# ═══════════════════════════════════════════════════════════════════
#  Exceptions
# ═══════════════════════════════════════════════════════════════════


class TestExceptions:
    def test_hierarchy(self):
        for cls in (InvalidArgumentError, OracleFailure, TranslationError):
            assert issubclass(cls, CXPlainError)

    def test_context_defaults_to_empty(self):
        assert CXPlainError("x").context == {}

    def test_invalid_argument_fields(self):
        err = InvalidArgumentError("bad", argument="req", errors=["req is not set"])
        assert err.argument == "req"
        assert err.errors == ["req is not set"]
        assert str(err) == "bad"

    def test_oracle_failure_reason(self):
        err = OracleFailure("gave up", reason="timeout", context={"timeout_ms": 10})
        assert err.reason == "timeout"
        assert err.context["timeout_ms"] == 10


# ═══════════════════════════════════════════════════════════════════
#  Validators
# ═══════════════════════════════════════════════════════════════════


class TestStatementSetValidators:
    def test_valid_inputs(self):
        assert validate_statement_set(["a", "b"], "kb") == []
        assert validate_statement_set(StatementSet.of("a"), "kb") == []
        assert validate_statement_set((), "kb") == []

    def test_none(self):
        assert validate_statement_set(None, "conf") == ["conf is not set"]

    def test_string(self):
        errs = validate_statement_set("abc", "req")
        assert len(errs) == 1 and "not a string" in errs[0]

    def test_not_iterable(self):
        assert "must be iterable" in validate_statement_set(3.5, "kb")[0]

    def test_unhashable_items(self):
        errs = validate_statement_set(["a", {"b"}, ["c"]], "kb")
        assert errs == ["kb[1] is not hashable (set)", "kb[2] is not hashable (list)"]

    def test_require_returns_statement_set(self):
        s = require_statement_set(["a", "a", "b"], "kb")
        assert s == StatementSet.of("a", "b")

    def test_require_passes_statement_set_through(self):
        s = StatementSet.of("a")
        assert require_statement_set(s, "kb") is s

    def test_require_consumes_generator_once(self):
        s = require_statement_set((c for c in "xyz"), "kb")
        assert s.to_list() == ["x", "y", "z"]

    def test_require_raises(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            require_statement_set(None, "nsconf")
        assert exc_info.value.argument == "nsconf"

    def test_require_many_preserves_keys(self):
        sets = require_statement_sets(a=["x"], b=StatementSet.empty())
        assert list(sets) == ["a", "b"]
        assert sets["b"].is_empty


class TestVariableValidators:
    def test_valid(self):
        assert validate_variable("GSM-radio", ("n", "y")) == []
        assert validate_variable("_x1", ("false", "true")) == []

    def test_bad_name(self):
        assert any("invalid" in e for e in validate_variable("9lives", ("n", "y")))
        assert validate_variable("", ("n", "y")) == ["Variable name is empty"]

    def test_small_domain(self):
        assert any("at least 2" in e for e in validate_variable("a", ("y",)))

    def test_bad_value(self):
        assert any("invalid domain value" in e for e in validate_variable("a", ("n", "")))

    def test_duplicate_values(self):
        assert any("duplicate" in e for e in validate_variable("a", ("y", "y")))

    def test_require_raises_translation_error(self):
        with pytest.raises(TranslationError) as exc_info:
            require_variable("bad name", ("n", "y"))
        assert exc_info.value.context["variable"] == "bad name"


# ═══════════════════════════════════════════════════════════════════
#  Version
# ═══════════════════════════════════════════════════════════════════


class TestVersion:
    def test_version_string(self):
        assert __version__ == str(VERSION_INFO)
        assert __version__.count(".") == 2

    def test_pre_release(self):
        assert str(VersionInfo(1, 2, 3, "rc1")) == "1.2.3-rc1"

    def test_exported_from_package(self):
        import cxplain

        assert cxplain.__version__ == __version__
