"""
cxplain/core/config.py
======================
Global configuration for CXPlain-Core.
All knobs in one place — validated at construction.
"""
from __future__ import annotations
from dataclasses import dataclass, field

VALID_UNKNOWN_POLICIES = frozenset({"raise", "consistent", "inconsistent"})


@dataclass
class SearchConfig:
    trace_recursion: bool = False   # indent DEBUG logs by recursion depth
    collect_timings: bool = True


@dataclass
class OracleConfig:
    timeout_ms:     int = 0         # 0 = no timeout
    unknown_policy: str = "raise"   # "raise" | "consistent" | "inconsistent"

    def __post_init__(self) -> None:
        if self.timeout_ms < 0:
            raise ValueError(f"timeout_ms must be >= 0, got {self.timeout_ms}")
        if self.unknown_policy not in VALID_UNKNOWN_POLICIES:
            raise ValueError(
                f"Invalid unknown_policy '{self.unknown_policy}'. "
                f"Must be one of {sorted(VALID_UNKNOWN_POLICIES)}."
            )


@dataclass
class CXPlainConfig:
    profile: str          = "default"
    search:  SearchConfig = field(default_factory=SearchConfig)
    oracle:  OracleConfig = field(default_factory=OracleConfig)

    @classmethod
    def for_profile(cls, profile: str) -> "CXPlainConfig":
        """Pre-tuned configs."""
        cfg = cls(profile=profile)
        if profile == "default":
            pass
        elif profile == "debug":
            cfg.search.trace_recursion = True
        elif profile == "lenient":
            cfg.oracle.unknown_policy = "consistent"   # solver gave up → assume SAT
        elif profile == "bounded":
            cfg.oracle.timeout_ms = 5000
        else:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                "Available: default, debug, lenient, bounded"
            )
        return cfg


# Singleton default config
DEFAULT_CONFIG = CXPlainConfig()
