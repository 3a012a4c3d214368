"""
cxplain/core/validators.py
==========================
Input validation utilities for CXPlain-Core.

Validates:
    - Top-level statement sets handed to the explanation finder
    - Variable names and domains of knowledge bases

These validators run at API boundaries, never inside the recursive
search. ``validate_*`` functions return a list of error strings;
``require_*`` functions raise a typed exception carrying that list.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any, Dict, List, Sequence

from cxplain.core.exceptions import InvalidArgumentError, TranslationError
from cxplain.core.types import StatementSet


# ─── REGEX PATTERNS ───────────────────────────────────────────────

VARIABLE_NAME_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_\-]*$')
DOMAIN_VALUE_RE  = re.compile(r'^[A-Za-z0-9_][A-Za-z0-9_.\-]*$')


# ─── STATEMENT SET VALIDATION ─────────────────────────────────────

def validate_statement_set(value: Any, name: str) -> List[str]:
    """Validate one top-level input. Returns list of error strings.

    Checks:
        1. Not None
        2. Not a bare string (a string would iterate as characters)
        3. Iterable
        4. Every element hashable
    """
    if value is None:
        return [f"{name} is not set"]
    if isinstance(value, StatementSet):
        return []
    if isinstance(value, (str, bytes)):
        return [f"{name} must be a collection of statements, not a string"]
    if not isinstance(value, Iterable):
        return [f"{name} must be iterable, got {type(value).__name__}"]

    errors: List[str] = []
    for i, item in enumerate(value):
        try:
            hash(item)
        except TypeError:
            errors.append(f"{name}[{i}] is not hashable ({type(item).__name__})")
    return errors


def _materialize(value: Any) -> Any:
    # one-shot iterators must survive validation followed by construction
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, StatementSet)):
        return tuple(value)
    return value


def require_statement_set(value: Any, name: str) -> StatementSet:
    """Coerce ``value`` to a StatementSet or raise InvalidArgumentError."""
    value = _materialize(value)
    errors = validate_statement_set(value, name)
    if errors:
        raise InvalidArgumentError(
            f"Invalid argument '{name}': {errors[0]}",
            argument=name,
            errors=errors,
        )
    return value if isinstance(value, StatementSet) else StatementSet(value)


def require_statement_sets(**named: Any) -> Dict[str, StatementSet]:
    """Validate several inputs at once, in keyword order.

    All inputs are checked before anything is returned, so a failure
    reports every bad argument rather than only the first.
    """
    named = {name: _materialize(value) for name, value in named.items()}
    errors: Dict[str, List[str]] = {}
    for name, value in named.items():
        errs = validate_statement_set(value, name)
        if errs:
            errors[name] = errs
    if errors:
        first = next(iter(errors))
        raise InvalidArgumentError(
            f"Invalid argument '{first}': {errors[first][0]}",
            argument=first,
            errors=[e for errs in errors.values() for e in errs],
            context={"arguments": sorted(errors)},
        )
    return {name: require_statement_set(value, name) for name, value in named.items()}


# ─── KNOWLEDGE BASE VALIDATION ────────────────────────────────────

def validate_variable(name: str, domain: Sequence[str]) -> List[str]:
    """Validate a finite-domain variable declaration.

    Checks:
        1. Name matches ``[A-Za-z_][A-Za-z0-9_-]*``
        2. Domain has at least two values
        3. Every value is a non-empty ground term
        4. No duplicate values
    """
    errors: List[str] = []

    if not name:
        errors.append("Variable name is empty")
    elif not VARIABLE_NAME_RE.match(name):
        errors.append(f"Variable name '{name}' invalid: must be [A-Za-z_][A-Za-z0-9_-]*")

    if len(domain) < 2:
        errors.append(f"Variable '{name}': domain needs at least 2 values, got {len(domain)}")
    for value in domain:
        if not value or not DOMAIN_VALUE_RE.match(value):
            errors.append(f"Variable '{name}': invalid domain value '{value}'")
    if len(set(domain)) != len(domain):
        errors.append(f"Variable '{name}': duplicate domain values")

    return errors


def require_variable(name: str, domain: Sequence[str]) -> None:
    errors = validate_variable(name, domain)
    if errors:
        raise TranslationError(
            f"Invalid variable '{name}': " + "; ".join(errors),
            context={"variable": name, "errors": errors},
        )
