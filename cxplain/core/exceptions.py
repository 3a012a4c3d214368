"""
cxplain/core/exceptions.py
==========================
Custom exception hierarchy for CXPlain-Core.

All exceptions carry structured context so callers can
programmatically handle different failure modes.

"No explanation possible" is NOT an exception: it is the empty
StatementSet returned by the finder.
"""

from __future__ import annotations
from typing import List, Optional


class CXPlainError(Exception):
    """Base exception for all CXPlain-Core errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class InvalidArgumentError(CXPlainError):
    """Raised when a top-level input set is absent or malformed.

    Signalled before any oracle call, so no partial work is done.
    """

    def __init__(
        self,
        message: str,
        argument: str,
        errors: Optional[List[str]] = None,
        context: Optional[dict] = None,
    ):
        super().__init__(message, context)
        self.argument = argument
        self.errors = errors or []


class OracleFailure(CXPlainError):
    """Raised by a consistency oracle that cannot give a trustworthy answer
    (solver timeout, unknown result, malformed statement payload).

    The search never retries or recovers; the failure reaches the caller
    unchanged.
    """

    def __init__(self, message: str, reason: str = "", context: Optional[dict] = None):
        super().__init__(message, context)
        self.reason = reason


class TranslationError(CXPlainError):
    """Raised when a domain artifact (assignment string, knowledge base,
    feature model) cannot be turned into statements."""

    pass
