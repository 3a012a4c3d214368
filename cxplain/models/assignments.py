"""
cxplain/models/assignments.py
=============================
Variable assignments and their textual form.

    "pay=true, nonlicense=false"  →  [pay=true, nonlicense=false]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Union

from cxplain.core.exceptions import TranslationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assignment:
    """``variable=value``. Frozen so assignments can live in sets."""
    variable: str
    value:    str

    def __str__(self) -> str:
        return f"{self.variable}={self.value}"


def parse_assignments(text: str) -> List[Assignment]:
    """Parse a comma-separated ``var=value`` list.

    Whitespace around names and values is ignored; an empty or blank
    string yields an empty list.

    Raises:
        TranslationError: if an item has no ``=`` or an empty side.
    """
    assignments: List[Assignment] = []
    if not text or not text.strip():
        return assignments

    for i, item in enumerate(text.split(",")):
        variable, sep, value = item.partition("=")
        variable, value = variable.strip(), value.strip()
        if not sep or not variable or not value:
            raise TranslationError(
                f"Malformed assignment #{i} '{item.strip()}': expected 'variable=value'",
                context={"text": text, "index": i},
            )
        assignments.append(Assignment(variable, value))

    logger.debug("Parsed %d assignment(s) from '%s'", len(assignments), text)
    return assignments


def as_assignments(value: Union[str, Iterable[Assignment]]) -> List[Assignment]:
    """Accept either the textual form or ready-made assignments."""
    if isinstance(value, str):
        return parse_assignments(value)
    assignments = list(value)
    for a in assignments:
        if not isinstance(a, Assignment):
            raise TranslationError(
                f"Expected Assignment, got {type(a).__name__}",
                context={"value": repr(a)},
            )
    return assignments
