"""
cxplain/core/types.py
=====================
Foundation type system for CXPlain-Core.
Every module imports from here. No circular dependencies.

Two types carry the whole algorithm:

  - Statement     an opaque unit of knowledge. Identity is its label;
                  the attached formula is only ever read by an oracle.
  - StatementSet  an ordered, duplicate-free, immutable collection of
                  hashable statements with union and a deterministic
                  halves-split.

Mathematical basis:
    For C = ⟨c₁, …, c_q⟩ and k = ⌊q/2⌋:
        split(C) = (⟨c₁, …, c_k⟩, ⟨c_{k+1}, …, c_q⟩)
        union(A, B) = A followed by every b ∈ B with b ∉ A
    so union(*split(C)) == C, element for element.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    FrozenSet,
    Generic,
    Hashable,
    Iterable,
    Iterator,
    List,
    Tuple,
    TypeVar,
    Union,
    overload,
)

T = TypeVar("T", bound=Hashable)


# ─────────────────────────────────────────────
#  STATEMENT
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Statement:
    """A single fact, rule or assignment.

    Frozen so statements can be used in sets and as dict keys.
    Equality and hashing use ``label`` only; ``formula`` is an opaque
    payload for oracle backends (a Z3 ``BoolRef`` for ``Z3Oracle``).

    Examples:
        Statement("survey = true", survey_is_true)
        Statement("excludes(ABtesting, nonlicense)", z3.Not(z3.And(a, b)))
    """
    label:   str
    formula: Any = field(default=None, compare=False, hash=False)

    def __post_init__(self):
        if not isinstance(self.label, str) or not self.label:
            raise ValueError("Statement label must be a non-empty string")

    def with_suffix(self, suffix: str) -> "Statement":
        """Return a distinct statement with the same formula.

        Used to keep a copied requirement apart from the configuration
        assignment it duplicates, e.g. ``ABtesting=true [copied]``.
        """
        return Statement(self.label + suffix, self.formula)

    def __str__(self) -> str:
        return self.label

    def __repr__(self) -> str:
        return f"Statement({self.label!r})"


# ─────────────────────────────────────────────
#  STATEMENT SET
# ─────────────────────────────────────────────

class StatementSet(Generic[T]):
    """Ordered, duplicate-free, immutable collection of statements.

    Iteration order is insertion order; the first occurrence of a
    duplicate wins. Two sets are equal only if they hold the same
    statements in the same order, so a returned explanation can be
    compared exactly. Use ``same_members`` to ignore order.

    Usage:
        c = StatementSet(["a", "b", "c"])
        c1, c2 = c.split()            # ⟨a⟩, ⟨b, c⟩
        assert c1.union(c2) == c
    """

    __slots__ = ("_items", "_members")

    def __init__(self, statements: Iterable[T] = ()):
        if isinstance(statements, StatementSet):
            self._items: Tuple[T, ...] = statements._items
            self._members: FrozenSet[T] = statements._members
            return
        # dict preserves insertion order and drops later duplicates
        self._items = tuple(dict.fromkeys(statements))
        self._members = frozenset(self._items)

    @classmethod
    def of(cls, *statements: T) -> "StatementSet[T]":
        return cls(statements)

    @classmethod
    def empty(cls) -> "StatementSet[T]":
        return _EMPTY

    # ─── SET ALGEBRA ───────────────────────────────────────────────

    def union(self, other: Iterable[T]) -> "StatementSet[T]":
        """Statements of ``self`` followed by the unseen ones of ``other``."""
        other_items = other._items if isinstance(other, StatementSet) else tuple(other)
        if not other_items:
            return self
        if not self._items:
            return other if isinstance(other, StatementSet) else StatementSet(other_items)
        extra = [s for s in other_items if s not in self._members]
        if not extra:
            return self
        return StatementSet(self._items + tuple(extra))

    def split(self) -> Tuple["StatementSet[T]", "StatementSet[T]"]:
        """Deterministic halving: first ⌊q/2⌋ statements, then the rest."""
        k = len(self._items) // 2
        return StatementSet(self._items[:k]), StatementSet(self._items[k:])

    def __or__(self, other: Iterable[T]) -> "StatementSet[T]":
        return self.union(other)

    # ─── PREDICATES ────────────────────────────────────────────────

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def is_singleton(self) -> bool:
        return len(self._items) == 1

    @property
    def size(self) -> int:
        return len(self._items)

    def same_members(self, other: Iterable[T]) -> bool:
        """Order-insensitive comparison."""
        return self._members == frozenset(other)

    def issubset(self, other: Iterable[T]) -> bool:
        return self._members <= frozenset(other)

    def to_list(self) -> List[T]:
        return list(self._items)

    def labels(self) -> List[str]:
        return [str(s) for s in self._items]

    # ─── CONTAINER PROTOCOL ────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return item in self._members

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> "StatementSet[T]": ...

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return StatementSet(self._items[index])
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatementSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __str__(self) -> str:
        return "[" + ", ".join(str(s) for s in self._items) + "]"

    def __repr__(self) -> str:
        return f"StatementSet({list(self._items)!r})"


_EMPTY: StatementSet = StatementSet()
