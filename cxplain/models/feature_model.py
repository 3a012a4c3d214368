"""
cxplain/models/feature_model.py
===============================
Feature models and their translation into a boolean KnowledgeBase.

Every feature is a variable with domain ⟨false, true⟩. Relationships
and cross-tree constraints become named constraint Statements:

    mandatory(p, c)          p ↔ c
    optional(p, c)           c → p
    alternative(p, c₁..cₙ)   p ↔ (c₁ ∨ … ∨ cₙ)  ∧  Σ cᵢ ≤ 1
    or(p, c₁..cₙ)            p ↔ (c₁ ∨ … ∨ cₙ)
    requires(a, b)           a → b
    excludes(a, b)           ¬(a ∧ b)
    root                     r = true

Constraint order in the produced KB is [root, relationships in the
order they were added, cross-tree constraints in the order they were
added]. That order feeds directly into which minimal explanation the
search returns.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import z3

from cxplain.core.exceptions import TranslationError
from cxplain.models.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)

BOOLEAN_DOMAIN = ("false", "true")


@dataclass(frozen=True)
class Relationship:
    """``kind(source, target₁, …)`` — used for both tree relationships
    and cross-tree constraints."""
    kind:    str
    source:  str
    targets: Tuple[str, ...]

    @property
    def label(self) -> str:
        return f"{self.kind}({', '.join((self.source,) + self.targets)})"

    def formula(self, kb: KnowledgeBase) -> "z3.BoolRef":
        src = kb.eq(self.source, "true")
        tgts = [kb.eq(t, "true") for t in self.targets]
        if self.kind == "mandatory":
            return src == tgts[0]
        if self.kind == "optional":
            return z3.Implies(tgts[0], src)
        if self.kind == "alternative":
            return z3.And(
                src == z3.Or(*tgts),
                z3.Sum([z3.If(t, 1, 0) for t in tgts]) <= 1,
            )
        if self.kind == "or":
            return src == z3.Or(*tgts)
        if self.kind == "requires":
            return z3.Implies(src, tgts[0])
        if self.kind == "excludes":
            return z3.Not(z3.And(src, tgts[0]))
        raise TranslationError(f"Unknown relationship kind '{self.kind}'")  # pragma: no cover


class FeatureModel:
    """A feature tree plus cross-tree constraints.

    Usage:
        fm = FeatureModel("survey")
        fm.add_root("survey")
        fm.add_feature("pay")
        fm.add_mandatory("survey", "pay")
        kb = fm.to_knowledge_base()
    """

    def __init__(self, name: str):
        self.name = name
        self.root: Optional[str] = None
        self._features: List[str] = []
        self._relationships: List[Relationship] = []
        self._cross_tree: List[Relationship] = []

    # ─── FEATURES ──────────────────────────────────────────────────

    def add_root(self, name: str) -> str:
        if self.root is not None:
            raise TranslationError(
                f"Feature model '{self.name}' already has root '{self.root}'",
                context={"root": self.root, "attempted": name},
            )
        self.add_feature(name)
        self.root = name
        return name

    def add_feature(self, name: str) -> str:
        if name in self._features:
            raise TranslationError(
                f"Feature '{name}' already defined in '{self.name}'",
                context={"feature": name},
            )
        self._features.append(name)
        return name

    @property
    def features(self) -> List[str]:
        return list(self._features)

    # ─── RELATIONSHIPS ─────────────────────────────────────────────

    def add_mandatory(self, parent: str, child: str) -> Relationship:
        return self._add("mandatory", parent, (child,), self._relationships)

    def add_optional(self, parent: str, child: str) -> Relationship:
        return self._add("optional", parent, (child,), self._relationships)

    def add_alternative(self, parent: str, children: Sequence[str]) -> Relationship:
        return self._add("alternative", parent, tuple(children), self._relationships)

    def add_or(self, parent: str, children: Sequence[str]) -> Relationship:
        return self._add("or", parent, tuple(children), self._relationships)

    def add_requires(self, left: str, right: str) -> Relationship:
        return self._add("requires", left, (right,), self._cross_tree)

    def add_excludes(self, left: str, right: str) -> Relationship:
        return self._add("excludes", left, (right,), self._cross_tree)

    @property
    def relationships(self) -> List[Relationship]:
        return list(self._relationships)

    @property
    def cross_tree_constraints(self) -> List[Relationship]:
        return list(self._cross_tree)

    def _add(
        self,
        kind: str,
        source: str,
        targets: Tuple[str, ...],
        into: List[Relationship],
    ) -> Relationship:
        if not targets:
            raise TranslationError(f"{kind}({source}) needs at least one target feature")
        for feature in (source,) + targets:
            if feature not in self._features:
                raise TranslationError(
                    f"Unknown feature '{feature}' in {kind} relationship",
                    context={"feature": feature, "model": self.name},
                )
        rel = Relationship(kind, source, targets)
        into.append(rel)
        return rel

    # ─── TRANSLATION ───────────────────────────────────────────────

    def to_knowledge_base(self) -> KnowledgeBase:
        """Translate into a boolean KB: [root, relationships…, cross-tree…]."""
        if self.root is None:
            raise TranslationError(
                f"Feature model '{self.name}' has no root feature",
                context={"model": self.name},
            )

        kb = KnowledgeBase(self.name)
        for feature in self._features:
            kb.add_variable(feature, BOOLEAN_DOMAIN)

        kb.add_constraint(f"{self.root} = true", kb.eq(self.root, "true"))
        for rel in self._relationships + self._cross_tree:
            kb.add_constraint(rel.label, rel.formula)

        logger.debug(
            "Translated feature model '%s': %d features, %d constraints",
            self.name, len(self._features), len(kb.constraints),
        )
        return kb
