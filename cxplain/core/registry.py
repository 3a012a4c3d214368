"""
cxplain/core/registry.py
========================
Plugin registry — lets callers plug in their own consistency oracles
(or other backends) without modifying core framework code.

Pattern: Registry.register("name", ComponentClass, category="oracle")
         Registry.get("name", category="oracle") → ComponentClass
"""
from __future__ import annotations
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class Registry:
    """Generic component registry with validation.

    Usage:
        # Register a custom oracle backend
        Registry.register("sat4j", MyOracleClass, category="oracle")

        # Retrieve it
        cls = Registry.get("sat4j", category="oracle")
        oracle = cls(**kwargs)
    """
    _store: Dict[str, Dict[str, Any]] = {}    # category → {name → class}

    @classmethod
    def register(
        cls,
        name:      str,
        component: Any,
        category:  str = "default",
        override:  bool = False,
    ) -> None:
        if category not in cls._store:
            cls._store[category] = {}
        if name in cls._store[category] and not override:
            raise KeyError(
                f"Component '{name}' already registered in category '{category}'. "
                "Use override=True to replace."
            )
        cls._store[category][name] = component
        logger.debug("Registered [%s] '%s'", category, name)

    @classmethod
    def unregister(cls, name: str, category: str = "default") -> None:
        cls._store.get(category, {}).pop(name, None)

    @classmethod
    def get(cls, name: str, category: str = "default") -> Any:
        try:
            return cls._store[category][name]
        except KeyError:
            available = sorted(cls._store.get(category, {}).keys())
            raise KeyError(
                f"Component '{name}' not found in category '{category}'. "
                f"Available: {available}"
            ) from None

    @classmethod
    def list_all(cls, category: Optional[str] = None) -> Dict:
        if category:
            return dict(cls._store.get(category, {}))
        return {cat: list(items.keys()) for cat, items in cls._store.items()}

    @classmethod
    def decorator(cls, name: str, category: str = "default"):
        """Use as decorator: @Registry.decorator('z3', category='oracle')"""
        def _register(component):
            cls.register(name, component, category=category)
            return component
        return _register
