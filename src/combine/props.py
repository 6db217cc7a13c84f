"""
Namespaced property storage for nodes.

Two-level mapping: namespace -> (property name -> value). A namespace exists
only once something has been set under it. Values are opaque.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class MissingNamespaceError(KeyError):
    """Unchecked property access on a namespace that was never created."""

    def __init__(self, namespace: str):
        super().__init__(namespace)
        self.namespace = namespace

    def __str__(self) -> str:
        return f"property namespace {self.namespace!r} does not exist; check has_property() first"


class PropertyBag:
    """Ordered namespace -> name -> value store."""

    def __init__(self):
        self._namespaces: dict[str, dict[str, Any]] = {}

    def set(self, namespace: str, name: str, value: Any) -> None:
        """Set a property, creating its namespace on first use."""
        self._namespaces.setdefault(namespace, {})[name] = value

    def namespace(self, namespace: str) -> dict[str, Any] | None:
        """The namespace's mapping, or None if it was never created."""
        return self._namespaces.get(namespace)

    def has_namespace(self, namespace: str) -> bool:
        return namespace in self._namespaces

    def get(self, namespace: str, name: str) -> Any:
        """
        Get a property value.

        Precondition: the namespace exists. Raises MissingNamespaceError
        otherwise. A missing name inside an existing namespace gives None.
        """
        try:
            values = self._namespaces[namespace]
        except KeyError:
            logger.debug("unchecked access to missing namespace %r (name %r)", namespace, name)
            raise MissingNamespaceError(namespace) from None
        return values.get(name)

    def has(self, namespace: str, name: str) -> bool:
        """True iff the namespace exists and holds the name."""
        values = self._namespaces.get(namespace)
        return values is not None and name in values

    def __repr__(self) -> str:
        return f"PropertyBag({self._namespaces!r})"
