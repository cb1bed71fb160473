"""Hierarchical parameter storage addressed by dot-delimited paths."""

import copy
from typing import Any, Mapping, Optional

__all__ = ["ParameterBag"]


class ParameterBag:
    """Nested key/value bag used as a fallback source for scalar dependencies.

    Paths are split on ``"."``; each segment indexes one level of nested dicts.

    Example:
        >>> bag = ParameterBag({"cache": {"type": "apc"}})
        >>> bag.get("cache.type")
        'apc'
        >>> bag.set("cache.type", "files")
        >>> bag.get("cache.type")
        'files'
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None):
        self._parameters: dict[str, Any] = copy.deepcopy(dict(parameters or {}))

    def get(self, path: str, default: Any = None) -> Any:
        """Return the value at ``path``, or ``default`` if any segment is missing."""
        node: Any = self._parameters

        for segment in path.split("."):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]

        return node

    def set(self, path: str, value: Any) -> None:
        """Store ``value`` at ``path``, creating intermediate mappings.

        An intermediate segment that currently holds a scalar is replaced by an
        empty mapping, discarding the scalar.
        """
        *parents, leaf = path.split(".")
        node = self._parameters

        for segment in parents:
            if not isinstance(node.get(segment), dict):
                node[segment] = {}
            node = node[segment]

        node[leaf] = value

    def has(self, path: str) -> bool:
        return self.get(path) is not None

    def all(self) -> dict[str, Any]:
        """Return a deep copy of every stored parameter."""
        return copy.deepcopy(self._parameters)
