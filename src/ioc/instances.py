"""Cache of shared and pre-registered instances."""

from typing import Any, Callable, Sequence

__all__ = ["InstanceCache"]

_MISSING = object()


class InstanceCache:
    """Mapping of canonical names to constructed objects.

    Membership, not truthiness, decides a hit: ``None`` is a valid instance.
    """

    def __init__(self):
        self._instances: dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        return self._instances[name]

    def __contains__(self, name: str) -> bool:
        return name in self._instances

    def get(self, name: str, default: Any = None) -> Any:
        return self._instances.get(name, default)

    def put(self, name: str, instance: Any):
        self._instances[name] = instance

    def put_many(self, names: Sequence[str], instance: Any) -> str:
        """Store ``instance`` once under the first of ``names``.

        Returns:
            The canonical name the instance was stored under. The caller is
            responsible for aliasing every name to it.
        """
        if not names:
            raise ValueError("At least one name is required")
        canonical = names[0]
        self._instances[canonical] = instance
        return canonical

    def replace(self, name: str, transform: Callable[[Any], Any]) -> Any:
        """Apply ``transform`` to the cached instance and store its result."""
        current = self._instances.get(name, _MISSING)
        if current is _MISSING:
            raise KeyError(name)
        replaced = transform(current)
        self._instances[name] = replaced
        return replaced
