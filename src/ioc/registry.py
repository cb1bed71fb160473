"""Registration and introspection utilities for bindings."""

import inspect
import logging
import types
from collections import defaultdict
from typing import (
    Annotated,
    Any,
    Callable,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from ioc.domain import Binding, Dependency, Recipe
from ioc.errors import InvalidBindingError

__all__ = [
    "BindingRegistry",
    "Extender",
    "key_for",
    "type_name",
    "inferred_name",
    "get_dependencies",
]

log = logging.getLogger(__name__)

Extender = Callable[[Any, Any], Any]


def type_name(cls: type) -> str:
    """Return the dotted name a class is keyed by.

    Example:
        >>> type_name(collections.OrderedDict)  # Returns "collections.OrderedDict"
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def key_for(name: Any) -> str:
    """Normalise a binding name to the string key it is stored under.

    Args:
        name: A non-empty string, or a class.

    Raises:
        InvalidBindingError: If ``name`` is neither.
    """
    if inspect.isclass(name):
        return type_name(name)
    if isinstance(name, str) and name:
        return name
    raise InvalidBindingError(
        f"Binding name must be a non-empty string or a class, got {name!r}"
    )


def inferred_name(target: Any) -> str:
    """Derive a binding name from a class or function, removing a 'make_' prefix.

    Example:
        >>> inferred_name(Mailer)       # Returns "Mailer"
        >>> inferred_name(make_mailer)  # Returns "mailer"
    """
    if inspect.isclass(target):
        return target.__name__

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    else:
        return target.__name__


def _is_type_reference(recipe: Any) -> bool:
    return isinstance(recipe, str) or inspect.isclass(recipe)


class BindingRegistry:
    """Bindings, aliases and extenders, keyed by canonical name."""

    def __init__(self):
        self._bindings: dict[str, Binding] = {}
        self._aliases: dict[str, str] = {}
        self._extenders: dict[str, list[Extender]] = defaultdict(list)

    def register(
        self, name: Any, recipe: Optional[Recipe] = None, shared: bool = False
    ) -> Binding:
        """Register a binding, replacing any previous binding under the same name.

        If ``recipe`` is a type reference (a class or a dotted class path), the
        recipe's own key becomes an alias of ``name``, so requests for that type
        are served by this binding.

        Args:
            name: The name to bind.
            recipe: A factory, a class or a dotted class path. Defaults to ``name``.
            shared: Whether resolved objects are cached.

        Raises:
            InvalidBindingError: If the name or recipe is malformed.
        """
        key = key_for(name)

        if recipe is None:
            recipe = name
        elif _is_type_reference(recipe):
            recipe_key = key_for(recipe)
            if recipe_key != key:
                self.alias(recipe_key, key)
        elif not callable(recipe):
            raise InvalidBindingError(
                f"Recipe for [{key}] must be a factory, a class or a class path, "
                f"got {recipe!r}"
            )

        binding = Binding(key, recipe, shared)
        self._bindings[key] = binding
        log.debug("container.bind name=%s shared=%s", key, shared)
        return binding

    def alias(self, alias: Any, name: Any):
        alias_key, name_key = key_for(alias), key_for(name)
        self._aliases[alias_key] = name_key
        log.debug("container.alias alias=%s name=%s", alias_key, name_key)

    def resolve_alias(self, name: Any) -> str:
        """Resolve a name through a single alias hop."""
        key = key_for(name)
        return self._aliases.get(key, key)

    def binding(self, name: str) -> Optional[Binding]:
        return self._bindings.get(name)

    def is_shared(self, name: str) -> bool:
        binding = self._bindings.get(name)
        return binding.shared if binding else False

    def has_binding(self, name: Any) -> bool:
        return key_for(name) in self._bindings

    def has_alias(self, name: Any) -> bool:
        return key_for(name) in self._aliases

    def add_extender(self, name: str, extender: Extender):
        self._extenders[name].append(extender)

    def extenders(self, name: str) -> list[Extender]:
        return list(self._extenders.get(name, []))


def get_dependencies(target: Callable) -> list[Dependency]:
    """Extract dependency information from a class constructor or function.

    Variadic parameters are skipped. For classes, annotations are read from
    ``__init__``, or from ``__new__`` when the class only defines that; a class
    whose signature cannot be introspected is treated as having no parameters.

    Example:
        >>> def service(untyped, db: Database, cache: Annotated[Cache, "redis"]): ...
        >>> get_dependencies(service)
        >>> # [Dependency("untyped", None, None, empty, POSITIONAL_OR_KEYWORD),
        >>> #  Dependency("db", Database, None, empty, POSITIONAL_OR_KEYWORD),
        >>> #  Dependency("cache", Cache, "redis", empty, POSITIONAL_OR_KEYWORD)]
    """
    try:
        sig = inspect.signature(target)
    except ValueError:
        return []
    if not sig.parameters:
        return []

    try:
        hints = get_type_hints(_annotated_callable(target), include_extras=True)
    except (NameError, TypeError):
        # Unevaluable string annotations leave their parameters untyped.
        hints = {
            name: param.annotation
            for name, param in sig.parameters.items()
            if param.annotation is not param.empty
            and not isinstance(param.annotation, str)
        }

    return [
        _make_dependency(param, hints.get(name))
        for name, param in sig.parameters.items()
        if param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def _annotated_callable(target: Callable) -> Any:
    # Callable instances are introspected through __call__.
    if inspect.isclass(target):
        if target.__init__ is object.__init__:
            return target.__new__
        return target.__init__
    if inspect.isfunction(target) or inspect.ismethod(target):
        return target
    return getattr(target, "__call__", target)


def _unwrap_optional(annotation):
    """Reduce ``Optional[X]`` and ``X | None`` to ``X`` when ``X`` is a class."""
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation

    members = get_args(annotation)
    classes = [m for m in members if m is not type(None)]
    if len(members) == 2 and len(classes) == 1 and inspect.isclass(classes[0]):
        return classes[0]
    return annotation


def _make_dependency(param: inspect.Parameter, annotation) -> Dependency:
    if annotation is not None and get_origin(annotation) is Annotated:
        base_type, *metadata = get_args(annotation)
        component_name = next((m for m in metadata if isinstance(m, str)), None)
        return Dependency(
            param.name,
            _unwrap_optional(base_type),
            component_name,
            param.default,
            param.kind,
        )
    return Dependency(
        param.name, _unwrap_optional(annotation), None, param.default, param.kind
    )
