"""
Module for resolving names into constructed objects.

The resolver turns a requested name into an object by following the alias
table, consulting the instance cache, and building the bound recipe. Classes
are built by introspecting their constructor signature and resolving every
formal parameter with a fixed precedence:

    1. an explicit parameter passed by the caller, matched by name;
    2. the container itself, if the parameter is typed as the container;
    3. a nested resolution of the parameter's ``Annotated`` qualifier or class;
    4. a value from the parameter bag at the parameter's name;
    5. the parameter's declared default.

A parameter none of these can satisfy raises ``UnresolvableDependencyError``
before the constructor is called.
"""

import inspect
import logging
import pkgutil
from functools import reduce
from typing import Any, Mapping, Optional, get_origin

from ioc.domain import Dependency, Recipe
from ioc.errors import (
    CyclicDependencyError,
    NotInstantiableError,
    UnresolvableDependencyError,
)
from ioc.instances import InstanceCache
from ioc.parameters import ParameterBag
from ioc.registry import BindingRegistry, get_dependencies, key_for, type_name

__all__ = ["DependencyResolver", "NOTHING", "locate_type"]

log = logging.getLogger(__name__)

NOTHING = object()


def locate_type(path: str) -> type:
    """Import the class named by a dotted path.

    Raises:
        NotInstantiableError: If the path cannot be imported or is not a class.
    """
    try:
        target = pkgutil.resolve_name(path)
    except (ImportError, AttributeError, ValueError) as exc:
        raise NotInstantiableError(f"Target [{path}] not instantiable") from exc

    if not inspect.isclass(target):
        raise NotInstantiableError(f"Target [{path}] not instantiable")
    return target


def _is_class(declared: Any) -> bool:
    return inspect.isclass(declared) and get_origin(declared) is None


def _is_injectable(declared: Any) -> bool:
    return _is_class(declared) and declared.__module__ != "builtins"


def _is_instantiable(cls: type) -> bool:
    return not inspect.isabstract(cls) and not getattr(cls, "_is_protocol", False)


class DependencyResolver:
    """Build objects over the registry, cache and parameters of a container.

    The resolver keeps no bindings of its own. The only state it tracks is the
    chain of names currently being made, used to detect cycles.
    """

    def __init__(
        self,
        container: Any,
        registry: BindingRegistry,
        instances: InstanceCache,
        parameters: ParameterBag,
    ):
        self._container = container
        self._registry = registry
        self._instances = instances
        self._parameters = parameters
        self._resolving: list[str] = []

    def make(self, name: Any, parameters: Optional[Any] = None) -> Any:
        """Resolve a name into an object.

        Args:
            name: A binding name, alias, dotted class path or class.
            parameters: Explicit parameters, passed to factories verbatim and
                matched by name against constructor parameters.

        Returns:
            The cached instance if one exists, otherwise a newly built object
            with all extenders applied.

        Raises:
            CyclicDependencyError: If the name is already being resolved.
        """
        key = key_for(name)
        canonical = self._registry.resolve_alias(key)

        if canonical in self._instances:
            return self._instances[canonical]

        if canonical in self._resolving:
            start = self._resolving.index(canonical)
            raise CyclicDependencyError(self._resolving[start:] + [canonical])

        binding = self._registry.binding(canonical)
        if binding:
            recipe = binding.recipe
        elif inspect.isclass(name) and canonical == key:
            recipe = name
        else:
            recipe = canonical

        self._resolving.append(canonical)
        try:
            built = self.build(recipe, parameters)
            built = reduce(
                lambda obj, extender: extender(obj, self._container),
                self._registry.extenders(canonical),
                built,
            )
        finally:
            self._resolving.pop()

        if self._registry.is_shared(canonical):
            self._instances.put(canonical, built)

        log.debug(
            "container.make name=%s type=%s", canonical, type(built).__name__
        )
        return built

    def build(self, recipe: Recipe, parameters: Optional[Any] = None) -> Any:
        """Construct an object directly from a recipe, bypassing bindings.

        Factories are called with the container and the explicit parameters.
        Classes, and dotted class paths, are constructed with their
        dependencies resolved.

        Raises:
            NotInstantiableError: If the recipe names an abstract class, a
                protocol, or something that is not a class.
            UnresolvableDependencyError: If a constructor parameter cannot be
                satisfied.
        """
        if parameters is None:
            parameters = {}

        if callable(recipe) and not inspect.isclass(recipe):
            return recipe(self._container, parameters)

        cls = locate_type(recipe) if isinstance(recipe, str) else recipe
        if not inspect.isclass(cls) or not _is_instantiable(cls):
            raise NotInstantiableError(f"Target [{recipe!r}] not instantiable")

        dependencies = get_dependencies(cls)
        if not dependencies:
            return cls()

        named = parameters if isinstance(parameters, Mapping) else {}
        args, kwargs = self.resolve_dependencies(dependencies, named, type_name(cls))
        log.debug("container.build type=%s", type_name(cls))
        return cls(*args, **kwargs)

    def resolve_dependencies(
        self,
        dependencies: list[Dependency],
        parameters: Mapping[str, Any],
        owner: str,
    ) -> tuple[list[Any], dict[str, Any]]:
        """Resolve every dependency into positional and keyword arguments."""
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for dependency in dependencies:
            value = self._resolve_dependency(dependency, parameters, owner)
            if dependency.keyword_only:
                kwargs[dependency.parameter_name] = value
            else:
                args.append(value)

        return args, kwargs

    def resolve_by_type(self, dependency: Dependency) -> Any:
        """Resolve a dependency from its declared type alone.

        Returns the container for parameters typed as the container, the made
        qualifier or class for injectable types, and ``NOTHING`` otherwise.
        """
        declared = dependency.declared_type

        if (
            _is_class(declared)
            and declared is not object
            and isinstance(self._container, declared)
        ):
            return self._container
        if dependency.component_name:
            return self.make(dependency.component_name)
        if _is_injectable(declared):
            return self.make(declared)
        return NOTHING

    def _resolve_dependency(
        self, dependency: Dependency, parameters: Mapping[str, Any], owner: str
    ) -> Any:
        if dependency.parameter_name in parameters:
            return parameters[dependency.parameter_name]

        value = self.resolve_by_type(dependency)
        if value is not NOTHING:
            return value

        value = self._parameters.get(dependency.parameter_name)
        if value is not None:
            return value

        if dependency.has_default:
            return dependency.default

        raise UnresolvableDependencyError(dependency.parameter_name, owner)
