"""The container: the single owner of bindings, instances and parameters."""

import inspect
import logging
from threading import RLock
from typing import Any, Callable, Mapping, Optional, Sequence, Union, get_type_hints

from ioc.domain import Binding, Recipe
from ioc.errors import InvalidBindingError
from ioc.instances import InstanceCache
from ioc.invocation import Invoker
from ioc.parameters import ParameterBag
from ioc.registry import BindingRegistry, Extender, inferred_name, key_for
from ioc.resolver import DependencyResolver

__all__ = ["Container"]

log = logging.getLogger(__name__)


class Container:
    """Dependency-injection container.

    Maps names to recipes, builds objects by introspecting constructor
    signatures, and caches shared objects for its own lifetime. Names are
    strings or classes; a class is addressed by its dotted type name.

    All mutations and resolutions are serialised by one re-entrant lock.

    Example:
        >>> container = Container(parameters={"charset": "UTF-8"})
        >>> container.singleton("mailer", Mailer)
        >>> container.make("mailer") is container.make("mailer")
        True
    """

    def __init__(self, parameters: Optional[Mapping[str, Any]] = None):
        self._lock = RLock()
        self._registry = BindingRegistry()
        self._instances = InstanceCache()
        self._parameters = ParameterBag(parameters)
        self._resolver = DependencyResolver(
            self, self._registry, self._instances, self._parameters
        )
        self._invoker = Invoker(self._resolver)

    def bind(
        self, name: Any, recipe: Optional[Recipe] = None, shared: bool = False
    ) -> Binding:
        """Register a binding.

        Args:
            name: A non-empty string or a class.
            recipe: A factory ``(container, parameters) -> object``, a class,
                or a dotted class path. Defaults to ``name``.
            shared: Cache the first resolved object for later resolutions.

        Raises:
            InvalidBindingError: If the name or recipe is malformed.
        """
        with self._lock:
            return self._registry.register(name, recipe, shared)

    def singleton(self, name: Any, recipe: Optional[Recipe] = None) -> Binding:
        """Register a shared binding.

        See:
            :meth:`bind`
        """
        return self.bind(name, recipe, shared=True)

    def provides(self, name: Optional[str] = None, shared: bool = False) -> Callable:
        """Decorator to register a class or provider function.

        Classes are bound under ``name``, or under the class itself. Functions
        are bound under ``name``, or their name with any 'make_' prefix
        removed, and are invoked through :meth:`call` so their parameters are
        injected. A function's class return annotation is aliased to its
        binding, so typed dependencies on that class resolve through it.

        Example:
            @container.provides(shared=True)
            def make_mailer(transport: Transport) -> Mailer:
                return Mailer(transport)
        """

        def decorator(obj):
            if inspect.isclass(obj):
                self.bind(name or obj, obj, shared)
                return obj

            binding_name = name or inferred_name(obj)

            def factory(container, parameters):
                return container.call(obj, parameters)

            with self._lock:
                self.bind(binding_name, factory, shared)
                return_type = get_type_hints(obj).get("return")
                if inspect.isclass(return_type) and return_type.__module__ != "builtins":
                    self._registry.alias(return_type, binding_name)
            return obj

        return decorator

    def exists(self, name: Any) -> bool:
        """Check whether a binding, alias or instance is registered under ``name``.

        Names that are neither a non-empty string nor a class are never registered.
        """
        try:
            key = key_for(name)
        except InvalidBindingError:
            return False

        with self._lock:
            return (
                self._registry.has_binding(key)
                or self._registry.has_alias(key)
                or key in self._instances
            )

    def __contains__(self, name: Any) -> bool:
        return self.exists(name)

    def make(self, name: Any, parameters: Optional[Any] = None) -> Any:
        """Resolve ``name`` into an object.

        Raises:
            NotInstantiableError: If the recipe cannot be constructed.
            UnresolvableDependencyError: If a constructor parameter cannot be
                satisfied.
            CyclicDependencyError: If resolution re-enters a name in progress.
        """
        with self._lock:
            return self._resolver.make(name, parameters)

    def __getitem__(self, name: Any) -> Any:
        return self.make(name)

    def build(self, recipe: Recipe, parameters: Optional[Any] = None) -> Any:
        """Construct an object from a recipe, ignoring bindings for the recipe itself."""
        with self._lock:
            return self._resolver.build(recipe, parameters)

    def instance(self, name: Union[Any, Sequence[Any]], instance: Any):
        """Register an existing object as a shared instance.

        If ``name`` is a list or tuple of names, the object is stored under the
        first and every name is aliased to it.
        """
        with self._lock:
            if isinstance(name, (list, tuple)):
                keys = [key_for(n) for n in name]
                canonical = self._instances.put_many(keys, instance)
                for key in keys:
                    self._registry.alias(key, canonical)
            else:
                canonical = key_for(name)
                self._instances.put(canonical, instance)
            log.debug("container.instance name=%s", canonical)

    def extend(self, name: Any, extender: Extender):
        """Register a post-construction transform ``(object, container) -> object``.

        If ``name`` already has a cached instance, the transform is applied at
        once and replaces the cached entry; otherwise it runs, in registration
        order with other extenders, every time ``name`` is built.
        """
        with self._lock:
            canonical = self._registry.resolve_alias(name)
            if canonical in self._instances:
                self._instances.replace(canonical, lambda obj: extender(obj, self))
                log.debug("container.extend name=%s applied=True", canonical)
            else:
                self._registry.add_extender(canonical, extender)
                log.debug("container.extend name=%s applied=False", canonical)

    def call(self, target: Any, parameters: Optional[Any] = None) -> Any:
        """Call a function or method, injecting its dependencies.

        See:
            :class:`ioc.invocation.Invoker` for the accepted target forms.
        """
        with self._lock:
            return self._invoker.call(target, parameters)

    def get_parameter(self, path: str, default: Any = None) -> Any:
        return self._parameters.get(path, default)

    def set_parameter(self, path: str, value: Any):
        with self._lock:
            self._parameters.set(path, value)

    def has_parameter(self, path: str) -> bool:
        return self._parameters.has(path)

    def get_parameters(self) -> dict[str, Any]:
        with self._lock:
            return self._parameters.all()
