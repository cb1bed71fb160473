"""Call functions and methods with their parameters injected."""

import inspect
import logging
import pkgutil
from typing import Any, Callable, Mapping, Optional

from ioc.errors import NotCallableError
from ioc.registry import get_dependencies
from ioc.resolver import NOTHING, DependencyResolver, locate_type

__all__ = ["Invoker"]

log = logging.getLogger(__name__)


def _describe(target: Any) -> str:
    return getattr(target, "__qualname__", None) or repr(target)


class Invoker:
    """Normalise call targets and invoke them with resolved dependencies.

    Accepted targets:
        - any callable;
        - ``"name:method"``: make ``name`` and call ``method`` on the result;
        - ``"pkg.module.Type::method"``: call ``method`` on the class itself;
        - ``"pkg.module.function"``: a module-level function;
        - ``(target, "method")``: a class, dotted class path or object, and
          the name of the method to call on it.
    """

    def __init__(self, resolver: DependencyResolver):
        self._resolver = resolver

    def call(self, target: Any, parameters: Optional[Any] = None) -> Any:
        """Invoke ``target``, injecting any parameters not supplied by the caller.

        Args:
            target: A call target in one of the accepted forms.
            parameters: Either a mapping of named arguments, or a sequence of
                positional arguments. Named arguments not matching a formal
                parameter are passed positionally after the resolved ones.

        Raises:
            NotCallableError: If the target cannot be turned into a callable.
        """
        func = self._normalise(target)

        if parameters is None:
            named, positional = {}, []
        elif isinstance(parameters, Mapping):
            named, positional = dict(parameters), []
        else:
            named, positional = {}, list(parameters)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for dependency in get_dependencies(func):
            if dependency.parameter_name in named:
                value = named.pop(dependency.parameter_name)
            else:
                value = self._resolver.resolve_by_type(dependency)
                if value is NOTHING and dependency.has_default:
                    value = dependency.default
            if value is NOTHING:
                # Left for the trailing arguments to fill.
                continue
            if dependency.keyword_only:
                kwargs[dependency.parameter_name] = value
            else:
                args.append(value)

        args.extend(named.values())
        args.extend(positional)

        log.debug("container.call target=%s", _describe(func))
        return func(*args, **kwargs)

    def _normalise(self, target: Any) -> Callable:
        if isinstance(target, str):
            func = self._from_string(target)
        elif isinstance(target, (tuple, list)) and len(target) == 2:
            func = self._from_pair(*target)
        else:
            func = target

        if not callable(func):
            raise NotCallableError(f"Callback {target!r} is not callable")
        return func

    def _from_string(self, target: str) -> Any:
        if target.count(":") == 1:
            name, method = target.split(":")
            return self._attribute(self._resolver.make(name), method, target)

        if "::" in target:
            type_path, method = target.split("::", 1)
            return self._attribute(locate_type(type_path), method, target)

        try:
            func = pkgutil.resolve_name(target)
        except (ImportError, AttributeError, ValueError) as exc:
            raise NotCallableError(f"Callback {target!r} is not callable") from exc

        if inspect.isclass(func):
            raise NotCallableError(f"Callback {target!r} is not callable")
        return func

    def _from_pair(self, owner: Any, method: Any) -> Any:
        if not isinstance(method, str):
            raise NotCallableError(f"Callback {(owner, method)!r} is not callable")
        if isinstance(owner, str):
            owner = locate_type(owner)
        return self._attribute(owner, method, (owner, method))

    @staticmethod
    def _attribute(owner: Any, method: str, target: Any) -> Any:
        try:
            return getattr(owner, method)
        except AttributeError as exc:
            raise NotCallableError(f"Callback {target!r} is not callable") from exc
