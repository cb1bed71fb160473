"""Domain models used throughout the container."""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

__all__ = ["Binding", "Dependency", "Recipe"]

Recipe = Union[Callable[..., Any], type, str]


@dataclass(frozen=True)
class Binding:
    """A registered recipe for producing an object under a given name.

    Attributes:
        name: The canonical key the binding is stored under.
        recipe: A factory callable, a class, or the dotted import path of a class.
        shared: Whether the first resolved object is cached and reused.
    """

    name: str
    recipe: Recipe
    shared: bool


@dataclass(frozen=True)
class Dependency:
    """Represents one formal parameter of a class constructor or function.

    Attributes:
        parameter_name: The parameter name in the signature.
        declared_type: The annotated type, with any ``Annotated`` wrapper removed.
        component_name: The binding named by an ``Annotated`` qualifier, if any.
        default: The declared default, or ``inspect.Parameter.empty``.
        kind: The ``inspect.Parameter`` kind.
    """

    parameter_name: str
    declared_type: Optional[Any]
    component_name: Optional[str]
    default: Any
    kind: Any

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty

    @property
    def keyword_only(self) -> bool:
        return self.kind is inspect.Parameter.KEYWORD_ONLY
