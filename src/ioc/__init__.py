"""ioc: a reflective dependency-injection container.

The container maps names to recipes and builds objects on demand, resolving
constructor and function parameters by introspecting their signatures. Shared
bindings are cached for the container's lifetime; everything else is built
fresh on each resolution.

Key Features:
    - Bindings to factories, classes or dotted class paths
    - Constructor injection driven by standard type hints and ``Annotated`` qualifiers
    - Shared (singleton) bindings and pre-built instances under several aliases
    - Extenders that post-process objects as they are built
    - Method and function invocation with injected parameters
    - A dot-path parameter bag as a fallback source for scalar values
    - Cycle detection during resolution

Basic Usage:
    >>> from ioc import Container
    >>>
    >>> container = Container(parameters={"dsn": "sqlite://"})
    >>>
    >>> class Database:
    ...     def __init__(self, dsn: str):
    ...         self.dsn = dsn
    >>>
    >>> class Repository:
    ...     def __init__(self, db: Database):
    ...         self.db = db
    >>>
    >>> container.singleton(Database)
    >>> container.make(Repository).db.dsn
    'sqlite://'

The package consists of several modules:
    - container: The public ``Container`` API
    - registry: Bindings, aliases, extenders and signature introspection
    - resolver: The resolution and construction algorithm
    - invocation: Injected calls to functions and methods
    - instances: The shared instance cache
    - parameters: The dot-path parameter bag
    - domain: Core domain models (Binding, Dependency)
    - errors: Container-specific exceptions
"""

from ioc.container import Container
from ioc.errors import (
    CyclicDependencyError,
    DependencyError,
    InvalidBindingError,
    NotCallableError,
    NotInstantiableError,
    UnresolvableDependencyError,
)
from ioc.parameters import ParameterBag

__all__ = [
    "Container",
    "ParameterBag",
    "DependencyError",
    "InvalidBindingError",
    "NotInstantiableError",
    "UnresolvableDependencyError",
    "NotCallableError",
    "CyclicDependencyError",
]
