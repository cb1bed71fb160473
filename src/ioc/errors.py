__all__ = [
    "DependencyError",
    "InvalidBindingError",
    "NotInstantiableError",
    "UnresolvableDependencyError",
    "NotCallableError",
    "CyclicDependencyError",
]


class DependencyError(Exception):
    """Raised when a binding or one of its dependencies cannot be resolved."""

    pass


class InvalidBindingError(DependencyError, TypeError):
    """Raised when a binding is registered under a malformed name or recipe."""

    pass


class NotInstantiableError(DependencyError):
    """Raised when a recipe names something that cannot be constructed."""

    pass


class UnresolvableDependencyError(DependencyError):
    """Raised when no source can supply a value for a formal parameter.

    Attributes:
        parameter_name: The name of the unresolved parameter.
        owner: The class or function declaring the parameter.
    """

    def __init__(self, parameter_name: str, owner: str):
        super().__init__(
            f"Unresolvable dependency [{parameter_name}] of [{owner}]"
        )
        self.parameter_name = parameter_name
        self.owner = owner


class NotCallableError(DependencyError, TypeError):
    """Raised when a call target cannot be turned into a callable."""

    pass


class CyclicDependencyError(DependencyError):
    """Raised when resolving a name requires resolving that same name again."""

    def __init__(self, path: list[str]):
        super().__init__(f"Cyclic dependency: {' -> '.join(path)}")
        self.path = path
