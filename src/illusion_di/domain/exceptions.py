from typing import Any, List, Optional


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotInstantiableError(DIException):
    """Raised when a type identifier cannot be constructed.

    This occurs when:
    - The identifier cannot be imported or does not name a class.
    - The class is abstract or a protocol with no further binding.
    - A required constructor or method argument cannot be supplied.

    Attributes:
        target: The type identifier (class or dotted path) that failed.
        reason: Optional reason for the failure.
    """

    def __init__(self, target: Any, reason: Optional[str] = None) -> None:
        self.target = target
        self.reason = reason
        name = getattr(target, "__qualname__", None) or str(target)
        message = f'"{name}" is not instantiable'
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class UnknownBindingError(DIException):
    """Raised when extending a key that has no registered binding.

    Attributes:
        key: The missing binding key.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Binding "{key}" is not registered')


class InvalidExtensionError(DIException):
    """Raised when an extension is not a callable decorator.

    Attributes:
        key: The binding key being extended.
        extension: The rejected value.
    """

    def __init__(self, key: str, extension: Any) -> None:
        self.key = key
        self.extension = extension
        super().__init__(
            f'Extension for "{key}" must be a callable taking (instance, container), '
            f"got {type(extension).__name__}"
        )


class MissingProtectedEntryError(DIException):
    """Raised by strict protected lookups when the key is absent.

    Attributes:
        key: The missing protected key.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f'Protected entry "{key}" does not exist')


class CircularDependencyError(DIException):
    """Raised when a circular dependency is detected.

    Attributes:
        dependency_chain: List of keys involved in the circular dependency.
    """

    def __init__(self, dependency_chain: List[str]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(dependency_chain)}"
        super().__init__(message)
