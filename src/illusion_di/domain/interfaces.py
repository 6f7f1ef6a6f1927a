from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Sequence

from illusion_di.domain.models import Binding


class IContainer(ABC):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def register(self, key: Any, target: Any = None, shared: bool = False) -> None:
        """Register a construction recipe under a key.

        Args:
            key: The key to register.
            target: A type identifier, factory, or built instance.
            shared: Whether resolutions share a single instance.
        """

    @abstractmethod
    def resolve(self, key: Any, extra_args: Optional[Sequence[Any]] = None) -> Any:
        """Resolve and return the object bound to a key.

        Args:
            key: The key (or type identifier) to resolve.
            extra_args: Positional arguments for non-service parameters or factories.
        """

    @abstractmethod
    def has(self, key: Any) -> bool:
        """Check whether a binding exists for a key."""

    @abstractmethod
    def extend(self, key: Any, decorator: Callable[[Any, "IContainer"], Any]) -> Any:
        """Append a decorator to a binding and return the decorated value."""

    @abstractmethod
    def invoke_method(self, target: str, extra_args: Optional[Sequence[Any]] = None) -> Any:
        """Resolve ``"TypeIdentifier@method"`` and call the method with autowired arguments."""

    @abstractmethod
    def flush(self) -> None:
        """Clear all bindings, instances, extensions and protected entries."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[str, Binding]:
        """Get a copy of the current bindings."""


class IResolver(ABC):
    """Abstract interface for autowiring operations."""

    @abstractmethod
    def build(self, target: Any, container: IContainer, extra_args: Sequence[Any] = ()) -> Any:
        """Construct a type, autowiring its constructor parameters.

        Args:
            target: The class or dotted path to construct.
            container: The DI container used for nested resolutions.
            extra_args: Positional arguments for non-service parameters.

        Returns:
            Instance with all dependencies injected.

        Raises:
            NotInstantiableError: If the type or one of its arguments cannot be supplied.
        """

    @abstractmethod
    def call(self, function: Callable[..., Any], container: IContainer, extra_args: Sequence[Any] = ()) -> Any:
        """Call a function or bound method, autowiring its parameters."""


class IServiceProvider(ABC):
    """A bundle of registrations applied to a container in one step."""

    @abstractmethod
    def register(self, container: IContainer) -> None:
        """Register services in the container.

        Args:
            container: The container to register bindings in.
        """
