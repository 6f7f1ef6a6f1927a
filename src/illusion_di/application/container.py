import inspect
import logging
from contextlib import nullcontext
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from illusion_di.application.binding_registry import BindingRegistry
from illusion_di.application.circular_detector import CircularDependencyDetector
from illusion_di.application.extension_pipeline import ExtensionPipeline
from illusion_di.application.instance_cache import InstanceCache
from illusion_di.application.protected_store import ProtectedStore
from illusion_di.application.resolver import DependencyResolver
from illusion_di.domain import (
    Binding,
    ContainerOptions,
    ContainerSnapshot,
    IContainer,
    IResolver,
    IServiceProvider,
    InvalidExtensionError,
    MissingProtectedEntryError,
    NotInstantiableError,
    RecipeKind,
    UnknownBindingError,
    canonical_name,
)

logger = logging.getLogger(__name__)

MethodTarget = Union[str, Tuple[Any, str]]


class DIContainer(IContainer):
    """Main dependency injection container.

    Maps string keys to construction recipes and resolves them into live
    objects, autowiring service-typed constructor and method parameters.
    Classes may be used wherever a key is expected; they are addressed by
    their dotted import path.

    Keys are also reachable with index and attribute syntax::

        container["mailer"] = "app.mail.Mailer"     # register(..., shared=False)
        container.mailer                            # resolve("mailer")
        "mailer" in container                       # has("mailer")
        del container["mailer"]                     # delete("mailer")

    Attributes:
        _registry: Bindings by key.
        _cache: Shared instances and resolved markers by key.
        _extensions: Decorator chains by key.
        _protected: Protected factories and values by key.
        _resolver: Component responsible for auto-wiring dependencies.
        _circular_detector: Component detecting circular dependencies.
        _options: Behavioral switches.
    """

    def __init__(
        self,
        bindings: Optional[Dict[Any, Any]] = None,
        options: Optional[ContainerOptions] = None,
    ) -> None:
        """Initialize the DI container.

        Args:
            bindings: Optional initial mapping of key to target, registered as transient.
            options: Optional behavioral switches. Defaults to ``ContainerOptions()``.
        """
        self._options = options or ContainerOptions()
        self._registry = BindingRegistry()
        self._cache = InstanceCache()
        self._extensions = ExtensionPipeline()
        self._protected = ProtectedStore()
        self._resolver: IResolver = DependencyResolver(autowire=self._options.autowire)
        self._circular_detector = CircularDependencyDetector()

        for key, target in (bindings or {}).items():
            self.register(key, target)

    @staticmethod
    def _key(key: Any) -> str:
        """Normalize a key; classes are addressed by their canonical dotted path."""
        if inspect.isclass(key):
            return canonical_name(key)
        return key

    @property
    def options(self) -> ContainerOptions:
        return self._options

    # Registration

    def register(self, key: Any, target: Any = None, shared: bool = False) -> None:
        """Register a construction recipe under a key.

        Args:
            key: The key to register. A class key registers under its dotted path.
            target: A class or dotted path, a factory ``(*args, container)``, or a built object.
                    Defaults to the key with its last segment capitalized.
            shared: Whether resolutions share a single instance.

        Example:
            >>> container.register("mailer", "app.mail.Mailer")
            >>> container.register("clock", lambda c: SystemClock())
            >>> container.register("settings", {"debug": True})
        """
        name = self._key(key)
        if target is None and inspect.isclass(key):
            target = key

        binding = self._registry.add(name, target, shared)
        self._cache.evict(name)
        logger.debug("Registered %s binding %r (shared=%s)", binding.kind, name, shared)

    def singleton(self, key: Any, target: Any = None) -> None:
        """Register a shared binding; every resolution returns the same object."""
        self.register(key, target, shared=True)

    def share(self, key: Any, target: Any = None) -> None:
        """Alias of :meth:`singleton`."""
        self.register(key, target, shared=True)

    def instance(self, key: Any, instance: Any, shared: bool = True) -> None:
        """Bind an already-built object, bypassing construction.

        Args:
            key: The key to register.
            instance: The object returned on resolution.
            shared: When True the object is cached immediately.
        """
        name = self._key(key)
        self._registry.add_instance(name, instance, shared)
        if shared:
            self._cache.store(name, instance)
        else:
            self._cache.evict(name)
        logger.debug("Registered instance binding %r (shared=%s)", name, shared)

    def register_provider(self, provider: IServiceProvider) -> IServiceProvider:
        """Let a service provider register its bindings.

        Returns:
            The provider, for chaining or inspection.
        """
        provider.register(self)
        return provider

    def has(self, key: Any) -> bool:
        return self._registry.has(self._key(key))

    def get(self, key: Any) -> Optional[Binding]:
        """Get the binding stored for a key, or None if there is none."""
        return self._registry.get(self._key(key))

    def delete(self, key: Any) -> None:
        """Remove a binding together with its cached instance and resolved marker."""
        name = self._key(key)
        self._registry.remove(name)
        self._cache.forget(name)

    # Resolution

    def resolve(self, key: Any, extra_args: Optional[Sequence[Any]] = None) -> Any:
        """Resolve and return the object bound to a key.

        Unbound keys are treated as type identifiers and constructed directly.

        Args:
            key: The key, class or dotted path to resolve.
            extra_args: Positional arguments. Factories receive them before the container;
                        constructors receive them for parameters that are not autowired.

        Returns:
            The resolved object, after every extension for the key has been applied.

        Raises:
            NotInstantiableError: If a type in the graph cannot be constructed.
            CircularDependencyError: If the key depends on itself.

        Example:
            >>> mailer = container.resolve("mailer")
            >>> report = container.resolve("app.reports.Report", [2024])
        """
        name = self._key(key)
        if self._cache.has(name):
            return self._cache.get(name)

        tracking = self._circular_detector.track(name) if self._options.detect_cycles else nullcontext()
        with tracking:
            binding = self._registry.get(name)
            instance = self._construct(key, name, binding, extra_args or ())
            instance = self._extensions.apply(name, instance, self)

        if binding is not None and binding.shared:
            self._cache.store(name, instance)
        self._cache.mark_resolved(name)
        return instance

    def _construct(self, key: Any, name: str, binding: Optional[Binding], extra_args: Sequence[Any]) -> Any:
        if binding is None:
            logger.debug("No binding for %r, constructing it as a type", name)
            return self._resolver.build(key if inspect.isclass(key) else name, self, extra_args)

        if binding.kind is RecipeKind.INSTANCE:
            return binding.value
        if binding.kind is RecipeKind.FACTORY:
            logger.debug("Calling factory for %r", name)
            return binding.value(*extra_args, self)
        return self._resolver.build(binding.value, self, extra_args)

    def invoke_method(self, target: MethodTarget, extra_args: Optional[Sequence[Any]] = None) -> Any:
        """Resolve a type and call one of its methods with autowired arguments.

        Args:
            target: ``"TypeIdentifier@method"`` or a ``(type_or_key, method_name)`` pair.
            extra_args: Positional values for method parameters that are not autowired.

        Returns:
            The method's return value.

        Raises:
            NotInstantiableError: If the target is malformed, the method does not exist,
                                  or a parameter cannot be supplied.

        Example:
            >>> container.invoke_method("app.billing.Invoice@total", [0.2])
        """
        if isinstance(target, tuple):
            type_target, method_name = target
        elif isinstance(target, str) and "@" in target:
            type_target, _, method_name = target.rpartition("@")
            if not self.has(type_target):
                type_target = canonical_name(type_target)
        else:
            raise NotInstantiableError(target, 'Method targets look like "TypeIdentifier@method".')

        instance = self.resolve(type_target)
        method = getattr(instance, method_name, None)
        if not callable(method):
            raise NotInstantiableError(type_target, f"Method '{method_name}' does not exist.")

        return self._resolver.call(method, self, extra_args or ())

    # Extensions

    def extend(self, key: Any, decorator: Callable[[Any, IContainer], Any]) -> Any:
        """Decorate a binding's value now and on every later construction.

        Args:
            key: A registered key.
            decorator: Callable ``(instance, container) -> instance``.

        Returns:
            The decorated current value.

        Raises:
            UnknownBindingError: If the key has no binding.
            InvalidExtensionError: If the decorator is not a callable.

        Example:
            >>> container.extend("mailer", lambda mailer, c: RetryingMailer(mailer))
        """
        name = self._key(key)
        binding = self._registry.get(name)
        if binding is None:
            raise UnknownBindingError(name)
        if not callable(decorator) or inspect.isclass(decorator):
            raise InvalidExtensionError(name, decorator)

        current = self._cache.get(name) if self._cache.has(name) else self.resolve(key)

        self._extensions.add(name, decorator)
        extended = decorator(current, self)
        if binding.shared:
            self._cache.store(name, extended)
        logger.debug("Extended binding %r", name)
        return extended

    # Shared instances

    def delete_instance(self, key: Any) -> None:
        """Evict a cached shared instance; the binding stays and rebuilds on next resolve."""
        self._cache.evict(self._key(key))

    def delete_instances(self) -> None:
        """Evict every cached shared instance."""
        self._cache.evict_all()
        logger.debug("Evicted all shared instances")

    def flush(self) -> None:
        """Clear all bindings, instances, extensions and protected entries.

        Useful for testing or resetting the container state.
        """
        self._registry.clear()
        self._cache.clear()
        self._extensions.clear()
        self._protected.clear()
        self._circular_detector.clear()

    # Protected parameters

    def protect(self, key: Any, value: Any) -> None:
        """Store a factory or value that is never autowired, cached or decorated."""
        self._protected.add(self._key(key), value)

    def has_protected(self, key: Any) -> bool:
        return self._protected.has(self._key(key))

    def get_protected(self, key: Any, args: Optional[Sequence[Any]] = None, strict: bool = False) -> Any:
        """Produce a protected entry.

        Callables are invoked as ``factory(*args, container)`` on every call;
        other values, classes included, are returned verbatim.

        Args:
            key: The protected key.
            args: Positional arguments passed before the container.
            strict: Raise instead of returning None when the key is absent.

        Raises:
            MissingProtectedEntryError: If ``strict`` and the key is absent.
        """
        name = self._key(key)
        if not self._protected.has(name):
            if strict:
                raise MissingProtectedEntryError(name)
            return None
        return self._protected.call(name, args or (), self)

    # Introspection

    def keys(self) -> ContainerSnapshot:
        """Snapshot the keys held by each internal store."""
        return ContainerSnapshot(
            bindings=list(self._registry),
            resolved=self._cache.resolved_keys(),
            instances=self._cache.instance_keys(),
            extensions=self._extensions.keys(),
        )

    def get_registry_copy(self) -> Dict[str, Binding]:
        """Get a copy of the bindings, e.g. for test containers.

        Returns:
            Copy of the current bindings.
        """
        return self._registry.copy()

    def set_registry(self, registry: Dict[str, Binding]) -> None:
        """Replace the bindings with ones copied from another container.

        Args:
            registry: Bindings to adopt.
        """
        self._registry.replace(registry)
        self._cache.clear()
        for key, binding in registry.items():
            if binding.kind is RecipeKind.INSTANCE and binding.shared:
                self._cache.store(key, binding.value)

    def get_extensions_copy(self) -> Dict[str, List[Callable[[Any, IContainer], Any]]]:
        """Get a copy of the decorator chains, e.g. for test containers."""
        return self._extensions.copy()

    def set_extensions(self, extensions: Dict[str, List[Callable[[Any, IContainer], Any]]]) -> None:
        """Replace the decorator chains with ones copied from another container.

        Cached shared instances are evicted so they are rebuilt through the new chains.
        """
        self._extensions.replace(extensions)
        for key in extensions:
            self._cache.evict(key)

    # Index and attribute access

    def __getitem__(self, key: Any) -> Any:
        return self.resolve(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        self.register(key, value, shared=False)

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __delitem__(self, key: Any) -> None:
        self.delete(key)

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not real attributes.
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.resolve(name)
        except NotInstantiableError as e:
            if self.has(name):
                raise
            raise AttributeError(f"{type(self).__name__!r} object has no binding or attribute {name!r}") from e

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.register(name, value, shared=False)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            self.delete(name)
