"""Application layer - Binding storage."""

import inspect
from typing import Any, Dict, Iterator, Optional

from illusion_di.domain import Binding, RecipeKind, canonical_name, default_target


class BindingRegistry:
    """Stores construction recipes by key.

    Pure data: the registry classifies and normalizes targets when they are
    stored but never constructs anything.

    Attributes:
        _bindings: Dictionary mapping keys to their bindings.
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Binding] = {}

    @staticmethod
    def classify(target: Any) -> RecipeKind:
        """Decide which recipe variant a target is.

        Classes and strings are type identifiers, other callables are factories,
        anything else is a built instance.
        """
        if inspect.isclass(target) or isinstance(target, str):
            return RecipeKind.TYPE
        if callable(target):
            return RecipeKind.FACTORY
        return RecipeKind.INSTANCE

    def add(self, key: str, target: Any = None, shared: bool = False) -> Binding:
        """Store a recipe, overwriting any existing binding for the key.

        Args:
            key: The binding key.
            target: Type identifier, factory or instance. Defaults to the type implied by the key.
            shared: Whether resolutions share one instance.

        Returns:
            The stored binding.
        """
        if target is None:
            target = default_target(key)
        if isinstance(target, str):
            target = canonical_name(target)

        binding = Binding(key=key, kind=self.classify(target), value=target, shared=shared)
        self._bindings[key] = binding
        return binding

    def add_instance(self, key: str, instance: Any, shared: bool = True) -> Binding:
        """Store an already-built object verbatim."""
        binding = Binding(key=key, kind=RecipeKind.INSTANCE, value=instance, shared=shared)
        self._bindings[key] = binding
        return binding

    def get(self, key: str) -> Optional[Binding]:
        return self._bindings.get(key)

    def has(self, key: str) -> bool:
        return key in self._bindings

    def remove(self, key: str) -> None:
        self._bindings.pop(key, None)

    def clear(self) -> None:
        self._bindings.clear()

    def copy(self) -> Dict[str, Binding]:
        return self._bindings.copy()

    def replace(self, bindings: Dict[str, Binding]) -> None:
        """Swap in a full set of bindings, e.g. one copied from another container."""
        self._bindings = dict(bindings)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)
