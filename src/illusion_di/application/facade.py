"""Application layer - Facades forwarding calls to a memoized root service."""

import inspect
import logging
from typing import Any, Dict, Optional

from illusion_di.domain import IContainer, canonical_name

logger = logging.getLogger(__name__)


class FacadeContext:
    """Owns the container a set of facades resolve through and their memo table.

    A context is passed explicitly to each facade; nothing is stored at module
    or class level, so independent contexts never see each other's instances.

    Attributes:
        _container: The container roots are resolved from.
        _resolved: Root instances by key.

    Example:
        >>> with FacadeContext(container) as context:
        ...     calc = Facade(context, "app.math.Calculator")
        ...     calc.sum(5).subtract(2).result()
        3
    """

    def __init__(self, container: Optional[IContainer] = None) -> None:
        self._container = container
        self._resolved: Dict[str, Any] = {}

    def set_container(self, container: IContainer) -> None:
        """Replace the container; instances resolved from the old one are kept until cleared."""
        self._container = container

    def get_container(self) -> Optional[IContainer]:
        return self._container

    def resolve_root(self, root: Any) -> Any:
        """Return the root service for a facade.

        Objects are used as-is. String keys and classes are resolved through
        the container once and memoized until cleared.

        Raises:
            RuntimeError: If a key must be resolved and no container is set.
        """
        if not (isinstance(root, str) or inspect.isclass(root)):
            return root
        key = self._memo_key(root)
        if key in self._resolved:
            return self._resolved[key]
        if self._container is None:
            raise RuntimeError(f'Cannot resolve facade root "{key}": no container has been set.')

        logger.debug("Resolving facade root %r", key)
        instance = self._container.resolve(root)
        self._resolved[key] = instance
        return instance

    @staticmethod
    def _memo_key(root: Any) -> str:
        return canonical_name(root) if inspect.isclass(root) else root

    def clear_resolved_instance(self, key: Any) -> None:
        self._resolved.pop(self._memo_key(key), None)

    def clear_resolved_instances(self) -> None:
        self._resolved.clear()

    def __enter__(self) -> "FacadeContext":
        """Context manager entry - returns self."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - forget every resolved root."""
        self.clear_resolved_instances()
        return False


class Facade:
    """Static-style access to one service resolved through a :class:`FacadeContext`.

    Any attribute that is not defined on the facade itself is looked up on the
    root service, so ``facade.method(...)`` calls ``root.method(...)``.

    Args:
        context: The context that resolves and memoizes the root.
        root: A container key or an already-built object.
    """

    def __init__(self, context: FacadeContext, root: Any) -> None:
        self._context = context
        self._root = root

    def get_root(self) -> Any:
        return self._context.resolve_root(self._root)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.get_root(), name)
