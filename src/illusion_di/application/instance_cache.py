from typing import Any, Dict, List


class InstanceCache:
    """Holds shared instances and resolution markers.

    An entry exists only for keys whose binding is shared and that have been
    resolved since the last eviction. Evicting an entry never touches the
    binding, so the next resolution rebuilds and recaches the object.

    Attributes:
        _instances: Cache of shared instances by key.
        _resolved: Keys resolved at least once.
    """

    def __init__(self) -> None:
        """Initialize the cache with empty stores."""
        self._instances: Dict[str, Any] = {}
        self._resolved: Dict[str, bool] = {}

    def has(self, key: str) -> bool:
        return key in self._instances

    def get(self, key: str) -> Any:
        """Return the cached instance for a key.

        Raises:
            KeyError: If nothing is cached under the key.
        """
        return self._instances[key]

    def store(self, key: str, instance: Any) -> None:
        self._instances[key] = instance

    def evict(self, key: str) -> None:
        """Drop the cached instance for a key, keeping its resolved marker."""
        self._instances.pop(key, None)

    def evict_all(self) -> None:
        """Drop every cached instance.

        Useful for testing or resetting container state.
        """
        self._instances.clear()

    def mark_resolved(self, key: str) -> None:
        self._resolved[key] = True

    def is_resolved(self, key: str) -> bool:
        return self._resolved.get(key, False)

    def forget(self, key: str) -> None:
        """Remove both the cached instance and the resolved marker for a key."""
        self._instances.pop(key, None)
        self._resolved.pop(key, None)

    def clear(self) -> None:
        self._instances.clear()
        self._resolved.clear()

    def instance_keys(self) -> List[str]:
        return list(self._instances)

    def resolved_keys(self) -> List[str]:
        return [key for key, resolved in self._resolved.items() if resolved]
