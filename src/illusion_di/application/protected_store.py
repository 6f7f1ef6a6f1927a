import inspect
from typing import TYPE_CHECKING, Any, Dict, Sequence

if TYPE_CHECKING:
    from illusion_di.domain import IContainer


class ProtectedStore:
    """Raw factories and values kept outside autowiring, caching and decoration.

    Attributes:
        _entries: Stored factories or values by key.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    def add(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def has(self, key: str) -> bool:
        return key in self._entries

    def call(self, key: str, args: Sequence[Any], container: "IContainer") -> Any:
        """Produce the protected value for a key.

        Non-class callables are invoked with ``args`` followed by the container on
        every call; any other value, classes included, is returned verbatim.

        Raises:
            KeyError: If the key is not protected.
        """
        value = self._entries[key]
        if callable(value) and not inspect.isclass(value):
            return value(*args, container)
        return value

    def clear(self) -> None:
        self._entries.clear()
