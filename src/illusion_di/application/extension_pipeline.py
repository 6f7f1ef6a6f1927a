"""Application layer - Decorator chains applied after construction."""

from typing import TYPE_CHECKING, Any, Callable, Dict, List

if TYPE_CHECKING:
    from illusion_di.domain import IContainer

Extension = Callable[[Any, "IContainer"], Any]


class ExtensionPipeline:
    """Keeps an ordered list of decorators per key.

    Decorators form a chain: each receives the previous result and the
    container and returns the value passed to the next one.

    Attributes:
        _extensions: Decorators by key, in registration order.
    """

    def __init__(self) -> None:
        self._extensions: Dict[str, List[Extension]] = {}

    def add(self, key: str, extension: Extension) -> None:
        self._extensions.setdefault(key, []).append(extension)

    def get(self, key: str) -> List[Extension]:
        return list(self._extensions.get(key, []))

    def apply(self, key: str, instance: Any, container: "IContainer") -> Any:
        """Run every decorator registered for a key over an instance.

        Args:
            key: The binding key.
            instance: The freshly constructed base object.
            container: Passed to each decorator as its second argument.

        Returns:
            The result of the last decorator, or ``instance`` if there are none.
        """
        for extension in self._extensions.get(key, []):
            instance = extension(instance, container)
        return instance

    def remove(self, key: str) -> None:
        self._extensions.pop(key, None)

    def copy(self) -> Dict[str, List[Extension]]:
        return {key: list(extensions) for key, extensions in self._extensions.items()}

    def replace(self, extensions: Dict[str, List[Extension]]) -> None:
        self._extensions = {key: list(chain) for key, chain in extensions.items()}

    def keys(self) -> List[str]:
        return [key for key, extensions in self._extensions.items() if extensions]

    def clear(self) -> None:
        self._extensions.clear()
