"""Application layer - Circular dependency detection."""

import threading
from contextlib import contextmanager
from typing import Iterator, List

from illusion_di.domain import CircularDependencyError


class CircularDependencyDetector:
    """Detects keys that re-enter their own resolution.

    Keeps the chain of keys currently being resolved on the caller's thread.
    Resolving a key that is already on the chain means the graph loops back
    on itself.

    Attributes:
        _local: Thread-local storage for resolution chains.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _chain(self) -> List[str]:
        if not hasattr(self._local, "chain"):
            self._local.chain = []
        return self._local.chain

    def push(self, key: str) -> None:
        """Enter the resolution of a key.

        Raises:
            CircularDependencyError: If the key is already being resolved. The
                reported chain runs from its first occurrence back to itself.

        Example:
            >>> detector.push("mailer")
            >>> detector.push("transport")
            >>> detector.push("mailer")  # mailer -> transport -> mailer
        """
        chain = self._chain()
        if key in chain:
            raise CircularDependencyError(chain[chain.index(key) :] + [key])
        chain.append(key)

    def pop(self) -> None:
        chain = self._chain()
        if chain:
            chain.pop()

    @contextmanager
    def track(self, key: str) -> Iterator[None]:
        """Keep ``key`` on the chain for the duration of the block."""
        self.push(key)
        try:
            yield
        finally:
            self.pop()

    def depth(self) -> int:
        return len(self._chain())

    def clear(self) -> None:
        """Forget the chain, e.g. after an aborted resolution."""
        self._chain().clear()
