import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import Any, Generic

from typing_extensions import TypeVar

from .hashers import HashStrategy, RandomState
from .set import TrashSet
from .trash import Trash

_K = TypeVar("_K")
_S = TypeVar("_S", bound=HashStrategy[Any], default=RandomState)


class RecursionLoopError(RuntimeError):
    """
    Raised when a key is entered while it is already on the current path.
    """

    key: object

    def __init__(self, key: object) -> None:
        super().__init__(f"found recursive loop on {key!r}")
        self.key = key


class RecursionGuard(Generic[_K, _S]):
    """
    Keeps track of the keys on the current path of a recursive traversal, and
    raises :class:`RecursionLoopError` when a key is stepped into while already
    on that path.

    This is not a visited set: a key that was left can be entered again, so the
    same node may be reached through several sibling paths.

    Each key is hashed once, on entering. The Trash id returned by
    :meth:`enter()` is what :meth:`leave()` takes, so the key does not need to be
    held on to.

    Args:
        hasher: The strategy used to hash keys. If none is given, a new
            :class:`~trashmap.hashers.RandomState` is used.

        logger: A logger instance that will be used to trace the traversal and
            report loops. If none is given, the "trashmap" logger will be used.
    """

    _seen: TrashSet[_K, _S]
    _logger: logging.Logger

    def __init__(
        self, hasher: _S | None = None, *, logger: logging.Logger | None = None
    ) -> None:
        self._seen = TrashSet(hasher)
        self._logger = logger or logging.getLogger("trashmap")

    @property
    def depth(self) -> int:
        return len(self._seen)

    def enter(self, key: _K) -> Trash:
        trash, added = self._seen.insert_check(key)
        if not added:
            self._logger.error("Recursive loop detected on %r.", key)
            raise RecursionLoopError(key)

        self._logger.debug("Entered %r (depth %d).", key, self.depth)
        return trash

    def leave(self, trash: Trash) -> None:
        if not self._seen.remove(trash):
            msg = f"Attempted to leave {trash!r}, but it was not entered"
            raise RuntimeError(msg)

        self._logger.debug("Left %r (depth %d).", trash, self.depth)

    @contextmanager
    def step(self, key: _K) -> Iterator[Trash]:
        trash = self.enter(key)
        try:
            yield trash
        finally:
            self.leave(trash)

    def walk(self, root: _K, children: Callable[[_K], Iterable[_K]]) -> Iterator[_K]:
        """
        Walks the graph depth-first from the given root, yielding each node in
        pre-order.

        Raises RecursionLoopError if a node is reachable from itself.
        """

        with self.step(root):
            yield root
            for child in children(root):
                yield from self.walk(child, children)

    def __contains__(self, key: object) -> bool:
        return self._seen.contains_key(key)  # type: ignore[arg-type]
