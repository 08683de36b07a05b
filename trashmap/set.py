from typing import Any, Generic, cast

from typing_extensions import TypeVar

from .hashers import HashStrategy, RandomState
from .trash import Trash

_K = TypeVar("_K")
_S = TypeVar("_S", bound=HashStrategy[Any], default=RandomState)


class TrashSet(Generic[_K, _S]):
    """
    A hash set that can operate on known hash values (:class:`Trash`) instead of
    actual keys.

    Sometimes you need to access the same element in the set multiple times and
    don't wish to re-hash it each time. In such a case, you can use TrashSet,
    which provides a Trash id that can be used to cheaply access the set as long
    as you keep it around.

    An assumption made here is that there are no hash collisions in the 64-bit
    hash space for your hasher. If there are, the colliding keys are treated as
    the same element.

    For example, this is useful for recursion prevention, where a key is added
    before stepping into it and removed after stepping out of it:

    >>> def step_into(seen: TrashSet[str], entry: str) -> None:
    ...     trash, added = seen.insert_check(entry)
    ...     if not added:
    ...         raise RuntimeError("found recursive loop!")
    ...     for child in lookup_children(entry):
    ...         step_into(seen, child)
    ...     seen.remove(trash)

    See :class:`~trashmap.recursion.RecursionGuard` for a ready-made version of
    this pattern.

    Args:
        hasher: The strategy used to compute Trash ids from keys. If none is
            given, a new :class:`~trashmap.hashers.RandomState` is used.

        capacity: The expected number of elements. Python sets cannot reserve
            storage ahead of time, so this is only validated. Default: 0.
    """

    _hasher: _S
    _set: set[Trash]

    def __init__(self, hasher: _S | None = None, *, capacity: int = 0) -> None:
        if capacity < 0:
            msg = f"Capacity must not be negative: {capacity}"
            raise ValueError(msg)

        self._hasher = hasher if hasher is not None else cast(_S, RandomState())
        self._set = set()

    @classmethod
    def with_capacity_and_hasher(cls, capacity: int, hasher: _S) -> "TrashSet[_K, _S]":
        return cls(hasher, capacity=capacity)

    @property
    def hasher(self) -> _S:
        return self._hasher

    def insert(self, key: _K) -> Trash:
        """
        Inserts a key, returning the Trash id to be used to access the element
        later.
        """

        trash = self.trash(key)
        self._set.add(trash)
        return trash

    def insert_check(self, key: _K) -> tuple[Trash, bool]:
        """
        Inserts a key, returning the Trash id to be used to access the element
        later, as well as whether the element was newly added (True if it was
        absent, False otherwise).
        """

        trash = self.trash(key)
        return trash, self.insert_id(trash)

    def insert_id(self, trash: Trash) -> bool:
        """
        Inserts an element based on its Trash id.

        Returns whether the element was newly added (True if it was absent, False
        otherwise).
        """

        if trash in self._set:
            return False

        self._set.add(trash)
        return True

    def contains(self, trash: Trash) -> bool:
        """
        Checks whether the Trash id has been inserted.
        """

        return trash in self._set

    def contains_key(self, key: _K) -> bool:
        """
        Checks whether the key has been inserted.
        """

        return self.trash(key) in self._set

    def remove(self, trash: Trash) -> bool:
        """
        Removes an element based on its Trash id.

        Returns whether an element was actually removed.
        """

        try:
            self._set.remove(trash)
        except KeyError:
            return False

        return True

    def remove_key(self, key: _K) -> bool:
        """
        Removes an element given its key.

        Returns whether an element was actually removed.
        """

        return self.remove(self.trash(key))

    def trash(self, key: _K) -> Trash:
        """
        Gets the Trash id for a given key.
        """

        return Trash(self._hasher.hash_one(key))

    identifier_for = trash

    def clear(self) -> None:
        self._set.clear()

    def __contains__(self, trash: object) -> bool:
        return isinstance(trash, Trash) and trash in self._set

    def __len__(self) -> int:
        return len(self._set)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"<{name} elements={len(self)} hasher={self._hasher!r}>"
