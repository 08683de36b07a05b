from typing import Any, Generic, cast

from typing_extensions import TypeVar

from .hashers import HashStrategy, RandomState
from .trash import Trash

_K = TypeVar("_K")
_V = TypeVar("_V")
_S = TypeVar("_S", bound=HashStrategy[Any], default=RandomState)


class TrashMap(Generic[_K, _V, _S]):
    """
    A hash map that can operate on known hash values (:class:`Trash`) instead of
    actual keys.

    Sometimes you need to access the same element in the map multiple times and
    don't wish to re-hash the key each time, for instance because the key is
    expensive to hash, or because the map may change in between accesses. In
    such a case, you can use TrashMap, which provides a Trash id that can be
    used to cheaply access map values as long as you keep it around.

    Keys are never stored: only their Trash id is. The key type parameter only
    serves to type the key arguments of the API.

    An assumption made here is that there are no hash collisions in the 64-bit
    hash space for your hasher. If there are, the colliding keys share a single
    entry.

    Args:
        hasher: The strategy used to compute Trash ids from keys. If none is
            given, a new :class:`~trashmap.hashers.RandomState` is used.

        capacity: The expected number of entries. Python dicts cannot reserve
            storage ahead of time, so this is only validated. Default: 0.

    Example:

    >>> tm: TrashMap[str, str] = TrashMap()
    >>> trash = tm.insert("foo", "bar")
    >>> tm.get(trash)
    'bar'
    >>> tm.remove(trash)
    'bar'
    >>> tm.get(trash) is None
    True
    """

    _hasher: _S
    _map: dict[Trash, _V]

    def __init__(self, hasher: _S | None = None, *, capacity: int = 0) -> None:
        if capacity < 0:
            msg = f"Capacity must not be negative: {capacity}"
            raise ValueError(msg)

        self._hasher = hasher if hasher is not None else cast(_S, RandomState())
        self._map = {}

    @classmethod
    def with_capacity_and_hasher(
        cls, capacity: int, hasher: _S
    ) -> "TrashMap[_K, _V, _S]":
        """
        Constructs a TrashMap with a custom hasher and capacity.
        """

        return cls(hasher, capacity=capacity)

    @property
    def hasher(self) -> _S:
        return self._hasher

    def insert(self, key: _K, value: _V) -> Trash:
        """
        Inserts a key-value pair, returning the Trash id for the entry.

        Any value previously stored for that key is discarded.
        """

        trash = self.trash(key)
        self._map[trash] = value
        return trash

    def insert_id(self, trash: Trash, value: _V) -> _V | None:
        """
        Inserts a value using a Trash id for the key.

        Returns the previous value, if present.
        """

        previous = self._map.get(trash)
        self._map[trash] = value
        return previous

    def insert_replace(self, key: _K, value: _V) -> tuple[Trash, _V | None]:
        """
        Inserts a key-value pair, returning the Trash id for the entry as well as
        the previous value, if present.
        """

        trash = self.trash(key)
        return trash, self.insert_id(trash, value)

    def get(self, trash: Trash) -> _V | None:
        """
        Gets the value corresponding to a given Trash id, if present.
        """

        return self._map.get(trash)

    def get_key(self, key: _K) -> _V | None:
        """
        Gets the value corresponding to a given key, if present.
        """

        return self._map.get(self.trash(key))

    def remove(self, trash: Trash) -> _V | None:
        """
        Removes and returns the value corresponding to a given Trash id, if
        present.
        """

        return self._map.pop(trash, None)

    def remove_key(self, key: _K) -> _V | None:
        """
        Removes and returns the value corresponding to a given key, if present.
        """

        return self._map.pop(self.trash(key), None)

    def trash(self, key: _K) -> Trash:
        """
        Gets the Trash id for a given key.

        This is the only operation that actually hashes the key.
        """

        return Trash(self._hasher.hash_one(key))

    identifier_for = trash

    def clear(self) -> None:
        self._map.clear()

    def __contains__(self, trash: object) -> bool:
        return isinstance(trash, Trash) and trash in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"<{name} entries={len(self)} hasher={self._hasher!r}>"
