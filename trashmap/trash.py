import logging
import sys
from typing import Any

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self

_U64_MAX = (1 << 64) - 1

_logger = logging.getLogger("trashmap")


class KnownHashError(RuntimeError):
    """
    Raised when a KnownHasher is driven with anything other than a single
    precomputed 64-bit hash value.

    This denotes a container wired up with the wrong key type, and is not meant
    to be recovered from.
    """


class KnownHasher:
    """
    A hasher to be used with things that are already hashes.

    It accepts exactly one 64-bit value through :meth:`write_u64()` and reports
    that same value from :meth:`finish()`. It is an internal piece of
    :class:`Trash` hashing and must not be reused for anything else.
    """

    __slots__ = ("_hash",)

    _hash: int | None

    def __init__(self) -> None:
        self._hash = None

    def write(self, data: bytes) -> None:
        msg = "KnownHasher must be called with known u64 hash values"
        _logger.error("%s, got %d raw bytes.", msg, len(data))
        raise KnownHashError(msg)

    def write_u64(self, i: int) -> None:
        if self._hash is not None:
            msg = "KnownHasher can only be fed a single hash value"
            _logger.error(msg)
            raise KnownHashError(msg)

        if not isinstance(i, int) or not 0 <= i <= _U64_MAX:
            msg = f"KnownHasher expects an unsigned 64-bit value, got {i!r}"
            _logger.error(msg)
            raise KnownHashError(msg)

        self._hash = i

    def finish(self) -> int:
        if self._hash is None:
            msg = "Nothing was hashed"
            _logger.error(msg)
            raise KnownHashError(msg)

        return self._hash


def _toHashWord(value: int) -> int:
    # Reinterpret as a signed 64-bit word. CPython uses any __hash__ result that
    # fits in a Py_hash_t as-is, so the dict performs no further mixing. The one
    # exception is 2**64 - 1, which folds to -1: CPython reserves -1 and turns it
    # into -2, the same word as 2**64 - 2. The two stay distinct through __eq__.

    return value - (1 << 64) if value > sys.maxsize else value


class Trash:
    """
    A precomputed hash, to be used directly with :class:`~trashmap.TrashMap`
    and :class:`~trashmap.TrashSet` to interact with entries.

    Think of it as an identifier for a map or set entry. It holds no reference
    to the key it was computed from.

    Two Trash instances are equal if and only if their hash values are equal.
    The containers assume that no two distinct keys hash to the same 64-bit
    value with a given hasher; if they do, their entries are silently aliased.
    """

    __slots__ = ("_hash",)

    _hash: int

    def __init__(self, value: int) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            msg = f"Trash value must be an int, not {type(value).__name__}"
            raise TypeError(msg)

        if not 0 <= value <= _U64_MAX:
            msg = f"Trash value must fit in an unsigned 64-bit int: {value}"
            raise ValueError(msg)

        object.__setattr__(self, "_hash", value)

    def get_hash(self) -> int:
        return self._hash

    def __int__(self) -> int:
        return self._hash

    def __hash__(self) -> int:
        hasher = KnownHasher()
        hasher.write_u64(self._hash)
        return _toHashWord(hasher.finish())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trash):
            return NotImplemented
        return self._hash == other._hash

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(0x{self._hash:016x})"

    def __setattr__(self, name: str, value: Any) -> None:
        msg = f"{self.__class__.__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        msg = f"{self.__class__.__name__} is immutable"
        raise AttributeError(msg)

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self
