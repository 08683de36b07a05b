"""
Hashing strategies used by TrashMap and TrashSet to compute :class:`Trash`
identifiers from actual keys.

A strategy is any object with a ``hash_one(key) -> int`` method that returns an
unsigned 64-bit digest. The digest must be deterministic for a given strategy
instance and equal keys.
"""

import secrets
import struct
from typing import Any, Protocol, TypeVar, runtime_checkable

import xxhash

_K_contra = TypeVar("_K_contra", contravariant=True)

_U64_MASK = (1 << 64) - 1


# pylint: disable=unnecessary-ellipsis


@runtime_checkable
class HashStrategy(Protocol[_K_contra]):
    """
    A protocol that describes a way to turn a key into a 64-bit digest.
    """

    def hash_one(self, key: _K_contra) -> int:
        """
        Returns the unsigned 64-bit digest of the given key.
        """
        ...


def _toBytes(key: object) -> bytes | bytearray | memoryview | None:
    if isinstance(key, (bytes, bytearray, memoryview)):
        return key

    if isinstance(key, str):
        return key.encode("utf-8")

    # bool is left to int encoding on purpose: True == 1 so they must agree.
    if isinstance(key, int):
        if -(1 << 63) <= key < (1 << 63):
            return struct.pack("<q", key)
        length = (key.bit_length() + 8) // 8
        return key.to_bytes(length, "little", signed=True)

    return None


class _SeededState:
    _seed: int

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed & _U64_MASK

    @property
    def seed(self) -> int:
        return self._seed

    def hash_one(self, key: Any) -> int:
        data = _toBytes(key)
        if data is not None:
            return xxhash.xxh3_64_intdigest(data, seed=self._seed)

        if isinstance(key, tuple):
            digests = b"".join(
                struct.pack("<Q", self.hash_one(item)) for item in key
            )
            return xxhash.xxh3_64_intdigest(digests, seed=self._seed)

        return self._hashOther(key)

    def _hashOther(self, key: object) -> int:
        name = self.__class__.__name__
        msg = f"{name} cannot hash keys of type {type(key).__name__}"
        raise TypeError(msg)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(seed=0x{self._seed:016x})"


class XxHashState(_SeededState):
    """
    A strategy based on the seeded XXH3 64-bit hash, stable across processes and
    platforms.

    Supported keys are bytes-like objects, str (hashed as UTF-8), int (hashed as
    eight signed little-endian bytes, or as many as needed for larger values), and
    tuples of supported keys (hashed from the digests of their items). Other keys
    raise TypeError.

    Keys are hashed from their encoding alone, without their type. Keys of
    different types therefore share an identifier when their encodings match:
    ``"abc"`` and ``b"abc"``, ``1`` and ``b"\\x01" + b"\\x00" * 7``, or ``()`` and
    ``b""``. Do not mix such key types in one container.
    """


class FixedState(_SeededState):
    """
    A strategy with a caller-chosen seed that accepts any hashable key.

    Keys supported by :class:`XxHashState` are hashed the same way and get the
    same digests. Other hashable keys fall back to their builtin hash, which is
    then mixed with the seed through XXH3. That fallback inherits the collisions
    of the builtin hash: for instance ``hash(-1.0) == hash(-2.0)``, so those two
    floats share an identifier. Fallback keys also do not agree with equal keys
    of a supported type (``1.0`` and ``1`` get different identifiers), and their
    digests may differ across processes.

    Two FixedState instances with the same seed produce the same digests.
    """

    def _hashOther(self, key: object) -> int:
        data = struct.pack("<q", hash(key))
        return xxhash.xxh3_64_intdigest(data, seed=self._seed)


class RandomState(FixedState):
    """
    The default strategy: a FixedState with a seed drawn at random for each
    instance.

    Identifiers computed by one RandomState instance are not meaningful to
    another one.
    """

    def __init__(self) -> None:
        super().__init__(secrets.randbits(64))
