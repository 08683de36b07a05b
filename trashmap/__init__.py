"trashmap: hash maps and sets addressed by precomputed key hashes."

__project__ = "trashmap"
__version__ = "0.2.0"
__author__ = "The trashmap developers"
__copyright__ = "2018-2024, The trashmap developers"

from trashmap import hashers
from trashmap.hashers import FixedState, HashStrategy, RandomState, XxHashState
from trashmap.map import TrashMap
from trashmap.recursion import RecursionGuard, RecursionLoopError
from trashmap.set import TrashSet
from trashmap.trash import KnownHashError, Trash

__all__ = [
    "FixedState",
    "HashStrategy",
    "KnownHashError",
    "RandomState",
    "RecursionGuard",
    "RecursionLoopError",
    "Trash",
    "TrashMap",
    "TrashSet",
    "XxHashState",
    "hashers",
]
