import logging
from typing import Generic, Optional, TypeVar

from typing_extensions import Self

from aacmap.lang.exception import KeyNotFoundError, NullKeyError
from aacmap.lang.pair import Pair
from aacmap.logconfig import TRACE

K = TypeVar("K")
V = TypeVar("V")

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 16


class PairIterator(Generic[K, V]):
    """Iterator over the live range of an associative array.

    The number of pairs returned is fixed when the iterator is created. Later
    removals from the array are not observed, so a slot emptied by a removal
    after the iterator was created is returned as None."""

    __slots__ = ("_pairs_of", "_index", "_end")

    def __init__(self, arr: "AssociativeArray[K, V]") -> None:
        self._pairs_of = arr
        self._index = 0
        self._end = arr.size()

    def __iter__(self) -> "PairIterator[K, V]":
        return self

    def __next__(self) -> Pair[K, V]:
        if self._index >= self._end:
            raise StopIteration
        pair = self._pairs_of._slot(self._index)
        self._index += 1
        return pair  # type: ignore[return-value]


class AssociativeArray(Generic[K, V]):
    """A mutable mapping of keys to values stored as a contiguous run of pairs
    in a growable list and searched linearly.

    Keys are compared with `==` and may be any type other than None. Pairs are
    kept in insertion order until a removal, which moves the last pair into
    the removed pair's slot."""

    __slots__ = ("_pairs", "_size")

    def __init__(self) -> None:
        self._pairs: list[Optional[Pair[K, V]]] = [None] * DEFAULT_CAPACITY
        self._size = 0

    def __bool__(self):
        return self._size > 0

    def __contains__(self, key):
        return self.has_key(key)

    def __copy__(self):
        return self.clone()

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, AssociativeArray):
            return NotImplemented
        if self._size != other._size:
            return False
        return all(self._pairs[i] == other._pairs[i] for i in range(self._size))

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __setitem__(self, key: K, value: V) -> None:
        self.set(key, value)

    def __iter__(self) -> PairIterator[K, V]:
        return self.iterator()

    def __len__(self):
        return self._size

    def __repr__(self):
        return str(self)

    def __str__(self):
        return (
            "{"
            + ", ".join(str(self._pairs[i]) for i in range(self._size))
            + "}"
        )

    @property
    def capacity(self) -> int:
        return len(self._pairs)

    def _slot(self, i: int) -> Optional[Pair[K, V]]:
        return self._pairs[i]

    def _expand(self) -> None:
        new_capacity = max(1, self._size) * 2
        logger.log(
            TRACE,
            f"Expanding associative array from {len(self._pairs)} to {new_capacity} slots",
        )
        self._pairs = self._pairs + [None] * (new_capacity - len(self._pairs))

    def find(self, key: K) -> int:
        """Return the index of the live pair whose key equals `key`.

        Raise a KeyNotFoundError if no live pair has that key."""
        if key is not None:
            for i in range(self._size):
                pair = self._pairs[i]
                assert pair is not None
                if pair.key == key:
                    return i
        raise KeyNotFoundError(key)

    def set(self, key: K, value: V) -> None:
        """Bind `key` to `value`, replacing the value of an existing pair with an
        equal key in place.

        Raise a NullKeyError without modifying the array if `key` is None."""
        if key is None:
            raise NullKeyError()

        try:
            i = self.find(key)
        except KeyNotFoundError:
            if self._size == len(self._pairs):
                self._expand()
            self._pairs[self._size] = Pair(key, value)
            self._size += 1
        else:
            pair = self._pairs[i]
            assert pair is not None
            pair.value = value

    def try_set(self, key: K, value: V) -> bool:
        """Bind `key` to `value` as by `set`, returning False rather than raising
        if the key is None."""
        if key is None:
            return False
        self.set(key, value)
        return True

    def get(self, key: K) -> V:
        """Return the value bound to `key`.

        Raise a KeyNotFoundError if the key is not present (including None)."""
        pair = self._pairs[self.find(key)]
        assert pair is not None
        return pair.value

    def entry(self, key: K) -> Optional[Pair[K, V]]:
        try:
            return self._pairs[self.find(key)]
        except KeyNotFoundError:
            return None

    def val_at(self, key: K, default: Optional[V] = None) -> Optional[V]:
        pair = self.entry(key)
        if pair is None:
            return default
        return pair.value

    def has_key(self, key: K) -> bool:
        """Return True if `key` is bound in this array. None is never bound."""
        return self.entry(key) is not None

    def remove(self, key: K) -> None:
        """Remove the pair bound to `key` if there is one.

        The last live pair is moved into the removed pair's slot, so the order
        of the remaining pairs is not preserved."""
        try:
            i = self.find(key)
        except KeyNotFoundError:
            return

        last = self._size - 1
        self._pairs[i] = self._pairs[last]
        self._pairs[last] = None
        self._size = last

    def size(self) -> int:
        return self._size

    def keys(self) -> list[K]:
        return [pair.key for pair in self.iterator()]

    def values(self) -> list[V]:
        return [pair.value for pair in self.iterator()]

    def clone(self) -> Self:
        """Return a new array holding copies of every live pair in slot order.

        The returned array shares no storage with this one."""
        new = type(self)()
        for pair in self.iterator():
            # Live keys are never None.
            new.try_set(pair.key, pair.value)
        return new

    def iterator(self) -> PairIterator[K, V]:
        """Return a new iterator over the pairs in the live range."""
        return PairIterator(self)
