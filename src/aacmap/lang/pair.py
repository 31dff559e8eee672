from typing import Generic, TypeVar

import attr

K = TypeVar("K")
V = TypeVar("V")


@attr.define(eq=True, repr=False)
class Pair(Generic[K, V]):
    """A single key/value binding held by an associative array slot.

    The key is fixed once the pair is constructed; the value may be replaced
    by the owning array when the same key is set again."""

    key: K = attr.field(on_setattr=attr.setters.frozen)
    value: V

    def __repr__(self):
        return f"Pair({self.key!r}, {self.value!r})"

    def __str__(self):
        return f"{self.key}:{self.value}"
