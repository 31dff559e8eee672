from typing import Any

import attr


class AssociativeArrayError(Exception):
    pass


@attr.define(repr=False, str=False)
class NullKeyError(AssociativeArrayError, ValueError):
    message: str = "Associative array keys may not be None"

    def __repr__(self):
        return f"aacmap.lang.exception.NullKeyError({self.message})"

    def __str__(self):
        return self.message


@attr.define(repr=False, str=False)
class KeyNotFoundError(AssociativeArrayError, KeyError):
    key: Any

    def __repr__(self):
        return f"aacmap.lang.exception.KeyNotFoundError({self.key!r})"

    def __str__(self):
        return f"Key not found: {self.key!r}"
