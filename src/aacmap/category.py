import logging
from typing import Optional

import attr
from pyrsistent import pvector
from pyrsistent.typing import PVector

from aacmap.lang.associative import AssociativeArray, PairIterator
from aacmap.lang.exception import KeyNotFoundError
from aacmap.page import AACPage

logger = logging.getLogger(__name__)


@attr.define(repr=False, str=False)
class ImageNotFoundError(KeyError):
    image_loc: Optional[str]
    category: str = ""

    def __repr__(self):
        return (
            f"aacmap.category.ImageNotFoundError({self.image_loc!r}, "
            f"category={self.category!r})"
        )

    def __str__(self):
        if self.category:
            return f"Image {self.image_loc} not found in category {self.category}"
        return f"Image {self.image_loc} not found"


class AACCategory(AACPage):
    """A named category of images, each mapped to the text spoken when the image
    is selected."""

    __slots__ = ("_name", "_items")

    def __init__(self, name: str) -> None:
        self._name = name
        self._items: AssociativeArray[str, str] = AssociativeArray()

    def __iter__(self) -> PairIterator[str, str]:
        return self._items.iterator()

    def __len__(self):
        return self._items.size()

    def __repr__(self):
        return f"AACCategory({self._name!r}, {self._items})"

    @property
    def name(self) -> str:
        return self._name

    def add_item(self, image_loc: str, text: str) -> None:
        if not self._items.try_set(image_loc, text):
            logger.debug(f"Ignoring item with no image location in '{self._name}'")

    def remove_item(self, image_loc: str) -> None:
        self._items.remove(image_loc)

    def get_image_locs(self) -> PVector[str]:
        """Return the image locations in this category in slot order."""
        return pvector(self._items.keys())

    def get_category(self) -> str:
        return self._name

    def select(self, image_loc: str) -> str:
        """Return the text spoken for `image_loc`.

        Raise an ImageNotFoundError if the image is not in this category."""
        try:
            return self._items.get(image_loc)
        except KeyNotFoundError as e:
            raise ImageNotFoundError(image_loc, self._name) from e

    def has_image(self, image_loc: str) -> bool:
        return self._items.has_key(image_loc)

    def size(self) -> int:
        return self._items.size()
