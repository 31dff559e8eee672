import io
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, TextIO, Union

from pyrsistent.typing import PVector

from aacmap.category import AACCategory, ImageNotFoundError
from aacmap.lang.associative import AssociativeArray
from aacmap.page import AACPage

logger = logging.getLogger(__name__)

HOME_KEY = ""
ITEM_MARKER = ">"

_TOKEN_SEPARATOR = re.compile(r"\s")
_LINE_BREAK = re.compile(r"[\n\r\v\f\x1c-\x1e\x85\u2028\u2029]")


def is_writable(image_loc: Optional[str], text: Optional[str]) -> bool:
    """Return True if an image and its text can be stored in a mappings file and
    read back unchanged."""
    return (
        bool(image_loc)
        and text is not None
        and not image_loc.startswith(ITEM_MARKER)
        and _TOKEN_SEPARATOR.search(image_loc) is None
        and _LINE_BREAK.search(text) is None
    )


class AACMappings(AACPage):
    """A two level AAC board.

    The home page shows one image per category. Selecting a category image from
    the home page opens that category; selecting an image within a category
    returns the text to be spoken for it.

    Boards are stored in a line oriented text format. Each category is written as
    a header line holding the category image location and the category name,
    followed by one line per item holding a `>` marker, the item image location
    and the item text::

        img/food/plate.png food
        >img/food/icons8-french-fries-96.png french fries
        >img/food/icons8-watermelon-96.png watermelon
        img/clothing/hanger.png clothing
        >img/clothing/collaredshirt.png collared shirt
    """

    __slots__ = ("_categories", "_home", "_current")

    def __init__(self) -> None:
        self._home = AACCategory("")
        self._categories: AssociativeArray[str, AACCategory] = AssociativeArray()
        self._categories.set(HOME_KEY, self._home)
        self._current = self._home

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "AACMappings":
        board = cls()
        board.read_lines(lines)
        return board

    @classmethod
    def from_file(cls, filename: Union[str, Path]) -> "AACMappings":
        """Create a board from the mappings file `filename`.

        Raise FileNotFoundError if the file does not exist."""
        with open(filename, encoding="utf-8") as f:
            board = cls.from_lines(f)
        logger.debug(
            f"Loaded {board.category_count()} categories from mappings file '{filename}'"
        )
        return board

    @property
    def home(self) -> AACCategory:
        return self._home

    @property
    def current_category(self) -> AACCategory:
        return self._current

    @property
    def is_home(self) -> bool:
        return self._current is self._home

    def category_count(self) -> int:
        return self._categories.size() - 1

    def categories(self) -> Iterable[tuple[str, AACCategory]]:
        """Yield the image location and category of every category in the order
        they are stored, excluding the home page."""
        for pair in self._categories.iterator():
            if pair.value is not self._home:
                yield pair.key, pair.value

    def read_lines(self, lines: Iterable[str]) -> None:
        """Add the categories and items described by `lines` to this board and
        return to the home page."""
        category: Optional[AACCategory] = None
        for lineno, line in enumerate(lines, start=1):
            tokens = _TOKEN_SEPARATOR.split(line.rstrip("\r\n"), maxsplit=1)
            if len(tokens) < 2 or not tokens[0]:
                continue

            image_loc, text = tokens
            if image_loc.startswith(ITEM_MARKER):
                if category is None:
                    logger.warning(
                        f"Skipping item on line {lineno} which precedes any category"
                    )
                    continue
                category.add_item(image_loc[len(ITEM_MARKER) :], text)
            else:
                category = AACCategory(text)
                self._categories.set(image_loc, category)
                self._home.add_item(image_loc, text)

        self.reset()

    def write(self, stream: TextIO) -> None:
        """Write the board to `stream` in the mappings file format.

        Categories and items which cannot be read back unchanged are skipped."""
        for image_loc, category in self.categories():
            if not is_writable(image_loc, category.get_category()):
                logger.warning(f"Not writing category with image '{image_loc}'")
                continue
            stream.write(f"{image_loc} {category.get_category()}\n")
            for item in category:
                if not is_writable(item.key, item.value):
                    logger.warning(f"Not writing item with image '{item.key}'")
                    continue
                stream.write(f"{ITEM_MARKER}{item.key} {item.value}\n")

    def write_to_file(self, filename: Union[str, Path]) -> None:
        """Write the board to `filename` in the mappings file format."""
        with open(filename, mode="w", encoding="utf-8") as f:
            self.write(f)
        logger.debug(f"Wrote {self.category_count()} categories to '{filename}'")

    def to_lines(self) -> list[str]:
        buf = io.StringIO()
        self.write(buf)
        return buf.getvalue().splitlines()

    def select(self, image_loc: str) -> str:
        """Select the image at `image_loc` on the current page.

        If the home page is showing and the image is a category, the category
        becomes the current page and the empty string is returned. If a category
        is showing and the image is in it, the text for the image is returned.
        Raise an ImageNotFoundError otherwise."""
        if self.is_home:
            category = self._categories.val_at(image_loc)
            if category is None or category is self._home:
                raise ImageNotFoundError(image_loc)
            self._current = category
            return ""
        return self._current.select(image_loc)

    def get_image_locs(self) -> PVector[str]:
        """Return the image locations shown on the current page."""
        return self._current.get_image_locs()

    def reset(self) -> None:
        """Return to the home page."""
        self._current = self._home

    def add_item(self, image_loc: str, text: str) -> None:
        """Add an image to the current page.

        On the home page this adds a new, empty category named `text`, replacing
        any category already stored under `image_loc`. Within a category it adds
        an item which speaks `text`.

        Images which cannot be stored in a mappings file, such as those with no
        location or with whitespace in their location, are ignored."""
        if not is_writable(image_loc, text):
            logger.debug(f"Ignoring image '{image_loc}' which cannot be stored")
            return

        if not self.is_home:
            self._current.add_item(image_loc, text)
            return

        self._categories.set(image_loc, AACCategory(text))
        self._home.add_item(image_loc, text)

    def remove_item(self, image_loc: str) -> None:
        """Remove an image from the current page. Removing an image from the home
        page removes its category."""
        if not self.is_home:
            self._current.remove_item(image_loc)
            return

        if image_loc != HOME_KEY:
            self._categories.remove(image_loc)
            self._home.remove_item(image_loc)

    def get_category(self) -> str:
        """Return the name of the current category, or the empty string on the
        home page."""
        return self._current.get_category()

    def has_image(self, image_loc: str) -> bool:
        return self._current.has_image(image_loc)
