from abc import ABC, abstractmethod

from pyrsistent.typing import PVector


class AACPage(ABC):
    """A page of images on an AAC board. Selecting an image may speak text or
    navigate to another page."""

    __slots__ = ()

    @abstractmethod
    def add_item(self, image_loc: str, text: str) -> None:
        raise NotImplementedError()

    @abstractmethod
    def get_image_locs(self) -> PVector[str]:
        raise NotImplementedError()

    @abstractmethod
    def get_category(self) -> str:
        raise NotImplementedError()

    @abstractmethod
    def select(self, image_loc: str) -> str:
        raise NotImplementedError()

    @abstractmethod
    def has_image(self, image_loc: str) -> bool:
        raise NotImplementedError()
