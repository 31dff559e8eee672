import os
from collections.abc import Iterable

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory

from aacmap.page import AACPage

_USER_DATA_HOME = os.getenv("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
AACMAP_USER_DATA = os.path.abspath(os.path.join(_USER_DATA_HOME, "aacmap"))

AACMAP_HISTORY_FILE_PATH = os.getenv(
    "AACMAP_HISTORY_FILE_PATH",
    os.path.join(AACMAP_USER_DATA, ".aacmap_history"),
)

BOARD_COMMANDS = (":home", ":images", ":quit", ":save")


class Prompter:
    __slots__ = ()

    def prompt(self, msg: str) -> str:
        """Prompt the user for input with the input string `msg`."""
        return input(msg)

    def print(self, msg: str) -> None:
        """Print the message to standard out."""
        print(msg)


class BoardCompleter(Completer):
    """Complete image locations shown on the current page of a board, along with
    the board session commands."""

    __slots__ = ("_page",)

    def __init__(self, page: AACPage) -> None:
        self._page = page

    def get_completions(
        self, document: Document, _: CompleteEvent
    ) -> Iterable[Completion]:
        text = document.text_before_cursor.lstrip()
        if text.startswith(":"):
            candidates: Iterable[str] = BOARD_COMMANDS
        else:
            candidates = self._page.get_image_locs()
        for candidate in candidates:
            if candidate.startswith(text):
                yield Completion(candidate, start_position=-len(text))


class PromptToolkitPrompter(Prompter):
    """Prompter class which wraps Prompt Toolkit utilities to provide line
    editing, history and completion of image locations."""

    __slots__ = ("_session",)

    def __init__(self, page: AACPage) -> None:
        if history_dir := os.path.dirname(AACMAP_HISTORY_FILE_PATH):
            os.makedirs(history_dir, exist_ok=True)
        self._session: PromptSession = PromptSession(
            auto_suggest=AutoSuggestFromHistory(),
            completer=BoardCompleter(page),
            history=FileHistory(AACMAP_HISTORY_FILE_PATH),
        )

    def prompt(self, msg: str) -> str:
        return self._session.prompt(msg)


def get_prompter(page: AACPage) -> Prompter:
    """Return a Prompter instance for reading selections for `page`.

    Prompter instances may be stateful, so the Prompter instance returned by
    this function can be reused within a single board session."""
    return PromptToolkitPrompter(page)


__all__ = ["BoardCompleter", "Prompter", "get_prompter"]
