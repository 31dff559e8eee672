import argparse
import importlib.metadata
import sys
from collections.abc import Sequence
from typing import Callable, Optional

from aacmap import logconfig
from aacmap.category import ImageNotFoundError
from aacmap.mappings import AACMappings, is_writable
from aacmap.prompt import Prompter, get_prompter

Handler = Callable[[argparse.ArgumentParser, argparse.Namespace], None]


def _print_images(board: AACMappings, prompter: Optional[Prompter] = None) -> None:
    print_ = print if prompter is None else prompter.print
    for image_loc in board.get_image_locs():
        print_(image_loc)


def _open_category(board: AACMappings, category: Optional[str]) -> None:
    """Move `board` to the category with image location `category`, if one is
    given. Raise an ImageNotFoundError if there is no such category."""
    board.reset()
    if category is not None:
        board.select(category)


def _add_debug_arg_group(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("debug options")
    group.add_argument(
        "--log-level",
        default=None,
        help=(
            "the logging level for aacmap loggers (env: AACMAP_LOGGING_LEVEL; "
            "default: WARNING)"
        ),
    )


def _subcommand(
    subcommand: str,
    *,
    help: Optional[str] = None,  # pylint: disable=redefined-builtin
    description: Optional[str] = None,
    handler: Handler,
) -> Callable[
    [Callable[[argparse.ArgumentParser], None]],
    Callable[["argparse._SubParsersAction"], None],
]:
    def _wrap_add_subcommand(
        f: Callable[[argparse.ArgumentParser], None],
    ) -> Callable[["argparse._SubParsersAction"], None]:
        def _wrapped_subcommand(subparsers: "argparse._SubParsersAction"):
            parser = subparsers.add_parser(
                subcommand, help=help, description=description
            )
            parser.set_defaults(handler=handler)
            f(parser)
            _add_debug_arg_group(parser)

        return _wrapped_subcommand

    return _wrap_add_subcommand


def show(_, args: argparse.Namespace) -> None:
    board = AACMappings.from_file(args.file)
    _open_category(board, args.category)
    _print_images(board)


@_subcommand(
    "show",
    help="list the images on a page of a board",
    description=(
        "List the image locations on the home page of the board, or in the "
        "category named by its image location."
    ),
    handler=show,
)
def _add_show_subcommand(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="the board mappings file")
    parser.add_argument(
        "category", nargs="?", help="the image location of a category to list"
    )


def select(_, args: argparse.Namespace) -> None:
    board = AACMappings.from_file(args.file)
    for image_loc in args.images:
        if text := board.select(image_loc):
            print(text)


@_subcommand(
    "select",
    help="select images on a board, printing spoken text",
    description=(
        "Select each image in turn starting from the home page, printing the "
        "text spoken for every selected item."
    ),
    handler=select,
)
def _add_select_subcommand(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="the board mappings file")
    parser.add_argument("images", nargs="+", help="image locations to select")


def add(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if not is_writable(args.image, args.text):
        parser.error(f"image '{args.image}' cannot be stored in a mappings file")
    board = AACMappings.from_file(args.file)
    _open_category(board, args.category)
    board.add_item(args.image, args.text)
    board.write_to_file(args.output or args.file)


@_subcommand(
    "add",
    help="add an image to a board",
    description=(
        "Add an image to the home page of a board, creating a new category, or "
        "to the category given by --category."
    ),
    handler=add,
)
def _add_add_subcommand(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="the board mappings file")
    parser.add_argument("image", help="the image location to add")
    parser.add_argument("text", help="the category name or the spoken text")
    parser.add_argument(
        "-c", "--category", help="the image location of the category to add to"
    )
    parser.add_argument(
        "-o", "--output", help="write the board here instead of to the input file"
    )


def remove(_, args: argparse.Namespace) -> None:
    board = AACMappings.from_file(args.file)
    _open_category(board, args.category)
    if not board.has_image(args.image):
        raise ImageNotFoundError(args.image, board.get_category())
    board.remove_item(args.image)
    board.write_to_file(args.output or args.file)


@_subcommand(
    "remove",
    help="remove an image from a board",
    description=(
        "Remove an image from the home page of a board, deleting its category, "
        "or from the category given by --category."
    ),
    handler=remove,
)
def _add_remove_subcommand(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="the board mappings file")
    parser.add_argument("image", help="the image location to remove")
    parser.add_argument(
        "-c", "--category", help="the image location of the category to remove from"
    )
    parser.add_argument(
        "-o", "--output", help="write the board here instead of to the input file"
    )


def _board_command(
    board: AACMappings, prompter: Prompter, cmd: str, default_file: str
) -> bool:
    """Run a board session command. Return False if the session should end."""
    name, _, arg = cmd.partition(" ")
    if name == ":quit":
        return False
    elif name == ":home":
        board.reset()
        _print_images(board, prompter)
    elif name == ":images":
        _print_images(board, prompter)
    elif name == ":save":
        filename = arg.strip() or default_file
        board.write_to_file(filename)
        prompter.print(f"Saved board to {filename}")
    else:
        prompter.print(f"Unknown command {name}")
    return True


def board(_, args: argparse.Namespace) -> None:
    aac = AACMappings.from_file(args.file)
    prompter = get_prompter(aac)
    _print_images(aac, prompter)

    while True:
        try:
            line = prompter.prompt(f"{aac.get_category() or 'home'}> ").strip()
        except EOFError:
            break
        except KeyboardInterrupt:
            prompter.print("")
            continue

        if len(line) == 0:
            continue

        if line.startswith(":"):
            if not _board_command(aac, prompter, line, args.file):
                break
            continue

        try:
            text = aac.select(line)
        except ImageNotFoundError as e:
            prompter.print(str(e))
            continue

        if text:
            prompter.print(text)
        else:
            _print_images(aac, prompter)


@_subcommand(
    "board",
    help="start an interactive board session",
    description=(
        "Select images from a board interactively. Enter an image location to "
        "select it, :home to return to the home page, :images to list the "
        "current page, :save [FILE] to write the board and :quit to exit."
    ),
    handler=board,
)
def _add_board_subcommand(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="the board mappings file")


def version(_, __) -> None:
    v = importlib.metadata.version("aacmap")
    print(f"aacmap {v}")


@_subcommand("version", help="print the version of aacmap", handler=version)
def _add_version_subcommand(_: argparse.ArgumentParser) -> None:
    pass


def invoke_cli(args: Optional[Sequence[str]] = None) -> None:
    """Entrypoint to run the aacmap CLI."""
    parser = argparse.ArgumentParser(
        description="Inspect and edit two level AAC board mappings files."
    )

    subparsers = parser.add_subparsers(help="sub-commands")
    _add_show_subcommand(subparsers)
    _add_select_subcommand(subparsers)
    _add_add_subcommand(subparsers)
    _add_remove_subcommand(subparsers)
    _add_board_subcommand(subparsers)
    _add_version_subcommand(subparsers)

    parsed_args = parser.parse_args(args=args)
    if not hasattr(parsed_args, "handler"):
        parser.print_help()
        return

    logconfig.configure_root_logger(level=parsed_args.log_level)
    try:
        parsed_args.handler(parser, parsed_args)
    except (ImageNotFoundError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    invoke_cli()
