import pathlib

import pytest

BOARD_LINES = (
    "img/food/plate.png food",
    ">img/food/icons8-french-fries-96.png french fries",
    ">img/food/icons8-watermelon-96.png watermelon",
    "img/clothing/hanger.png clothing",
    ">img/clothing/collaredshirt.png collared shirt",
)


@pytest.fixture
def board_lines() -> list[str]:
    return list(BOARD_LINES)


@pytest.fixture
def board_file(tmp_path: pathlib.Path, board_lines: list[str]) -> pathlib.Path:
    path = tmp_path / "board.txt"
    path.write_text("\n".join(board_lines) + "\n", encoding="utf-8")
    return path
