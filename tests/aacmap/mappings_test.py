import io
import logging
import pathlib

import pytest
from pyrsistent import pvector

from aacmap.category import ImageNotFoundError
from aacmap.mappings import AACMappings, is_writable


@pytest.fixture
def board(board_lines: list[str]) -> AACMappings:
    return AACMappings.from_lines(board_lines)


class TestLoading:
    def test_home_page(self, board: AACMappings):
        assert board.is_home
        assert "" == board.get_category()
        assert (
            pvector(["img/food/plate.png", "img/clothing/hanger.png"])
            == board.get_image_locs()
        )
        assert 2 == board.category_count()

    def test_categories(self, board: AACMappings):
        assert [
            ("img/food/plate.png", "food"),
            ("img/clothing/hanger.png", "clothing"),
        ] == [(loc, cat.get_category()) for loc, cat in board.categories()]

    def test_from_file(self, board_file: pathlib.Path):
        board = AACMappings.from_file(board_file)
        assert 2 == board.category_count()
        assert board.has_image("img/food/plate.png")

    def test_from_missing_file(self, tmp_path: pathlib.Path):
        with pytest.raises(FileNotFoundError):
            AACMappings.from_file(tmp_path / "missing.txt")

    def test_skips_short_lines(self):
        board = AACMappings.from_lines(
            ["", "img/food/plate.png food", ">lonely", " >indented text", "\n"]
        )
        board.select("img/food/plate.png")
        assert pvector() == board.get_image_locs()

    def test_text_keeps_inner_whitespace(self):
        board = AACMappings.from_lines(
            ["img/a.png a category", ">img/b.png  two  spaces"]
        )
        board.select("img/a.png")
        assert "a category" == board.get_category()
        assert " two  spaces" == board.select("img/b.png")

    def test_skips_item_before_category(self, caplog):
        with caplog.at_level(logging.WARNING, logger="aacmap"):
            board = AACMappings.from_lines([">img/a.png orphan", "img/b.png cat"])
        assert 1 == board.category_count()
        assert "line 1" in caplog.text

    def test_windows_line_endings(self):
        board = AACMappings.from_lines(["img/a.png cat\r\n", ">img/b.png b\r\n"])
        board.select("img/a.png")
        assert "b" == board.select("img/b.png")


class TestSelect:
    def test_select_category(self, board: AACMappings):
        assert "" == board.select("img/food/plate.png")
        assert not board.is_home
        assert "food" == board.get_category()
        assert (
            pvector(
                [
                    "img/food/icons8-french-fries-96.png",
                    "img/food/icons8-watermelon-96.png",
                ]
            )
            == board.get_image_locs()
        )

    def test_select_item(self, board: AACMappings):
        board.select("img/clothing/hanger.png")
        assert "collared shirt" == board.select("img/clothing/collaredshirt.png")
        assert "clothing" == board.get_category()

    def test_select_missing_category(self, board: AACMappings):
        with pytest.raises(ImageNotFoundError):
            board.select("img/toys/ball.png")
        assert board.is_home

    def test_select_home_key(self, board: AACMappings):
        with pytest.raises(ImageNotFoundError):
            board.select("")
        assert board.is_home

    def test_select_item_from_other_category(self, board: AACMappings):
        board.select("img/food/plate.png")
        with pytest.raises(ImageNotFoundError):
            board.select("img/clothing/collaredshirt.png")
        assert "food" == board.get_category()

    def test_reset(self, board: AACMappings):
        board.select("img/food/plate.png")
        board.reset()
        assert board.is_home
        assert "" == board.get_category()


class TestEditing:
    def test_add_category(self, board: AACMappings):
        board.add_item("img/toys/ball.png", "toys")
        assert 3 == board.category_count()
        assert board.has_image("img/toys/ball.png")
        board.select("img/toys/ball.png")
        assert "toys" == board.get_category()
        assert pvector() == board.get_image_locs()

    def test_add_category_ignores_null_and_home(self, board: AACMappings):
        board.add_item(None, "nothing")
        board.add_item("", "nothing")
        assert 2 == board.category_count()
        assert "" == board.home.get_category()

    def test_add_item_to_category(self, board: AACMappings):
        board.select("img/food/plate.png")
        board.add_item("img/food/pizza.png", "pizza")
        assert "pizza" == board.select("img/food/pizza.png")
        board.reset()
        assert 2 == board.category_count()
        assert not board.has_image("img/food/pizza.png")

    def test_remove_category(self, board: AACMappings):
        board.add_item("img/toys/ball.png", "toys")
        board.remove_item("img/food/plate.png")
        assert 2 == board.category_count()
        assert (
            pvector(["img/toys/ball.png", "img/clothing/hanger.png"])
            == board.get_image_locs()
        )
        assert [
            "img/toys/ball.png",
            "img/clothing/hanger.png",
        ] == [loc for loc, _ in board.categories()]

    @pytest.mark.parametrize(
        "image_loc,text",
        [
            ("img/my ball.png", "toys"),
            ("img/tab\tball.png", "toys"),
            (">img/x.png", "marked"),
            ("img/x.png", "two\nlines"),
            ("img/x.png", None),
        ],
    )
    def test_add_unstorable_category(self, board: AACMappings, image_loc, text):
        board.add_item(image_loc, text)
        assert 2 == board.category_count()
        assert not board.has_image(image_loc)

    def test_add_unstorable_item(self, board: AACMappings):
        board.select("img/food/plate.png")
        board.add_item("img/food/hot dog.png", "hot dog")
        board.add_item(">img/food/pie.png", "pie")
        assert (
            pvector(
                [
                    "img/food/icons8-french-fries-96.png",
                    "img/food/icons8-watermelon-96.png",
                ]
            )
            == board.get_image_locs()
        )

    def test_remove_home_key_is_ignored(self, board: AACMappings):
        board.remove_item("")
        assert 2 == board.category_count()
        assert board.is_home

    def test_remove_item_from_category(self, board: AACMappings):
        board.select("img/food/plate.png")
        board.remove_item("img/food/icons8-french-fries-96.png")
        assert not board.has_image("img/food/icons8-french-fries-96.png")
        assert board.has_image("img/food/icons8-watermelon-96.png")


class TestWriting:
    def test_round_trip(self, board: AACMappings, board_lines: list[str]):
        assert board_lines == board.to_lines()

    def test_write_to_file(
        self, board_file: pathlib.Path, board_lines: list[str], tmp_path: pathlib.Path
    ):
        out = tmp_path / "out.txt"
        AACMappings.from_file(board_file).write_to_file(out)
        assert board_file.read_text(encoding="utf-8") == out.read_text(
            encoding="utf-8"
        )
        assert board_lines == AACMappings.from_file(out).to_lines()

    def test_write_after_edits(self, board: AACMappings):
        board.select("img/food/plate.png")
        board.add_item("img/food/pizza.png", "pizza")
        board.remove_item("img/food/icons8-french-fries-96.png")
        board.reset()
        board.add_item("img/toys/ball.png", "toys")

        buf = io.StringIO()
        board.write(buf)
        assert [
            "img/food/plate.png food",
            ">img/food/pizza.png pizza",
            ">img/food/icons8-watermelon-96.png watermelon",
            "img/clothing/hanger.png clothing",
            ">img/clothing/collaredshirt.png collared shirt",
            "img/toys/ball.png toys",
        ] == buf.getvalue().splitlines()

    def test_round_trip_after_rejected_adds(self, board: AACMappings):
        board.add_item("img/my ball.png", "toys")
        board.add_item(">img/x.png", "marked")
        board.add_item("img/toys/ball.png", "toys")
        reloaded = AACMappings.from_lines(board.to_lines())
        assert board.get_image_locs() == reloaded.get_image_locs()
        assert board.to_lines() == reloaded.to_lines()

    def test_write_skips_unstorable_entries(self, caplog):
        board = AACMappings()
        board.add_item("img/food/plate.png", "food")
        board.select("img/food/plate.png")
        board.current_category.add_item("img/food/hot dog.png", "hot dog")
        board.current_category.add_item("img/food/pie.png", "pie")
        board.read_lines(["img/odd.png odd\x85name"])

        with caplog.at_level(logging.WARNING, logger="aacmap"):
            lines = board.to_lines()
        assert ["img/food/plate.png food", ">img/food/pie.png pie"] == lines
        assert "img/food/hot dog.png" in caplog.text
        assert "img/odd.png" in caplog.text
        assert lines == AACMappings.from_lines(lines).to_lines()

    @pytest.mark.parametrize(
        "image_loc,text,expected",
        [
            ("img/a.png", "some text", True),
            ("img/a.png", "", True),
            ("", "text", False),
            (None, "text", False),
            ("img/a b.png", "text", False),
            (">img/a.png", "text", False),
            ("img/a.png", "line\r", False),
            ("img/a.png", None, False),
        ],
    )
    def test_is_writable(self, image_loc, text, expected):
        assert expected is is_writable(image_loc, text)

    def test_write_empty_board(self):
        assert [] == AACMappings().to_lines()
