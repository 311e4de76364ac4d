"""Test terminal rendering of the board and round history."""

from src.engine import GuessRecord, Word
from src.utils.board_renderer import (
    render_board,
    render_cleared,
    render_guess_grid,
    render_mistakes,
)
from conftest import FRUIT, TOOL


class TestRenderBoard:
    """Test cases for the numbered board grid."""

    def test_empty_board(self):
        assert render_board([]) == ""

    def test_four_per_row(self):
        words = [Word(text=f"W{i}", level=1) for i in range(8)]
        lines = render_board(words).split("\n")
        assert len(lines) == 2
        assert lines[0].startswith(" 1.")
        assert " 5." in lines[1]

    def test_selected_words_bracketed(self):
        words = [Word(text="APPLE", level=1, selected=True), Word(text="PEAR", level=1)]
        rendered = render_board(words)
        assert "[APPLE]" in rendered
        assert "[PEAR]" not in rendered


def test_render_cleared():
    rendered = render_cleared([FRUIT, TOOL])
    assert rendered.split("\n") == [
        "🟨 FRUIT: APPLE, PEAR, PLUM, KIWI",
        "🟪 TOOLS: SAW, AXE, HAMMER, DRILL",
    ]


def test_render_mistakes():
    assert render_mistakes(3) == "Mistakes Remaining: • • •"
    assert render_mistakes(0) == "Mistakes Remaining:"


def test_render_guess_grid():
    history = [
        GuessRecord(words=["A", "B", "C", "D"], levels=[1, 1, 2, 3]),
        GuessRecord(words=["E", "F", "G", "H"], levels=[4, 4, 4, 4]),
    ]
    assert render_guess_grid(history) == "🟨🟨🟩🟦\n🟪🟪🟪🟪"
