from typing import Dict, List

from ..engine.models import Category, GuessRecord, Word


COLUMNS = 4
LEVEL_SQUARES: Dict[int, str] = {1: "🟨", 2: "🟩", 3: "🟦", 4: "🟪"}


def render_board(words: List[Word], columns: int = COLUMNS) -> str:
    """
    Render the board as a numbered grid.

    Selected words are wrapped in brackets. Numbers are 1-based board
    positions, which the CLI accepts as selections.
    """
    if not words:
        return ""

    cells = []
    for i, word in enumerate(words, start=1):
        text = f"[{word.text}]" if word.selected else f" {word.text} "
        cells.append(f"{i:>2}.{text}")

    width = max(len(cell) for cell in cells)
    lines = []
    for start in range(0, len(cells), columns):
        row = cells[start:start + columns]
        lines.append("  ".join(cell.ljust(width) for cell in row).rstrip())

    return "\n".join(lines)


def render_cleared(categories: List[Category]) -> str:
    """One line per cleared category, in discovery order."""
    lines = []
    for category in categories:
        square = LEVEL_SQUARES.get(category.level, "⬜")
        lines.append(f"{square} {category.name.upper()}: {', '.join(category.items)}")
    return "\n".join(lines)


def render_mistakes(mistakes_remaining: int) -> str:
    dots = " ".join("•" for _ in range(max(mistakes_remaining, 0)))
    return f"Mistakes Remaining: {dots}".rstrip()


def render_guess_grid(history: List[GuessRecord]) -> str:
    """Render guess history as rows of level-coloured squares."""
    return "\n".join(
        "".join(LEVEL_SQUARES.get(level, "⬜") for level in record.levels)
        for record in history
    )
