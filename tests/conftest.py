"""Shared puzzle fixtures."""

from datetime import datetime, timezone
from typing import List

import pytest

from src.engine import Category, ManualScheduler, Puzzle, RoundEngine
from src.puzzles import PuzzleProvider


FRUIT = Category(name="Fruit", level=1, items=["APPLE", "PEAR", "PLUM", "KIWI"])
COLOR = Category(name="Colors", level=2, items=["RED", "BLUE", "GREEN", "GOLD"])
METAL = Category(name="Metals", level=3, items=["IRON", "GOLD2", "TIN", "LEAD"])
TOOL = Category(name="Tools", level=4, items=["SAW", "AXE", "HAMMER", "DRILL"])

# 2025-01-07 12:00 UTC is 2025-01-08 01:00 in Auckland (NZDT, UTC+13)
FIXED_NOW = datetime(2025, 1, 7, 12, 0, tzinfo=timezone.utc)
NZ_TODAY = "2025-01-08"


def make_puzzle(date: str = "2025-01-06") -> Puzzle:
    return Puzzle(date=date, categories=[FRUIT, COLOR, METAL, TOOL])


def puzzle_rows(date: str, categories: List[Category]) -> List[List[str]]:
    """Table rows (no header) for a puzzle, as stored in the sheet."""
    return [
        [date, c.name, str(c.level), *c.items]
        for c in categories
    ]


HEADER = ["Date", "Category", "Level", "Word1", "Word2", "Word3", "Word4"]


class StaticPuzzleProvider(PuzzleProvider):
    """Provider serving a fixed in-memory table."""

    def __init__(self, rows, **kwargs):
        kwargs.setdefault("clock", lambda: FIXED_NOW)
        super().__init__(**kwargs)
        self.rows = rows
        self.calls = 0

    def fetch_rows(self):
        self.calls += 1
        return self.rows


@pytest.fixture
def puzzle() -> Puzzle:
    return make_puzzle()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def engine(puzzle, scheduler) -> RoundEngine:
    return RoundEngine.create(puzzle, scheduler=scheduler, seed=7)


@pytest.fixture
def table() -> List[List[str]]:
    """Sheet with puzzles on two past days and one future day."""
    future = [
        Category(name="Planets", level=1, items=["MARS", "VENUS", "EARTH", "PLUTO"]),
        Category(name="Seas", level=2, items=["RED SEA", "DEAD", "BLACK", "CORAL"]),
        Category(name="Birds", level=3, items=["TUI", "KEA", "MOA", "WEKA"]),
        Category(name="Trees", level=4, items=["RIMU", "KAURI", "TOTARA", "MATAI"]),
    ]
    return (
        [HEADER]
        + puzzle_rows("2025-01-06", [FRUIT, COLOR, METAL, TOOL])
        + puzzle_rows("2025-01-07", [TOOL, METAL, COLOR, FRUIT])
        + puzzle_rows("2025-01-09", future)
    )


@pytest.fixture
def provider(table) -> StaticPuzzleProvider:
    return StaticPuzzleProvider(table)


def guess(engine: RoundEngine, *words: str):
    """Select exactly `words` and submit."""
    engine.deselect_all()
    for word in words:
        engine.toggle_select(word)
    return engine.submit_guess()
