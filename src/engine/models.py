"""
Pydantic models for the round engine.

Categories and puzzles are immutable once loaded; the only thing that
changes on a tile during play is its `selected` flag.
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


# Type aliases
SubmitResult = Literal["same", "correct", "incorrect", "one_away", "win", "loss"]
Outcome = Literal["uninitialized", "in_progress", "won", "lost"]
StepKind = Literal["wait", "reveal", "confirm_loss", "confirm_win"]


class Category(BaseModel):
    """One hidden group of four words."""
    model_config = ConfigDict(frozen=True)

    name: str
    level: int  # 1..4, unique within a puzzle
    items: List[str] = Field(default_factory=list)


class Puzzle(BaseModel):
    """A day's four categories."""
    model_config = ConfigDict(frozen=True)

    date: Optional[str] = None
    categories: List[Category] = Field(default_factory=list)

    @property
    def words(self) -> List[str]:
        """All words of the puzzle, category by category."""
        return [word for category in self.categories for word in category.items]

    def category_for(self, word: str) -> Optional[Category]:
        """The category a word belongs to, if any."""
        for category in self.categories:
            if word in category.items:
                return category
        return None


class Word(BaseModel):
    """A tile on the board."""
    text: str
    level: int
    selected: bool = False


class GuessRecord(BaseModel):
    """A submitted four-word guess and how it scored."""
    words: List[str]
    levels: List[int]
    result: Optional[SubmitResult] = None

    def matches(self, words: List[str]) -> bool:
        """True if this guess holds the same words, in any order."""
        return set(self.words) == set(words)


class SequenceStep(BaseModel):
    """
    One step of a timed reveal/confirm sequence.

    `wait` steps ask the driver to pause for `delay` seconds; every other
    kind reports a state change that has already been applied.
    """
    kind: StepKind
    delay: float = 0.0
    category: Optional[Category] = None
