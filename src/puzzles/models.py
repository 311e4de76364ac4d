"""Data models for puzzle loading and validation."""

from typing import List, Optional
from pydantic import BaseModel, Field

from ..engine.models import Category, Puzzle


class ValidationIssue(BaseModel):
    """A single puzzle rule violation."""
    code: str
    message: str
    category: Optional[str] = None
    word: Optional[str] = None


class ValidationResult(BaseModel):
    """Result of puzzle validation."""
    valid: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    words: List[str] = Field(default_factory=list)


class PuzzleResponse(BaseModel):
    """What a provider hands back for a date."""
    date: str
    today: str
    available_dates: List[str] = Field(default_factory=list)  # newest first
    categories: List[Category] = Field(default_factory=list)

    @property
    def puzzle(self) -> Puzzle:
        return Puzzle(date=self.date, categories=self.categories)
