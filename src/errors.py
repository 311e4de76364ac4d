"""
Exception hierarchy for kiwi-connect.

The round engine never raises for normal play; everything here belongs to
the puzzle-loading side. Each exception's string form is the message shown
to the player.
"""

from typing import List, Optional


class ConnectError(Exception):
    """Base exception for all kiwi-connect errors."""
    pass


class PuzzleProviderError(ConnectError):
    """Raised when a puzzle could not be loaded (I/O, auth, bad data)."""
    pass


class ProviderConfigError(PuzzleProviderError):
    """Raised when the puzzle backend is missing configuration or credentials."""
    pass


class InvalidDateError(PuzzleProviderError):
    """Raised when a requested date is malformed or later than today."""

    def __init__(self, date: str, today: Optional[str] = None):
        self.date = date
        self.today = today
        super().__init__("Invalid or future date")


class PuzzleNotFoundError(PuzzleProviderError):
    """Raised when no puzzle exists for the resolved date."""

    def __init__(self, date: Optional[str] = None):
        self.date = date
        if date:
            message = f"No puzzle found for {date}"
        else:
            message = "No puzzles available yet"
        super().__init__(message)


class PuzzleValidationError(PuzzleProviderError):
    """Raised when the stored puzzle for a date breaks the puzzle rules."""

    def __init__(self, date: str, problems: List[str]):
        self.date = date
        self.problems = problems
        summary = "; ".join(problems[:3])
        if len(problems) > 3:
            summary += f" (and {len(problems) - 3} more)"
        super().__init__(f"Puzzle for {date} is malformed: {summary}")
