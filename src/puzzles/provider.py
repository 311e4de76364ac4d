"""
Puzzle provider base class.

Backends only have to return the raw puzzle table; date resolution,
grouping and validation live here so every backend behaves the same.

The table has a header row with (case-insensitive) columns
`date, category, level, word1, word2, word3, word4` and one row per
category.
"""

import logging
import re
from datetime import date as Date, datetime
from typing import Callable, Dict, List, Optional, Sequence
from zoneinfo import ZoneInfo

from ..config import DEFAULT_TIMEZONE
from ..engine.models import Category, Puzzle
from ..errors import InvalidDateError, PuzzleNotFoundError, PuzzleProviderError, PuzzleValidationError
from .models import PuzzleResponse
from .validation import validate_puzzle


logger = logging.getLogger("kiwi_connect.puzzles")

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
WORD_COLUMNS = ["word1", "word2", "word3", "word4"]
REQUIRED_COLUMNS = ["date", "category", "level", *WORD_COLUMNS]

Row = Sequence[str]


def is_iso_date(value: str) -> bool:
    """True for a real calendar date written as YYYY-MM-DD."""
    if not isinstance(value, str) or not ISO_DATE.match(value):
        return False
    try:
        Date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _parse_level(value: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        # Left for validation to report as INVALID_LEVEL
        return 0


def group_rows(rows: List[Row], today: str) -> Dict[str, List[Category]]:
    """
    Group table rows into categories per date.

    Rows with malformed dates or dates after `today` are skipped.

    Raises:
        PuzzleProviderError: If the header is missing required columns
    """
    if not rows:
        return {}

    header = [str(h).strip().lower() for h in rows[0]]
    missing = [column for column in REQUIRED_COLUMNS if column not in header]
    if missing:
        raise PuzzleProviderError(f"Puzzle table is missing columns: {', '.join(missing)}")

    idx = {column: header.index(column) for column in REQUIRED_COLUMNS}
    width = len(header)

    puzzles: Dict[str, List[Category]] = {}
    for row in rows[1:]:
        # Sheets drops trailing empty cells
        cells = [str(cell).strip() for cell in row] + [""] * (width - len(row))
        row_date = cells[idx["date"]]
        if not is_iso_date(row_date) or row_date > today:
            continue

        category = Category(
            name=cells[idx["category"]],
            level=_parse_level(cells[idx["level"]]),
            items=[cells[idx[column]] for column in WORD_COLUMNS],
        )
        puzzles.setdefault(row_date, []).append(category)

    return puzzles


class PuzzleProvider:
    """
    Supplies validated puzzles by date.

    Subclasses implement `fetch_rows`. "Today" is taken in the provider's
    timezone, and no puzzle dated after it is ever returned.
    """

    def __init__(
        self,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.timezone = timezone
        self._clock = clock

    def fetch_rows(self) -> List[Row]:
        """Return the raw puzzle table, header row first."""
        raise NotImplementedError

    def today(self) -> str:
        """Today's date in the provider's timezone, as YYYY-MM-DD."""
        zone = ZoneInfo(self.timezone)
        now = self._clock() if self._clock else datetime.now(zone)
        if now.tzinfo is not None:
            now = now.astimezone(zone)
        return now.date().isoformat()

    def get_puzzle(self, date: Optional[str] = None) -> PuzzleResponse:
        """
        Load the puzzle for a date.

        Args:
            date: YYYY-MM-DD, or None for the most recent puzzle on or before today

        Returns:
            PuzzleResponse with the validated categories

        Raises:
            InvalidDateError: If the date is malformed or in the future
            PuzzleNotFoundError: If there is no puzzle for the resolved date
            PuzzleValidationError: If the stored puzzle breaks the puzzle rules
            PuzzleProviderError: If the backend fails
        """
        today = self.today()

        if date is not None and (not is_iso_date(date) or date > today):
            logger.info(f"Rejected puzzle date {date!r} (today is {today})")
            raise InvalidDateError(date, today)

        puzzles = group_rows(self.fetch_rows(), today)
        available_dates = sorted(puzzles, reverse=True)

        if date is None:
            if not available_dates:
                raise PuzzleNotFoundError()
            date = available_dates[0]

        categories = puzzles.get(date)
        if not categories:
            raise PuzzleNotFoundError(date)

        result = validate_puzzle(Puzzle(date=date, categories=categories))
        if not result.valid:
            problems = [error.message for error in result.errors]
            logger.warning(f"Puzzle for {date} failed validation: {problems}")
            raise PuzzleValidationError(date, problems)

        logger.info(f"Loaded puzzle for {date} ({len(available_dates)} dates available)")
        return PuzzleResponse(
            date=date,
            today=today,
            available_dates=available_dates,
            categories=categories,
        )
