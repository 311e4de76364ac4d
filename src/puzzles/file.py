"""
Local file puzzle backend.

Reads the same table the Sheets backend uses, from either a CSV file
(header row first) or a YAML file holding a list of row mappings:

    - date: "2025-01-06"
      category: FRUIT
      level: 1
      word1: APPLE
      word2: PEAR
      word3: PLUM
      word4: KIWI
"""

import csv
import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import yaml

from ..config import DEFAULT_TIMEZONE
from ..errors import ProviderConfigError, PuzzleProviderError
from .provider import REQUIRED_COLUMNS, PuzzleProvider, Row


logger = logging.getLogger("kiwi_connect.puzzles.file")


class FilePuzzleProvider(PuzzleProvider):
    """Puzzle provider backed by a CSV or YAML file."""

    def __init__(
        self,
        path: str | Path,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        super().__init__(timezone=timezone, clock=clock)
        self.path = Path(path)

    def fetch_rows(self) -> List[Row]:
        if not self.path.exists():
            raise ProviderConfigError(f"Puzzle file not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix == ".csv":
            rows = self._read_csv()
        elif suffix in (".yaml", ".yml"):
            rows = self._read_yaml()
        else:
            raise ProviderConfigError(f"Unsupported puzzle file type: {self.path.suffix}")

        logger.debug(f"Read {len(rows)} rows from {self.path}")
        return rows

    def _read_csv(self) -> List[Row]:
        with open(self.path, newline="", encoding="utf-8") as f:
            return [row for row in csv.reader(f) if row]

    def _read_yaml(self) -> List[Row]:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or []
        except yaml.YAMLError as e:
            raise PuzzleProviderError(f"Could not parse {self.path.name}: {e}") from e

        if not isinstance(data, list):
            raise PuzzleProviderError(f"{self.path.name} must contain a list of rows")

        rows: List[Row] = [list(REQUIRED_COLUMNS)]
        for entry in data:
            if not isinstance(entry, dict):
                raise PuzzleProviderError(f"{self.path.name} contains a row that is not a mapping")
            lowered = {str(key).lower(): value for key, value in entry.items()}
            # str() also turns unquoted YAML dates back into YYYY-MM-DD
            rows.append([
                "" if lowered.get(column) is None else str(lowered[column])
                for column in REQUIRED_COLUMNS
            ])
        return rows
