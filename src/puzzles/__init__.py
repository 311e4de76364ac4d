"""Puzzle loading and validation for kiwi-connect."""

from .models import ValidationIssue, ValidationResult, PuzzleResponse
from .validation import validate_puzzle, validate_categories, validate_words, normalize_word
from .provider import PuzzleProvider, group_rows, is_iso_date, REQUIRED_COLUMNS
from .file import FilePuzzleProvider
from .sheets import SheetsPuzzleProvider, SHEETS_SCOPES
from .factory import create_provider

__all__ = [
    # Models
    "ValidationIssue",
    "ValidationResult",
    "PuzzleResponse",
    # Validation
    "validate_puzzle",
    "validate_categories",
    "validate_words",
    "normalize_word",
    # Providers
    "PuzzleProvider",
    "group_rows",
    "is_iso_date",
    "REQUIRED_COLUMNS",
    "FilePuzzleProvider",
    "SheetsPuzzleProvider",
    "SHEETS_SCOPES",
    "create_provider",
]
