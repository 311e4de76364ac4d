"""
Puzzle validation.

Checks the rules a puzzle must satisfy before it reaches the round engine:
1. Exactly four categories, each with a non-empty name
2. Exactly four non-empty words per category
3. Levels are exactly {1, 2, 3, 4}
4. All sixteen words are distinct, ignoring case and surrounding whitespace
"""

from typing import Dict, List

from ..engine.models import Category, Puzzle
from .models import ValidationIssue, ValidationResult


CATEGORY_COUNT = 4
WORDS_PER_CATEGORY = 4
LEVELS = {1, 2, 3, 4}


def normalize_word(word: str) -> str:
    return word.strip().casefold()


def validate_categories(categories: List[Category]) -> List[ValidationIssue]:
    """Validate category count, names, word counts and levels."""
    errors: List[ValidationIssue] = []

    if len(categories) != CATEGORY_COUNT:
        errors.append(ValidationIssue(
            code="WRONG_CATEGORY_COUNT",
            message=f"Expected {CATEGORY_COUNT} categories, got {len(categories)}",
        ))

    for category in categories:
        if not category.name or not category.name.strip():
            errors.append(ValidationIssue(
                code="EMPTY_CATEGORY_NAME",
                message=f"Category at level {category.level} has no name",
            ))

        if len(category.items) != WORDS_PER_CATEGORY:
            errors.append(ValidationIssue(
                code="WRONG_WORD_COUNT",
                message=f"Category '{category.name}' has {len(category.items)} words, expected {WORDS_PER_CATEGORY}",
                category=category.name,
            ))

        for word in category.items:
            if not word or not word.strip():
                errors.append(ValidationIssue(
                    code="EMPTY_WORD",
                    message=f"Category '{category.name}' contains an empty word",
                    category=category.name,
                ))

        if category.level not in LEVELS:
            errors.append(ValidationIssue(
                code="INVALID_LEVEL",
                message=f"Category '{category.name}' has level {category.level}, expected 1-4",
                category=category.name,
            ))

    levels = [c.level for c in categories]
    if len(categories) == CATEGORY_COUNT and set(levels) != LEVELS:
        errors.append(ValidationIssue(
            code="DUPLICATE_LEVEL",
            message=f"Levels must be 1, 2, 3 and 4 once each, got {sorted(levels)}",
        ))

    return errors


def validate_words(categories: List[Category]) -> List[ValidationIssue]:
    """Check that no word appears twice across the puzzle."""
    errors: List[ValidationIssue] = []
    seen: Dict[str, str] = {}

    for category in categories:
        for word in category.items:
            if not word or not word.strip():
                continue
            key = normalize_word(word)
            if key in seen:
                errors.append(ValidationIssue(
                    code="DUPLICATE_WORD",
                    message=f"'{word}' in '{category.name}' duplicates a word in '{seen[key]}'",
                    category=category.name,
                    word=word,
                ))
            else:
                seen[key] = category.name

    return errors


def validate_puzzle(puzzle: Puzzle) -> ValidationResult:
    """
    Main validation function: checks a puzzle against all rules.

    Returns a ValidationResult with:
    - valid: True if the puzzle may be played
    - errors: every rule violation found
    - words: the puzzle's words
    """
    all_errors: List[ValidationIssue] = []
    all_errors.extend(validate_categories(puzzle.categories))
    all_errors.extend(validate_words(puzzle.categories))

    return ValidationResult(
        valid=len(all_errors) == 0,
        errors=all_errors,
        words=puzzle.words,
    )
