"""Player-facing text for guess results."""

from typing import Dict, Optional

from .models import SubmitResult


PERFECTION: Dict[int, str] = {
    4: "Perfect!",
    3: "Great!",
    2: "Solid!",
    1: "Phew!",
}

RESULT_MESSAGES: Dict[str, str] = {
    "same": "You've already guessed that!",
    "one_away": "One away...",
    "loss": "Better luck next time!",
}


def get_perfection(mistakes_remaining: int) -> str:
    """Congratulation whose tone depends on how many mistakes were left."""
    return PERFECTION.get(mistakes_remaining, "Phew!")


def result_message(result: SubmitResult, mistakes_remaining: int) -> Optional[str]:
    """
    Message to pop up after a guess.

    `correct` and `incorrect` are shown through animation only, so they
    have no message.
    """
    if result == "win":
        return get_perfection(mistakes_remaining)
    return RESULT_MESSAGES.get(result)
