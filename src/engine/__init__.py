"""Round engine for kiwi-connect."""

from .models import (
    SubmitResult,
    Outcome,
    StepKind,
    Category,
    Puzzle,
    Word,
    GuessRecord,
    SequenceStep,
)
from .sequencing import Scheduler, RealTimeScheduler, ManualScheduler, run_sequence
from .round import RoundEngine, GUESS_SIZE, DEFAULT_MISTAKES
from .feedback import PERFECTION, RESULT_MESSAGES, get_perfection, result_message

__all__ = [
    "SubmitResult",
    "Outcome",
    "StepKind",
    "Category",
    "Puzzle",
    "Word",
    "GuessRecord",
    "SequenceStep",
    "Scheduler",
    "RealTimeScheduler",
    "ManualScheduler",
    "run_sequence",
    "RoundEngine",
    "GUESS_SIZE",
    "DEFAULT_MISTAKES",
    "PERFECTION",
    "RESULT_MESSAGES",
    "get_perfection",
    "result_message",
]
