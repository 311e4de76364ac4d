"""Schedulers that pace the timed reveal and win sequences."""

import time
from typing import Callable, Iterable, List, Optional

from .models import SequenceStep


class Scheduler:
    """Something that can wait between sequence steps."""

    def sleep(self, seconds: float) -> None:
        raise NotImplementedError


class RealTimeScheduler(Scheduler):
    """Blocks the calling thread for the requested delay."""

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)


class ManualScheduler(Scheduler):
    """
    Records requested delays without sleeping.

    Used by tests and headless drivers that want the sequence ordering
    without the real-time pacing.
    """

    def __init__(self) -> None:
        self.delays: List[float] = []

    @property
    def elapsed(self) -> float:
        """Total time the sequence asked to wait."""
        return sum(self.delays)

    def sleep(self, seconds: float) -> None:
        self.delays.append(seconds)


def run_sequence(
    steps: Iterable[SequenceStep],
    scheduler: Scheduler,
    on_step: Optional[Callable[[SequenceStep], None]] = None,
) -> List[SequenceStep]:
    """
    Drive a step generator to completion.

    Waits on each `wait` step and reports every other step to `on_step`.

    Returns:
        The non-wait steps, in the order they were applied
    """
    applied: List[SequenceStep] = []
    for step in steps:
        if step.kind == "wait":
            scheduler.sleep(step.delay)
            continue
        applied.append(step)
        if on_step:
            on_step(step)
    return applied
