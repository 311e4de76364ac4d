import logging
import random
from typing import Callable, Dict, Iterator, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from .models import Category, GuessRecord, Outcome, Puzzle, SequenceStep, SubmitResult, Word
from .sequencing import RealTimeScheduler, Scheduler, run_sequence


logger = logging.getLogger("kiwi_connect.engine")

GUESS_SIZE = 4
DEFAULT_MISTAKES = 4


class RoundEngine(BaseModel):
    """
    Runs one round of a connections puzzle.

    Tracks the board, the player's selection, guess history, cleared
    categories and the mistake budget, and scores submitted guesses
    against the hidden category assignment.

    Precondition failures (wrong selection size, round already over,
    sequence in flight) are silent no-ops: they are UI races, not errors.

    Attributes:
        puzzle: The puzzle being played, or None before initialization
        board: Words not yet cleared, in display order
        cleared_categories: Categories removed from the board, in discovery order
        guess_history: Every non-repeat guess submitted this round
        mistakes_remaining: Incorrect guesses still allowed
        outcome: Round state
        busy: True while a reveal/confirm sequence is in flight
        seed: Optional random seed for reproducible shuffles
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    puzzle: Optional[Puzzle] = None
    board: List[Word] = Field(default_factory=list)
    cleared_categories: List[Category] = Field(default_factory=list)
    guess_history: List[GuessRecord] = Field(default_factory=list)
    max_mistakes: int = Field(default=DEFAULT_MISTAKES, ge=1)
    mistakes_remaining: int = DEFAULT_MISTAKES
    outcome: Outcome = "uninitialized"
    busy: bool = False
    loss_confirmed: bool = False
    win_confirmed: bool = False
    reveal_delay: float = Field(default=1.0, ge=0)
    win_delay: float = Field(default=1.0, ge=0)
    seed: Optional[int] = None
    scheduler: Scheduler = Field(default_factory=RealTimeScheduler, exclude=True)
    _rng: random.Random = None
    _round: int = 0

    def model_post_init(self, __context) -> None:
        """Initialize the random generator after model creation."""
        self._rng = random.Random(self.seed)
        self.mistakes_remaining = self.max_mistakes

    @classmethod
    def create(
        cls,
        puzzle: Optional[Puzzle] = None,
        scheduler: Optional[Scheduler] = None,
        **settings,
    ) -> "RoundEngine":
        """
        Factory method to create an engine and start a round.

        Args:
            puzzle: Puzzle to play (None leaves the engine uninitialized)
            scheduler: Pacing for reveal/win sequences (real time by default)
            **settings: max_mistakes, reveal_delay, win_delay, seed

        Returns:
            A new RoundEngine, initialized with the puzzle
        """
        engine = cls(scheduler=scheduler or RealTimeScheduler(), **settings)
        engine.initialize(puzzle)
        return engine

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def selection(self) -> List[Word]:
        """Selected words, in board order."""
        return [word for word in self.board if word.selected]

    @property
    def is_in_progress(self) -> bool:
        return self.outcome == "in_progress"

    @property
    def mistakes_made(self) -> int:
        return self.max_mistakes - self.mistakes_remaining

    def board_snapshot(self) -> List[Word]:
        """Copy of the board that callers may keep without aliasing engine state."""
        return [word.model_copy() for word in self.board]

    def remaining_categories(self) -> List[Category]:
        """Categories not yet cleared, in ascending level."""
        if self.puzzle is None:
            return []
        remaining = [c for c in self.puzzle.categories if c not in self.cleared_categories]
        return sorted(remaining, key=lambda c: c.level)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, puzzle: Optional[Puzzle]) -> None:
        """
        Start a new round, discarding everything from the previous one.

        A missing or empty puzzle leaves the engine uninitialized.
        Sequences started in an earlier round stop at their next step.
        """
        self._round += 1
        self.cleared_categories = []
        self.guess_history = []
        self.mistakes_remaining = self.max_mistakes
        self.busy = False
        self.loss_confirmed = False
        self.win_confirmed = False

        if puzzle is None or not puzzle.categories:
            self.puzzle = None
            self.board = []
            self.outcome = "uninitialized"
            logger.info("Round cleared, no active puzzle")
            return

        self.puzzle = puzzle
        words = [
            Word(text=item, level=category.level)
            for category in puzzle.categories
            for item in category.items
        ]
        self._rng.shuffle(words)
        self.board = words
        self.outcome = "in_progress"
        logger.info(f"Round started for puzzle {puzzle.date or '(undated)'} with {len(words)} words")

    def _accepts_input(self, operation: str) -> bool:
        if self.outcome != "in_progress" or self.busy:
            logger.debug(f"Ignoring {operation}: outcome={self.outcome}, busy={self.busy}")
            return False
        return True

    # ------------------------------------------------------------------
    # Board operations
    # ------------------------------------------------------------------

    def _find(self, word: Union[str, Word]) -> Optional[Word]:
        text = word.text if isinstance(word, Word) else word
        for tile in self.board:
            if tile.text == text:
                return tile
        return None

    def toggle_select(self, word: Union[str, Word]) -> List[Word]:
        """
        Toggle a word's selection.

        Deselecting is always allowed; selecting is capped at four words.

        Args:
            word: The word text, or a Word from a board snapshot

        Returns:
            The selection after the toggle
        """
        if not self._accepts_input("toggle_select"):
            return self.selection

        tile = self._find(word)
        if tile is None:
            logger.debug(f"Ignoring toggle_select: {word!r} is not on the board")
            return self.selection

        if tile.selected:
            tile.selected = False
        elif len(self.selection) < GUESS_SIZE:
            tile.selected = True

        return self.selection

    def shuffle(self) -> None:
        """Reorder the board; selection flags travel with their words."""
        if not self._accepts_input("shuffle"):
            return
        self._rng.shuffle(self.board)

    def deselect_all(self) -> None:
        """Clear every selection flag on the board."""
        if not self._accepts_input("deselect_all"):
            return
        self._clear_selection()

    def _clear_selection(self) -> None:
        for tile in self.board:
            tile.selected = False

    # ------------------------------------------------------------------
    # Guess evaluation
    # ------------------------------------------------------------------

    def likeness(self, words: List[Word]) -> List[int]:
        """Count how many of `words` belong to each puzzle category, in puzzle order."""
        if self.puzzle is None:
            return []
        return [
            sum(1 for word in words if word.text in category.items)
            for category in self.puzzle.categories
        ]

    def submit_guess(self) -> Optional[SubmitResult]:
        """
        Score the current four-word selection.

        Returns:
            The result tag, or None if the guess could not be submitted
            (round not in progress, sequence in flight, or selection != 4)
        """
        if not self._accepts_input("submit_guess"):
            return None

        selection = self.selection
        if len(selection) != GUESS_SIZE:
            logger.debug(f"Ignoring submit_guess: {len(selection)} words selected")
            return None

        texts = [word.text for word in selection]
        if any(record.matches(texts) for record in self.guess_history):
            logger.info(f"Repeat guess {texts}")
            return "same"

        record = GuessRecord(words=texts, levels=[word.level for word in selection])
        self.guess_history.append(record)

        # Scored against the full puzzle; cleared words can no longer be selected.
        counts = self.likeness(selection)
        max_likeness = max(counts)
        matched = self.puzzle.categories[counts.index(max_likeness)]

        if max_likeness == GUESS_SIZE:
            result = self._clear_category(matched)
        else:
            result = self._register_mistake(max_likeness)

        record.result = result
        return result

    def _clear_category(self, category: Category) -> SubmitResult:
        self.cleared_categories.append(category)
        self.board = [word for word in self.board if word.text not in category.items]
        logger.info(f"Cleared category {category.name!r} (level {category.level})")

        if not self.board:
            self.outcome = "won"
            logger.info(f"Round won with {self.mistakes_remaining} mistakes remaining")
            return "win"
        return "correct"

    def _register_mistake(self, max_likeness: int) -> SubmitResult:
        self.mistakes_remaining -= 1

        if self.mistakes_remaining == 0:
            self.outcome = "lost"
            logger.info("Round lost, no mistakes remaining")
            return "loss"
        if max_likeness == GUESS_SIZE - 1:
            return "one_away"
        return "incorrect"

    # ------------------------------------------------------------------
    # Timed sequences
    # ------------------------------------------------------------------

    def reveal_steps(self) -> Iterator[SequenceStep]:
        """
        Reveal the categories the player missed, one at a time.

        Only runs once, after a loss. Yields a `wait` step before each
        reveal and before the final confirmation; the engine stays busy
        until the generator is exhausted. Re-initializing the engine
        ends the generator without touching the new round.
        """
        if self.outcome != "lost" or self.loss_confirmed or self.busy:
            return

        round_id = self._round
        self.busy = True
        self._clear_selection()

        for category in self.remaining_categories():
            if self._is_stale(round_id):
                return
            yield SequenceStep(kind="wait", delay=self.reveal_delay)
            if self._is_stale(round_id):
                return
            self.cleared_categories.append(category)
            self.board = [word for word in self.board if word.text not in category.items]
            logger.info(f"Revealed category {category.name!r} (level {category.level})")
            yield SequenceStep(kind="reveal", category=category)

        if self._is_stale(round_id):
            return
        yield SequenceStep(kind="wait", delay=self.reveal_delay)
        if self._is_stale(round_id):
            return
        self.loss_confirmed = True
        self.busy = False
        yield SequenceStep(kind="confirm_loss")

    def win_steps(self) -> Iterator[SequenceStep]:
        """Let the winning animation finish, then mark the round ready for the summary."""
        if self.outcome != "won" or self.win_confirmed or self.busy:
            return

        round_id = self._round
        self.busy = True
        yield SequenceStep(kind="wait", delay=self.win_delay)
        if self._is_stale(round_id):
            return
        self.win_confirmed = True
        self.busy = False
        yield SequenceStep(kind="confirm_win")

    def _is_stale(self, round_id: int) -> bool:
        if self._round != round_id:
            logger.debug("Sequence from a previous round stopped")
            return True
        return False

    def reveal_remaining_on_loss(
        self,
        on_step: Optional[Callable[[SequenceStep], None]] = None,
    ) -> List[SequenceStep]:
        """Blocking form of `reveal_steps`, paced by the engine's scheduler."""
        return run_sequence(self.reveal_steps(), self.scheduler, on_step)

    def confirm_win(
        self,
        on_step: Optional[Callable[[SequenceStep], None]] = None,
    ) -> List[SequenceStep]:
        """Blocking form of `win_steps`, paced by the engine's scheduler."""
        return run_sequence(self.win_steps(), self.scheduler, on_step)

    def get_state(self) -> Dict:
        """
        Get the current round state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "date": self.puzzle.date if self.puzzle else None,
            "outcome": self.outcome,
            "words_remaining": len(self.board),
            "selected": [word.text for word in self.selection],
            "cleared": [category.name for category in self.cleared_categories],
            "mistakes_remaining": self.mistakes_remaining,
            "guesses": len(self.guess_history),
            "busy": self.busy,
        }
