import logging
from typing import Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .config import GameConfig
from .engine import RoundEngine, Scheduler, SequenceStep, SubmitResult, Word, result_message
from .engine.models import Category, GuessRecord, Outcome
from .errors import PuzzleProviderError
from .puzzles import PuzzleProvider, PuzzleResponse
from .utils.board_renderer import render_guess_grid


logger = logging.getLogger("kiwi_connect.session")


class SubmitFeedback(BaseModel):
    """What the player is told after a submission."""
    result: SubmitResult
    message: Optional[str] = None


class RoundSummary(BaseModel):
    """End-of-round summary."""
    date: Optional[str] = None
    outcome: Outcome
    mistakes_made: int = 0
    guesses: List[GuessRecord] = Field(default_factory=list)
    cleared: List[Category] = Field(default_factory=list)
    message: Optional[str] = None
    grid: str = ""


class GameSession(BaseModel):
    """
    Connects a puzzle provider to a round engine for one player.

    Owns the engine, loads puzzles (resetting the round on every date
    switch), gates input while loading, on error, or while a reveal/win
    sequence runs, and maps guess results to player-facing messages.

    Attributes:
        provider: Where puzzles come from
        engine: The round engine for the active puzzle
        config: Session configuration
        response: Provider response for the active puzzle, None after a failed load
        loading: True while a puzzle is being fetched
        error: User-facing message from the last failed load
        submitting: True while a submission (and its sequence) is being handled
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    provider: PuzzleProvider
    engine: RoundEngine
    config: GameConfig = Field(default_factory=GameConfig)
    response: Optional[PuzzleResponse] = None
    loading: bool = False
    error: Optional[str] = None
    submitting: bool = False

    @classmethod
    def create(
        cls,
        provider: PuzzleProvider,
        config: Optional[GameConfig] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> "GameSession":
        """
        Factory method to create a session with an uninitialized engine.

        Args:
            provider: Puzzle provider to load from
            config: Optional GameConfig (defaults otherwise)
            scheduler: Pacing for reveal/win sequences

        Returns:
            GameSession ready for load_puzzle()
        """
        config = config or GameConfig()
        engine = RoundEngine.create(
            scheduler=scheduler,
            max_mistakes=config.max_mistakes,
            reveal_delay=config.reveal_delay,
            win_delay=config.win_delay,
            seed=config.seed,
        )
        return cls(provider=provider, engine=engine, config=config)

    # ------------------------------------------------------------------
    # Puzzle loading
    # ------------------------------------------------------------------

    def load_puzzle(self, date: Optional[str] = None) -> bool:
        """
        Fetch a puzzle and start a fresh round with it.

        On failure the error message is stored and no round is left
        active.

        Args:
            date: YYYY-MM-DD, or None for the latest available puzzle

        Returns:
            True if a round was started
        """
        self.loading = True
        self.error = None

        try:
            response = self.provider.get_puzzle(date)
        except PuzzleProviderError as e:
            logger.warning(f"Failed to load puzzle for {date or 'latest'}: {e}")
            self.error = str(e) or "Failed to load puzzle."
            self.response = None
            self.engine.initialize(None)
            return False
        finally:
            self.loading = False

        self.response = response
        self.engine.initialize(response.puzzle)
        return True

    @property
    def date(self) -> Optional[str]:
        return self.response.date if self.response else None

    @property
    def today(self) -> Optional[str]:
        return self.response.today if self.response else None

    @property
    def available_dates(self) -> List[str]:
        return self.response.available_dates if self.response else []

    # ------------------------------------------------------------------
    # Input gating
    # ------------------------------------------------------------------

    @property
    def controls_disabled(self) -> bool:
        """True whenever the player's input must be ignored."""
        return (
            self.loading
            or self.error is not None
            or self.engine.puzzle is None
            or len(self.engine.puzzle.categories) != 4
            or self.engine.busy
            or self.submitting
            or not self.engine.is_in_progress
        )

    def select(self, word: str | Word) -> List[Word]:
        if self.controls_disabled:
            return self.engine.selection
        return self.engine.toggle_select(word)

    def shuffle(self) -> None:
        if not self.controls_disabled:
            self.engine.shuffle()

    def deselect_all(self) -> None:
        if not self.controls_disabled:
            self.engine.deselect_all()

    def submit(
        self,
        notify: Optional[Callable[[SubmitFeedback], None]] = None,
        on_step: Optional[Callable[[SequenceStep], None]] = None,
    ) -> Optional[SubmitFeedback]:
        """
        Submit the current selection.

        `notify` receives the feedback before any reveal or win sequence
        starts; `on_step` receives each step of that sequence.

        Returns:
            SubmitFeedback, or None if nothing was submitted
        """
        if self.controls_disabled or len(self.engine.selection) != 4:
            return None

        self.submitting = True
        try:
            result = self.engine.submit_guess()
            if result is None:
                return None

            feedback = SubmitFeedback(
                result=result,
                message=result_message(result, self.engine.mistakes_remaining),
            )
            if notify:
                notify(feedback)

            if result == "loss":
                self.engine.reveal_remaining_on_loss(on_step)
            elif result == "win":
                self.engine.confirm_win(on_step)

            return feedback
        finally:
            self.submitting = False

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    @property
    def is_finished(self) -> bool:
        """True once the round is over and its sequence has played out."""
        return self.engine.win_confirmed or self.engine.loss_confirmed

    def summary(self) -> RoundSummary:
        """Summary of the round for the end-of-round screen."""
        engine = self.engine
        if engine.outcome == "won":
            message = result_message("win", engine.mistakes_remaining)
        elif engine.outcome == "lost":
            message = result_message("loss", engine.mistakes_remaining)
        else:
            message = None

        return RoundSummary(
            date=engine.puzzle.date if engine.puzzle else None,
            outcome=engine.outcome,
            mistakes_made=engine.mistakes_made,
            guesses=[record.model_copy() for record in engine.guess_history],
            cleared=list(engine.cleared_categories),
            message=message,
            grid=render_guess_grid(engine.guess_history),
        )

    def get_state(self) -> Dict:
        """
        Get the current session state.

        Returns:
            Dictionary containing session and round state
        """
        return {
            "date": self.date,
            "today": self.today,
            "available_dates": self.available_dates,
            "loading": self.loading,
            "error": self.error,
            "controls_disabled": self.controls_disabled,
            "round": self.engine.get_state(),
        }
