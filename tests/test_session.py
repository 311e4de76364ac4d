"""Test the game session: loading, input gating, feedback and summaries."""

import pytest

from src.config import GameConfig
from src.engine import ManualScheduler
from src.session import GameSession
from conftest import COLOR, FRUIT, METAL, TOOL, StaticPuzzleProvider


@pytest.fixture
def session(provider, scheduler) -> GameSession:
    session = GameSession.create(provider, config=GameConfig(seed=1), scheduler=scheduler)
    assert session.load_puzzle("2025-01-06") is True
    return session


def pick(session: GameSession, *words: str):
    session.deselect_all()
    for word in words:
        session.select(word)
    return session.submit()


class TestLoading:
    """Test cases for loading puzzles."""

    def test_load_latest(self, provider, scheduler):
        session = GameSession.create(provider, scheduler=scheduler)
        assert session.load_puzzle() is True
        assert session.date == "2025-01-07"
        assert session.today == "2025-01-08"
        assert session.available_dates == ["2025-01-07", "2025-01-06"]
        assert session.engine.outcome == "in_progress"
        assert session.loading is False
        assert session.error is None

    def test_config_reaches_engine(self, provider, scheduler):
        config = GameConfig(max_mistakes=2, reveal_delay=0.5, win_delay=0.25, seed=9)
        session = GameSession.create(provider, config=config, scheduler=scheduler)
        assert session.engine.max_mistakes == 2
        assert session.engine.reveal_delay == 0.5
        assert session.engine.win_delay == 0.25
        assert session.engine.seed == 9

    def test_invalid_date_blocks_round(self, session):
        """A failed load leaves an error and no round."""
        assert session.load_puzzle("2025-01-09") is False
        assert session.error == "Invalid or future date"
        assert session.engine.outcome == "uninitialized"
        assert session.engine.board == []
        assert session.controls_disabled is True

    def test_failed_load_drops_previous_puzzle(self, session):
        """After an error the session no longer reports the old puzzle's date."""
        assert session.load_puzzle("2024-12-25") is False
        assert session.response is None
        assert session.date is None
        assert session.today is None
        assert session.available_dates == []

    def test_not_found(self, session):
        assert session.load_puzzle("2024-12-25") is False
        assert session.error == "No puzzle found for 2024-12-25"

    def test_error_cleared_by_next_load(self, session):
        session.load_puzzle("2025-01-09")
        assert session.load_puzzle("2025-01-07") is True
        assert session.error is None
        assert session.controls_disabled is False

    def test_provider_failure_message(self, scheduler):
        provider = StaticPuzzleProvider([["date"]])
        session = GameSession.create(provider, scheduler=scheduler)
        assert session.load_puzzle() is False
        assert "missing columns" in session.error

    def test_date_switch_resets_round(self, session):
        """Switching dates mid-round starts over rather than merging."""
        pick(session, "APPLE", "PEAR", "PLUM", "KIWI")
        pick(session, "RED", "BLUE", "IRON", "TIN")
        session.select("SAW")

        session.load_puzzle("2025-01-07")

        engine = session.engine
        assert session.date == "2025-01-07"
        assert engine.mistakes_remaining == 4
        assert engine.guess_history == []
        assert engine.cleared_categories == []
        assert engine.selection == []
        assert len(engine.board) == 16


class TestControls:
    """Test cases for input gating."""

    def test_enabled_during_round(self, session):
        assert session.controls_disabled is False

    def test_disabled_before_load(self, provider, scheduler):
        session = GameSession.create(provider, scheduler=scheduler)
        assert session.controls_disabled is True
        assert session.select("APPLE") == []

    def test_disabled_while_loading(self, session):
        session.loading = True
        assert session.controls_disabled is True
        assert session.select("APPLE") == []
        assert session.engine.selection == []

    def test_disabled_while_sequence_runs(self, session):
        session.engine.busy = True
        assert session.controls_disabled is True

    def test_disabled_after_round(self, session):
        pick(session, "APPLE", "PEAR", "PLUM", "KIWI")
        pick(session, "RED", "BLUE", "GREEN", "GOLD")
        pick(session, "IRON", "GOLD2", "TIN", "LEAD")
        pick(session, "SAW", "AXE", "HAMMER", "DRILL")
        assert session.controls_disabled is True

    def test_shuffle_and_deselect(self, session):
        session.select("APPLE")
        session.shuffle()
        assert [w.text for w in session.engine.selection] == ["APPLE"]
        session.deselect_all()
        assert session.engine.selection == []

    def test_submit_needs_four(self, session):
        session.select("APPLE")
        assert session.submit() is None


class TestSubmit:
    """Test cases for submission feedback."""

    def test_correct_has_no_message(self, session):
        feedback = pick(session, "APPLE", "PEAR", "PLUM", "KIWI")
        assert feedback.result == "correct"
        assert feedback.message is None

    def test_incorrect_has_no_message(self, session):
        feedback = pick(session, "APPLE", "PEAR", "RED", "BLUE")
        assert feedback.result == "incorrect"
        assert feedback.message is None

    def test_one_away_message(self, session):
        feedback = pick(session, "APPLE", "PEAR", "PLUM", "RED")
        assert feedback.result == "one_away"
        assert feedback.message == "One away..."

    def test_same_message(self, session):
        pick(session, "APPLE", "PEAR", "RED", "BLUE")
        feedback = pick(session, "APPLE", "PEAR", "RED", "BLUE")
        assert feedback.result == "same"
        assert feedback.message == "You've already guessed that!"

    def test_perfect_win(self, session, scheduler):
        pick(session, "APPLE", "PEAR", "PLUM", "KIWI")
        pick(session, "RED", "BLUE", "GREEN", "GOLD")
        pick(session, "IRON", "GOLD2", "TIN", "LEAD")
        feedback = pick(session, "SAW", "AXE", "HAMMER", "DRILL")

        assert feedback.result == "win"
        assert feedback.message == "Perfect!"
        assert session.engine.win_confirmed is True
        assert session.is_finished is True
        assert scheduler.delays == [1.0]

    def test_win_message_tracks_mistakes(self, session):
        pick(session, "APPLE", "PEAR", "PLUM", "RED")
        pick(session, "APPLE", "PEAR", "PLUM", "KIWI")
        pick(session, "RED", "BLUE", "GREEN", "GOLD")
        pick(session, "IRON", "GOLD2", "TIN", "LEAD")
        feedback = pick(session, "SAW", "AXE", "HAMMER", "DRILL")
        assert feedback.message == "Great!"

    def test_loss_runs_reveal(self, session):
        pick(session, "APPLE", "PEAR", "RED", "BLUE")
        pick(session, "APPLE", "PEAR", "IRON", "TIN")
        pick(session, "APPLE", "PEAR", "SAW", "AXE")

        events = []
        session.deselect_all()
        for word in ["RED", "BLUE", "IRON", "TIN"]:
            session.select(word)
        feedback = session.submit(
            notify=lambda f: events.append(("feedback", f.result)),
            on_step=lambda s: events.append((s.kind, s.category.name if s.category else None)),
        )

        assert feedback.result == "loss"
        assert feedback.message == "Better luck next time!"
        assert events == [
            ("feedback", "loss"),
            ("reveal", "Fruit"),
            ("reveal", "Colors"),
            ("reveal", "Metals"),
            ("reveal", "Tools"),
            ("confirm_loss", None),
        ]
        assert session.engine.board == []
        assert session.is_finished is True
        assert session.submitting is False


class TestSummary:
    """Test cases for the end-of-round summary."""

    def test_won_summary(self, session):
        pick(session, "APPLE", "PEAR", "PLUM", "RED")
        pick(session, "APPLE", "PEAR", "PLUM", "KIWI")
        pick(session, "RED", "BLUE", "GREEN", "GOLD")
        pick(session, "IRON", "GOLD2", "TIN", "LEAD")
        pick(session, "SAW", "AXE", "HAMMER", "DRILL")

        summary = session.summary()
        assert summary.date == "2025-01-06"
        assert summary.outcome == "won"
        assert summary.mistakes_made == 1
        assert summary.message == "Great!"
        assert len(summary.guesses) == 5
        assert summary.cleared == [FRUIT, COLOR, METAL, TOOL]

        rows = summary.grid.split("\n")
        assert len(rows) == 5
        assert sorted(rows[0]) == sorted("🟨🟨🟨🟩")
        assert rows[1] == "🟨🟨🟨🟨"
        assert rows[4] == "🟪🟪🟪🟪"

    def test_lost_summary(self, session):
        pick(session, "APPLE", "PEAR", "RED", "BLUE")
        pick(session, "APPLE", "PEAR", "IRON", "TIN")
        pick(session, "APPLE", "PEAR", "SAW", "AXE")
        pick(session, "RED", "BLUE", "IRON", "TIN")

        summary = session.summary()
        assert summary.outcome == "lost"
        assert summary.mistakes_made == 4
        assert summary.message == "Better luck next time!"
        assert len(summary.cleared) == 4

    def test_summary_in_progress(self, session):
        summary = session.summary()
        assert summary.outcome == "in_progress"
        assert summary.message is None
        assert summary.grid == ""

    def test_get_state(self, session):
        state = session.get_state()
        assert state["date"] == "2025-01-06"
        assert state["controls_disabled"] is False
        assert state["round"]["words_remaining"] == 16
        assert state["round"]["mistakes_remaining"] == 4
