"""
Main entry point for playing kiwi-connect in a terminal.

Usage:
    python -m src.main
    python -m src.main config.yaml --date 2025-01-06
    python -m src.main --file puzzles.yaml --seed 42 --verbose
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .config import GameConfig, ProviderConfig, load_config, load_env
from .engine import ManualScheduler, SequenceStep
from .errors import ProviderConfigError
from .puzzles import create_provider
from .session import GameSession, SubmitFeedback
from .utils.board_renderer import LEVEL_SQUARES, render_board, render_cleared, render_mistakes


HELP = """Commands:
  <n> [<n> ...]   toggle words by board number (or type the word)
  s               shuffle
  d               deselect all
  enter / submit  submit the four selected words
  date YYYY-MM-DD switch puzzle date
  dates           list available dates
  q               quit"""


def parse_command(line: str) -> Tuple[str, List[str]]:
    """
    Split a line of input into a command and its arguments.

    Anything that is not a known command is treated as word selections.
    """
    text = line.strip()
    if not text or text.lower() == "submit":
        return "submit", []

    parts = text.split()
    head = parts[0].lower()
    if head in ("s", "shuffle"):
        return "shuffle", []
    if head in ("d", "deselect"):
        return "deselect", []
    if head in ("q", "quit", "exit"):
        return "quit", []
    if head in ("h", "help", "?"):
        return "help", []
    if head == "dates":
        return "dates", []
    if head == "date":
        return "date", parts[1:2]
    return "select", parts


def resolve_word(session: GameSession, token: str) -> Optional[str]:
    """Map a board number or a typed word to the word's text."""
    board = session.engine.board
    if token.isdigit():
        index = int(token) - 1
        if 0 <= index < len(board):
            return board[index].text
        return None
    for word in board:
        if word.text.casefold() == token.casefold():
            return word.text
    return None


def print_board(session: GameSession) -> None:
    engine = session.engine
    print()
    if session.date:
        today = f" (NZ today: {session.today})" if session.today else ""
        print(f"Puzzle date: {session.date}{today}")
    if engine.cleared_categories:
        print(render_cleared(engine.cleared_categories))
    if engine.board:
        print(render_board(engine.board))
    print(render_mistakes(engine.mistakes_remaining))


def print_step(step: SequenceStep) -> None:
    if step.kind == "reveal" and step.category:
        square = LEVEL_SQUARES.get(step.category.level, "")
        print(f"{square} {step.category.name.upper()}: {', '.join(step.category.items)}")


def print_feedback(feedback: SubmitFeedback) -> None:
    if feedback.message:
        print(feedback.message)
    elif feedback.result == "correct":
        print("Correct!")
    elif feedback.result == "incorrect":
        print("Incorrect.")


def print_summary(session: GameSession) -> None:
    summary = session.summary()
    print()
    print("=== Round Summary ===")
    print(f"Puzzle: {summary.date}")
    print(f"Result: {'Won' if summary.outcome == 'won' else 'Lost'} ({summary.message})")
    print(f"Mistakes: {summary.mistakes_made}")
    print(summary.grid)


def load(session: GameSession, date: Optional[str] = None) -> None:
    print("Loading puzzle…")
    if not session.load_puzzle(date):
        print(f"Could not load puzzle: {session.error}", file=sys.stderr)


def play(session: GameSession) -> None:
    """Interactive loop until the player quits."""
    print("Create four groups of four! Type 'help' for commands.")
    print_board(session)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        command, args = parse_command(line)

        if command == "quit":
            break
        if command == "help":
            print(HELP)
            continue
        if command == "dates":
            print(", ".join(session.available_dates) or "(none)")
            continue
        if command == "date":
            if not args:
                print("Usage: date YYYY-MM-DD")
                continue
            load(session, args[0])
            print_board(session)
            continue

        if session.controls_disabled:
            if session.is_finished:
                print_summary(session)
            print("No active round. Use 'date YYYY-MM-DD' to pick a puzzle or 'q' to quit.")
            continue

        if command == "shuffle":
            session.shuffle()
        elif command == "deselect":
            session.deselect_all()
        elif command == "select":
            for token in args:
                word = resolve_word(session, token)
                if word is None:
                    print(f"'{token}' is not on the board")
                    continue
                session.select(word)
        elif command == "submit":
            if len(session.engine.selection) != 4:
                print("Select four words first.")
                continue
            session.submit(notify=print_feedback, on_step=print_step)
            if session.is_finished:
                print_summary(session)
                continue

        print_board(session)


def build_config(args: argparse.Namespace) -> GameConfig:
    config = load_config(args.config)
    if args.sheet:
        config.provider = ProviderConfig(kind="sheets", sheet_id=args.sheet, tab=config.provider.tab)
    elif args.file:
        config.provider = ProviderConfig(kind="file", path=args.file)
    if args.seed is not None:
        config.seed = args.seed
    return config


def main():
    parser = argparse.ArgumentParser(
        description="Play kiwi-connect in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  max_mistakes: 4
  reveal_delay: 1.0
  timezone: Pacific/Auckland
  provider:
    kind: file
    path: puzzles.yaml
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--date",
        help="Puzzle date (YYYY-MM-DD, default: latest available)"
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--sheet",
        help="Google Sheet ID to read puzzles from (overrides GOOGLE_SHEETS_ID)"
    )
    source.add_argument(
        "--file", "-f",
        help="Read puzzles from a local CSV or YAML file instead of Google Sheets"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for board order"
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Skip the pauses between revealed categories"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print debug logging to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_env()

    try:
        config = build_config(args)
        provider = create_provider(config)
    except (FileNotFoundError, ValueError, ProviderConfigError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    scheduler = ManualScheduler() if args.no_delay else None
    session = GameSession.create(provider, config=config, scheduler=scheduler)

    load(session, args.date)

    try:
        play(session)
    except KeyboardInterrupt:
        print("\nGoodbye!")

    return 0


if __name__ == "__main__":
    sys.exit(main())
