"""Interactive real-time poker coaching tool.

CLI-based personal poker coach: street-by-street recommendations while a
hand is played, and a review mode that grades what you actually did.

Usage:
    python -m poker_advisor.interface.poker_coach [--verbose]

Example session:
    ==================================================
      POKER COACH
    ==================================================
      1. Live coaching
      2. Hand review
      3. Quit
    > 1

    Your hand (e.g. AhKs): KhKd
    Position (early/middle/late/blinds) [middle]: late
    Board cards (e.g. Jh 8d 3c, blank for pre-flop): 2c 5d 9s

    ==================================================
      RECOMMENDATION: RAISE  (confidence: HIGH)
    ==================================================
      Hand:       Kh Kd (KK)
      Position:   Late - Last to act - wider range
      Stage:      flop
      Board:      2c 5d 9s
      Strength:   Pair of Kings (28/100, weak)

      -- Why this play? --
      Pocket Kings beat every card on the board. Raise to protect your overpair.
    ==================================================
"""

from __future__ import annotations

import argparse
import logging
import os

from poker_advisor.advisor.engine import AdvisorEngine, Analysis
from poker_advisor.advisor.narrative import create_advisor
from poker_advisor.core.game_state import HandState
from poker_advisor.core.hand_evaluator import get_strength_category
from poker_advisor.strategy.preflop_ranges import get_hand_notation
from poker_advisor.strategy.recommendation_engine import Recommendation
from poker_advisor.utils.card import Card, format_cards, parse_cards
from poker_advisor.utils.constants import ActionType, Confidence, Position

LOG_LEVEL_ENV = "POKER_ADVISOR_LOG_LEVEL"

logger = logging.getLogger("poker_advisor.interface")


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _parse_position(s: str) -> Position:
    """Parse position string, case-insensitive."""
    return Position(s.strip().lower())


def _parse_action(s: str) -> ActionType:
    """Parse an action like 'raise', 'all-in' or 'allin'."""
    normalized = s.strip().upper().replace("-", "_").replace(" ", "_")
    if normalized == "ALLIN":
        normalized = "ALL_IN"
    return ActionType(normalized)


def _hand_display(cards: list[Card]) -> str:
    """Display cards with notation: 'Ah Ks (AKo)'."""
    card_str = format_cards(cards)
    if len(cards) == 2:
        return f"{card_str} ({get_hand_notation(cards[0], cards[1])})"
    return card_str


def _prompt(msg: str, default: str = "") -> str:
    """Print a prompt and read user input."""
    suffix = f" [{default}]" if default else ""
    try:
        val = input(f"  {msg}{suffix}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return default
    return val if val else default


# ---------------------------------------------------------------------------
# Build hand state from user input
# ---------------------------------------------------------------------------


def _build_hand() -> HandState | None:
    """Interactively collect the hand. Returns None on abort."""
    print()

    hand_str = _prompt("Your hand (e.g. AhKs)")
    if not hand_str:
        print("    No hand provided, aborting.")
        return None

    state = HandState()
    try:
        state.set_hole_cards(parse_cards(hand_str))
    except ValueError as e:
        print(f"    {e}")
        return None

    try:
        state.position = _parse_position(
            _prompt("Position (early/middle/late/blinds)", "middle")
        )
    except ValueError:
        print("    Invalid position.")
        return None

    board_str = _prompt("Board cards (e.g. Jh 8d 3c, blank for pre-flop)")
    if board_str and not _add_board(state, board_str):
        return None

    return state


def _add_board(state: HandState, board_str: str) -> bool:
    """Add parsed board cards to the state, reporting problems."""
    try:
        cards = parse_cards(board_str)
    except ValueError as e:
        print(f"    {e}")
        return False

    added = state.add_community_cards(cards)
    skipped = len(cards) - len(added)
    if skipped:
        print(f"    Skipped {skipped} duplicate or extra card(s).")
    return True


# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


_DIVIDER = "\n" + "=" * 50


def _print_recommendation(analysis: Analysis, state: HandState) -> None:
    """Print a formatted recommendation."""
    rec = analysis.recommendation
    evaluation = analysis.evaluation

    print(_DIVIDER)
    print(f"  RECOMMENDATION: {rec.action.value}  (confidence: {rec.confidence.value})")
    print("=" * 50)
    print(f"  Hand:       {_hand_display(state.hole_cards)}")
    print(f"  Position:   {state.position.label} - {state.position.description}")
    print(f"  Stage:      {analysis.stage.value}")
    if state.community_cards:
        print(f"  Board:      {format_cards(state.community_cards)}")
    if evaluation.is_known:
        print(
            f"  Strength:   {evaluation.description} "
            f"({evaluation.strength}/100, {get_strength_category(evaluation)})"
        )
    if rec.hand_description and rec.hand_description != evaluation.description:
        print(f"  Holding:    {rec.hand_description}")

    if rec.board_warning or rec.draw_info or rec.outs_odds:
        print()
        print("  -- Board --")
        if rec.board_warning:
            print(f"  Warning:    {rec.board_warning}")
        if rec.draw_info:
            print(f"  Draws:      {rec.draw_info}")
        if rec.outs_odds:
            print(f"  Odds:       {rec.outs_odds}")

    print()
    print("  -- Why this play? --")
    print(f"  {rec.reasoning}")

    if rec.narrative_advice:
        print()
        print("  -- Coach says --")
        print(f"  {rec.narrative_advice}")

    print("=" * 50)
    print()


# ---------------------------------------------------------------------------
# Mode 1: Live coaching
# ---------------------------------------------------------------------------


def _live_coaching(engine: AdvisorEngine) -> None:
    """Coach a hand street by street until the river or a blank board."""
    state = _build_hand()
    if state is None:
        return

    while True:
        _print_recommendation(engine.analyze_state(state), state)
        if len(state.community_cards) >= 5:
            break
        board_str = _prompt("Next board card(s), blank to finish")
        if not board_str:
            break
        _add_board(state, board_str)


# ---------------------------------------------------------------------------
# Mode 2: Hand review
# ---------------------------------------------------------------------------

_ACTION_RANK = {
    ActionType.FOLD: 0,
    ActionType.CHECK: 1,
    ActionType.CALL: 2,
    ActionType.RAISE: 3,
    ActionType.ALL_IN: 4,
}


def _grade_play(user_action: ActionType, optimal: Recommendation) -> tuple[str, str]:
    """Grade the user's play vs the recommendation. Returns (grade, explanation)."""
    opt_rank = _ACTION_RANK[optimal.action]
    usr_rank = _ACTION_RANK[user_action]
    diff = abs(opt_rank - usr_rank)

    if diff == 0:
        return "Optimal", "Correct play."

    direction = "passive" if usr_rank < opt_rank else "aggressive"

    if diff == 1:
        # A close verdict leaves room for a neighbouring action
        if optimal.confidence == Confidence.LOW:
            return "Acceptable", f"Reasonable, slightly {direction}. {optimal.reasoning}"
        return "Mistake", f"Too {direction}. {optimal.reasoning}"

    return "Blunder", f"Way too {direction}. {optimal.reasoning}"


def _hand_review(engine: AdvisorEngine) -> None:
    """Hand review mode: compare the user's play with the recommendation."""
    state = _build_hand()
    if state is None:
        return

    optimal = engine.analyze_state(state).recommendation

    print()
    try:
        user_action = _parse_action(
            _prompt("What did you do? (fold/check/call/raise/allin)", "call")
        )
    except ValueError:
        print("    Unknown action.")
        return

    grade, explanation = _grade_play(user_action, optimal)

    print(_DIVIDER)
    print("  HAND REVIEW")
    print("=" * 50)
    print(f"  Hand:       {_hand_display(state.hole_cards)}")
    print(f"  Position:   {state.position.label}")
    print(f"  Stage:      {state.stage.value}")
    if state.community_cards:
        print(f"  Board:      {format_cards(state.community_cards)}")
    print()
    print(f"  Your play:     {user_action.value}")
    print(f"  Optimal play:  {optimal.action.value} ({optimal.confidence.value})")

    grade_marks = {
        "Optimal": "[OK]",
        "Acceptable": "[~]",
        "Mistake": "[!]",
        "Blunder": "[!!]",
    }
    print()
    print(f"  Grade: {grade_marks.get(grade, '')} {grade}")
    print(f"  {explanation}")
    print("=" * 50)
    print()


# ---------------------------------------------------------------------------
# Main menu
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(argv: list[str] | None = None) -> None:
    """Main entry point for the poker coach."""
    parser = argparse.ArgumentParser(description="Texas Hold'em poker coach")
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help=f"Debug logging (default level from {LOG_LEVEL_ENV})",
    )
    parser.add_argument(
        "--no-narrative", action="store_true",
        help="Skip the language-model coaching sentence",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    advisor = None if args.no_narrative else create_advisor()
    engine = AdvisorEngine(advisor=advisor)
    logger.debug("Narrative advice %s", "on" if engine.has_narrative else "off")

    print()
    print("=" * 50)
    print("  POKER COACH")
    print("=" * 50)

    while True:
        print()
        print("  1. Live coaching")
        print("  2. Hand review")
        print("  3. Quit")
        choice = _prompt(">", "3")

        if choice == "1":
            _live_coaching(engine)
        elif choice == "2":
            _hand_review(engine)
        elif choice == "3":
            print("  Good luck at the tables!")
            break


if __name__ == "__main__":
    run()
