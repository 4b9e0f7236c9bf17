"""Outs-to-equity conversion.

The table gives the chance of hitting one of ``outs`` cards with two cards
to come (flop) or one card to come (turn). Outside the table the rule of
4 and 2 applies.
"""

from __future__ import annotations

from dataclasses import dataclass

from poker_advisor.utils.constants import GameStage

# outs -> (flop %, turn %)
OUTS_ODDS: dict[int, tuple[int, int]] = {
    1: (4, 2),
    2: (8, 4),
    3: (13, 7),
    4: (17, 9),
    5: (20, 11),
    6: (24, 13),
    7: (28, 15),
    8: (31, 17),
    9: (35, 19),
    10: (38, 22),
    11: (42, 24),
    12: (45, 26),
    13: (48, 28),
    14: (51, 30),
    15: (54, 33),
}


@dataclass(frozen=True)
class OddsResult:
    win_probability: int  # 0-100
    outs: int
    odds_against: str  # e.g. "3:1"


def _is_flop(street: GameStage | str) -> bool:
    return GameStage(str(street).lower()) == GameStage.FLOP


def get_odds(outs: int, street: GameStage | str) -> int:
    """Rule of 4 and 2: outs x 4 from the flop, outs x 2 otherwise."""
    multiplier = 4 if _is_flop(street) else 2
    return min(max(0, outs) * multiplier, 100)


def get_accurate_odds(outs: int, street: GameStage | str) -> int:
    """Approximate win percentage for ``outs`` on the given street.

    River requests are answered with the turn figure.
    """
    entry = OUTS_ODDS.get(outs)
    if entry is None:
        return get_odds(outs, street)
    flop, turn = entry
    return flop if _is_flop(street) else turn


def odds_against(win_probability: float) -> str:
    """Express a percentage as odds against, e.g. 20 -> '4:1'."""
    if win_probability <= 0:
        return "no chance"
    if win_probability >= 100:
        return "0:1"
    ratio = (100 - win_probability) / win_probability
    text = f"{ratio:.1f}".rstrip("0").rstrip(".")
    return f"{text}:1"


def outs_to_odds(outs: int, street: GameStage | str) -> OddsResult:
    probability = get_accurate_odds(outs, street)
    return OddsResult(
        win_probability=probability,
        outs=outs,
        odds_against=odds_against(probability),
    )
