"""Flush and straight draw detection with an outs count."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from poker_advisor.strategy.board_analysis import straight_values
from poker_advisor.utils.card import Card

FLUSH_DRAW_OUTS = 9
OPEN_ENDED_OUTS = 8
GUTSHOT_OUTS = 4

_ACE_HIGH = 14
_ACE_LOW = 1


@dataclass(frozen=True)
class DrawInfo:
    """Draws the player is holding and how many outs they give."""

    flush_draw: bool = False
    open_ended: bool = False
    gutshot: bool = False
    outs: int = 0
    description: str = "no draws"

    @property
    def has_draw(self) -> bool:
        return self.flush_draw or self.open_ended or self.gutshot

    @property
    def is_strong(self) -> bool:
        """Eight or more outs: an open-ender, a flush draw or better."""
        return self.outs >= OPEN_ENDED_OUTS


NO_DRAWS = DrawInfo()


def detect_draws(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> DrawInfo:
    """Detect flush and straight draws across hole + community cards.

    Outs are summed across draws, so a card completing both a flush and a
    straight is counted twice. The recommendation thresholds are tuned
    against this count.
    """
    all_cards = [*hole_cards, *community_cards]

    suit_counts = Counter(c.suit for c in all_cards)
    flush_draw = any(count == 4 for count in suit_counts.values())

    open_ended, gutshot = _straight_draws(straight_values(all_cards))

    outs = 0
    draws: list[str] = []
    if flush_draw:
        outs += FLUSH_DRAW_OUTS
        draws.append("flush draw")
    if open_ended:
        outs += OPEN_ENDED_OUTS
        draws.append("open-ended straight draw")
    elif gutshot:
        outs += GUTSHOT_OUTS
        draws.append("gutshot straight draw")

    return DrawInfo(
        flush_draw=flush_draw,
        open_ended=open_ended,
        gutshot=gutshot,
        outs=outs,
        description=" + ".join(draws) if draws else NO_DRAWS.description,
    )


def _straight_draws(values: list[int]) -> tuple[bool, bool]:
    """Return (open_ended, gutshot) for sorted distinct rank values.

    Four in a row is open-ended unless it touches the Ace at either end,
    in which case only one card completes it. Four values spanning five
    ranks with a single hole inside is a gutshot.
    """
    open_ended = False
    gutshot = False

    for i in range(len(values) - 3):
        low, high = values[i], values[i + 3]
        if high - low == 3:
            if low > _ACE_LOW and high < _ACE_HIGH:
                open_ended = True
            else:
                gutshot = True

    if open_ended:
        return True, False

    for i in range(len(values) - 3):
        window = values[i:i + 4]
        if window[3] - window[0] == 4:
            gaps = sum(1 for a, b in zip(window, window[1:]) if b - a == 2)
            if gaps == 1:
                gutshot = True

    return False, gutshot
