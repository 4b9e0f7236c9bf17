"""Hand-strength evaluation.

Turns a hand-ranking primitive's verdict into a HandEvaluation: a fixed
1-10 category rank plus a 0-100 strength score. Strength comes from static
per-category bands, interpolated with the primitive's ordinal, so the bands
never overlap across categories.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from poker_advisor.core.hand_solver import HandRankingPrimitive, HandSolver
from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import HAND_RANKING_NAMES, HandRanking

# Category name -> fixed rank (1 = High Card ... 10 = Royal Flush)
HAND_RANKS: dict[str, int] = {
    name: int(ranking) for ranking, name in HAND_RANKING_NAMES.items()
}

# Contiguous, non-overlapping [min, max] strength band per hand rank
STRENGTH_BANDS: dict[int, tuple[int, int]] = {
    1: (5, 20),     # High Card
    2: (25, 40),    # Pair
    3: (45, 60),    # Two Pair
    4: (60, 72),    # Three of a Kind
    5: (72, 80),    # Straight
    6: (80, 85),    # Flush
    7: (85, 92),    # Full House
    8: (92, 96),    # Four of a Kind
    9: (96, 99),    # Straight Flush
    10: (100, 100), # Royal Flush
}

_ORDINAL_SCALE = 10

_DEFAULT_SOLVER = HandSolver()


@dataclass(frozen=True)
class HandEvaluation:
    """Hand category and strength for one set of cards."""

    hand_name: str
    hand_rank: int  # 1-10, 0 when the hand is unknown
    strength: int  # 0-100
    description: str
    best_cards: tuple[Card, ...] = ()

    @property
    def is_known(self) -> bool:
        return self.hand_rank > 0


UNKNOWN_EVALUATION = HandEvaluation(
    hand_name="Unknown",
    hand_rank=0,
    strength=0,
    description="Need 2 hole cards",
)


def band_strength(hand_rank: int, ordinal: int) -> int:
    """Interpolate a strength score within the band for ``hand_rank``.

    The ordinal is clamped to [0, 10]. Unknown ranks use a [0, 10] band.
    Halves round up.
    """
    low, high = STRENGTH_BANDS.get(hand_rank, (0, 10))
    clamped = min(_ORDINAL_SCALE, max(0, ordinal))
    return int(low + (high - low) * clamped / _ORDINAL_SCALE + 0.5)


def evaluate_hand(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    solver: HandRankingPrimitive | None = None,
) -> HandEvaluation:
    """Evaluate hole + community cards.

    Args:
        hole_cards: The player's hole cards. With fewer than two the
            sentinel UNKNOWN_EVALUATION is returned.
        community_cards: 0-5 community cards.
        solver: Hand-ranking primitive; defaults to the built-in HandSolver.

    Returns:
        HandEvaluation with rank, strength, description and best cards.
    """
    if not hole_cards or len(hole_cards) < 2:
        return UNKNOWN_EVALUATION

    solved = (solver or _DEFAULT_SOLVER).solve([*hole_cards, *community_cards])

    hand_rank = HAND_RANKS.get(solved.name, int(HandRanking.HIGH_CARD))
    return HandEvaluation(
        hand_name=solved.name,
        hand_rank=hand_rank,
        strength=band_strength(hand_rank, solved.rank),
        description=solved.description or solved.name,
        best_cards=tuple(solved.best_cards[:5]),
    )


def get_strength_category(evaluation: HandEvaluation) -> str:
    """Coarse label for display: weak, medium, strong or monster."""
    if evaluation.strength >= 70:
        return "monster"
    if evaluation.strength >= 50:
        return "strong"
    if evaluation.strength >= 30:
        return "medium"
    return "weak"
