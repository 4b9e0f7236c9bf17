"""Board texture analysis and hole-card/board relationships.

Everything here looks at community cards alone, or at how the hole cards
connect with them: flush and straight potential, pairing, the ranks that
would complete a straight, kicker strength and overcards.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import RANK_VALUES, VALUE_RANKS, Rank, Suit

_ACE_HIGH = 14
_ACE_LOW = 1
_LOW_STRAIGHT_VALUES = frozenset({2, 3, 4, 5})


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoardTexture:
    """Structural snapshot of the community cards."""

    wet: bool = False  # Flush or straight draws possible
    four_flush: bool = False  # 4+ cards of one suit
    three_flush: bool = False  # Exactly 3 cards of one suit
    four_straight: bool = False  # 4 consecutive ranks
    three_straight: bool = False  # 3 consecutive ranks
    flush_suit: Suit | None = None  # Suit with 3+ cards
    missing_straight_cards: tuple[Rank, ...] = field(default_factory=tuple)
    is_rainbow: bool = True  # Every card a different suit
    is_monotone: bool = False  # 3+ cards, all one suit
    high_card: Rank = Rank.TWO
    is_paired: bool = False


class KickerStrength(StrEnum):
    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"


@dataclass(frozen=True)
class KickerInfo:
    strength: KickerStrength
    kicker: Rank


class PairPosition(StrEnum):
    TOP = "top"
    SECOND = "second"
    MIDDLE = "middle"
    BOTTOM = "bottom"


# ---------------------------------------------------------------------------
# Rank-value helpers
# ---------------------------------------------------------------------------


def straight_values(cards: Sequence[Card]) -> list[int]:
    """Sorted distinct rank values, with the Ace also counted as 1.

    The low-Ace alias is only added when a 2-5 is present, since that is
    the only way the Ace can play low.
    """
    values = {c.value for c in cards}
    if _ACE_HIGH in values and values & _LOW_STRAIGHT_VALUES:
        values.add(_ACE_LOW)
    return sorted(values)


def longest_run(values: Sequence[int]) -> int:
    """Length of the longest run of consecutive values in a sorted list."""
    if not values:
        return 0
    best = current = 1
    for prev, cur in zip(values, values[1:]):
        current = current + 1 if cur - prev == 1 else 1
        best = max(best, current)
    return best


def find_missing_straight_cards(community_cards: Sequence[Card]) -> tuple[Rank, ...]:
    """Ranks that would complete a straight with four board cards.

    Scans every 5-value window from the wheel (A-5) to broadway (T-A).
    A window holding exactly four board values contributes its fifth
    value. The Ace fills both the low and the high end.
    """
    present = {c.value for c in community_cards}
    if _ACE_HIGH in present:
        present.add(_ACE_LOW)

    missing: list[Rank] = []
    for start in range(1, 11):
        window = range(start, start + 5)
        absent = [v for v in window if v not in present]
        if len(absent) != 1:
            continue
        rank = VALUE_RANKS[absent[0]]
        if rank not in missing:
            missing.append(rank)
    return tuple(missing)


# ---------------------------------------------------------------------------
# Board texture
# ---------------------------------------------------------------------------


def analyze_board_texture(community_cards: Sequence[Card]) -> BoardTexture:
    """Analyze the texture of the community cards.

    An empty board returns the neutral pre-flop texture.
    """
    if not community_cards:
        return BoardTexture()

    suit_counts = Counter(c.suit for c in community_cards)
    max_suit_count = max(suit_counts.values())
    flush_suit = next(
        (suit for suit, count in suit_counts.items() if count >= 3), None
    )

    run = longest_run(straight_values(community_cards))
    rank_counts = Counter(c.rank for c in community_cards)
    three_flush = max_suit_count == 3
    four_flush = max_suit_count >= 4

    return BoardTexture(
        wet=three_flush or four_flush or run >= 3,
        four_flush=four_flush,
        three_flush=three_flush,
        four_straight=run >= 4,
        three_straight=run >= 3,
        flush_suit=flush_suit,
        missing_straight_cards=find_missing_straight_cards(community_cards),
        is_rainbow=len(suit_counts) == len(community_cards),
        is_monotone=len(community_cards) >= 3 and len(suit_counts) == 1,
        high_card=max(community_cards, key=lambda c: c.value).rank,
        is_paired=any(count >= 2 for count in rank_counts.values()),
    )


# ---------------------------------------------------------------------------
# Pair, kicker and overcards
# ---------------------------------------------------------------------------


def get_pair_rank(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> Rank | None:
    """Rank of the pair the hole cards make, or None if they make none.

    A pocket pair wins over a hole card pairing the board.
    """
    if hole_cards[0].rank == hole_cards[1].rank:
        return hole_cards[0].rank

    board_ranks = {c.rank for c in community_cards}
    for card in hole_cards:
        if card.rank in board_ranks:
            return card.rank
    return None


def get_kicker_strength(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
) -> KickerInfo:
    """Classify the kicker: J+ strong, 8-T medium, below weak.

    The kicker is the hole card that does not pair the board. If both or
    neither pair it, the higher hole card is used.
    """
    board_ranks = {c.rank for c in community_cards}
    first, second = hole_cards[0], hole_cards[1]

    kicker: Rank | None = None
    if first.rank in board_ranks and second.rank not in board_ranks:
        kicker = second.rank
    elif second.rank in board_ranks and first.rank not in board_ranks:
        kicker = first.rank
    if kicker is None:
        kicker = max(first, second, key=lambda c: c.value).rank

    value = RANK_VALUES[kicker]
    if value >= 11:
        strength = KickerStrength.STRONG
    elif value >= 8:
        strength = KickerStrength.MEDIUM
    else:
        strength = KickerStrength.WEAK
    return KickerInfo(strength=strength, kicker=kicker)


def count_overcards(community_cards: Sequence[Card], pair_rank: Rank | None) -> int:
    """Number of board cards ranked above the pair."""
    if pair_rank is None:
        return 0
    pair_value = RANK_VALUES[pair_rank]
    return sum(1 for c in community_cards if c.value > pair_value)


def pair_position(pair_rank: Rank, community_cards: Sequence[Card]) -> PairPosition:
    """Where a pair sits against the distinct board ranks.

    Top means nothing on the board outranks it. A pair level with or below
    the lowest board rank is bottom pair.
    """
    pair_value = RANK_VALUES[pair_rank]
    distinct = sorted({c.value for c in community_cards}, reverse=True)
    above = sum(1 for v in distinct if v > pair_value)

    if above == 0:
        return PairPosition.TOP
    if above >= len(distinct) - 1:
        return PairPosition.BOTTOM
    if above == 1:
        return PairPosition.SECOND
    return PairPosition.MIDDLE


def is_top_pair(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> bool:
    """Whether a hole card pairs the highest board card."""
    if not community_cards:
        return False
    highest = max(community_cards, key=lambda c: c.value).rank
    return any(c.rank == highest for c in hole_cards)


def is_overpair(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> bool:
    """Pocket pair higher than every board card."""
    if hole_cards[0].rank != hole_cards[1].rank:
        return False
    pocket_value = hole_cards[0].value
    return all(c.value < pocket_value for c in community_cards)


# ---------------------------------------------------------------------------
# Completing cards
# ---------------------------------------------------------------------------


def user_has_flush_card(hole_cards: Sequence[Card], flush_suit: Suit | None) -> bool:
    if flush_suit is None:
        return False
    return any(c.suit == flush_suit for c in hole_cards)


def user_completes_straight(
    hole_cards: Sequence[Card],
    missing_straight_cards: Sequence[Rank],
) -> bool:
    return any(c.rank in missing_straight_cards for c in hole_cards)
