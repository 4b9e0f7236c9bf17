"""Pre-flop starting-hand tiers for Texas Hold'em.

Starting hands are bucketed into nine Sklansky-style tiers (1 = premium,
9 = marginal); anything outside them is tier 10, unplayable. Table
position changes the recommended action, never the tier.

Tiers are written in range notation:
  - "QQ", "AKs", "T9o"  one starting hand
  - "44-22", "K8s-K2s"  a span sharing its top card
  - "TT+", "ATs+"       up to the strongest hand of that kind
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum

from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import (
    RANK_NAMES,
    RANK_PLURALS,
    RANK_VALUES,
    VALUE_RANKS,
    ActionType,
    Confidence,
    Position,
    Rank,
)

UNPLAYABLE_TIER = 10

# C(52, 2)
_TOTAL_COMBOS = 1326


class HandType(StrEnum):
    PAIR = "pair"
    SUITED = "suited"
    OFFSUIT = "offsuit"


_SUFFIXES = {HandType.PAIR: "", HandType.SUITED: "s", HandType.OFFSUIT: "o"}
_TYPE_BY_SUFFIX = {"s": HandType.SUITED, "o": HandType.OFFSUIT}
_COMBOS = {HandType.PAIR: 6, HandType.SUITED: 4, HandType.OFFSUIT: 12}


def _high_low(a: Rank, b: Rank) -> tuple[Rank, Rank]:
    return (a, b) if RANK_VALUES[a] >= RANK_VALUES[b] else (b, a)


@dataclass(frozen=True)
class HandNotation:
    """A starting-hand class such as AKs, JJ or T9o, higher rank first."""

    high: Rank
    low: Rank
    hand_type: HandType

    @classmethod
    def parse(cls, text: str) -> HandNotation:
        """Parse 'AKs', 'KAs', 'JJ' or 'T9o'.

        Raises:
            ValueError: For unknown ranks, a pair with a suffix, or a
                non-pair without an 's'/'o' suffix.
        """
        text = text.strip()
        if len(text) not in (2, 3):
            raise ValueError(f"Invalid hand notation: '{text}'")
        try:
            high, low = _high_low(Rank(text[0].upper()), Rank(text[1].upper()))
        except ValueError:
            raise ValueError(f"Invalid hand notation: '{text}'") from None

        suffix = text[2:].lower()
        if high == low:
            if suffix:
                raise ValueError(f"Pairs take no suffix: '{text}'")
            return cls(high, low, HandType.PAIR)
        if suffix not in _TYPE_BY_SUFFIX:
            raise ValueError(f"'{text}' needs an 's' or 'o' suffix")
        return cls(high, low, _TYPE_BY_SUFFIX[suffix])

    @classmethod
    def from_cards(cls, card1: Card, card2: Card) -> HandNotation:
        """Canonical notation for two hole cards, in either order."""
        high, low = _high_low(card1.rank, card2.rank)
        if high == low:
            return cls(high, low, HandType.PAIR)
        if card1.suit == card2.suit:
            return cls(high, low, HandType.SUITED)
        return cls(high, low, HandType.OFFSUIT)

    @property
    def combo_count(self) -> int:
        """Distinct two-card deals in this class."""
        return _COMBOS[self.hand_type]

    @property
    def description(self) -> str:
        """Spoken form: 'Pocket Aces', 'Ace-King suited'."""
        if self.hand_type == HandType.PAIR:
            return f"Pocket {RANK_PLURALS[self.high]}"
        return f"{RANK_NAMES[self.high]}-{RANK_NAMES[self.low]} {self.hand_type}"

    def __str__(self) -> str:
        return f"{self.high.value}{self.low.value}{_SUFFIXES[self.hand_type]}"


def _span(first: HandNotation, last: HandNotation) -> list[HandNotation]:
    """Hands from ``first`` to ``last`` inclusive, strongest first."""
    if first.hand_type == HandType.PAIR and last.hand_type == HandType.PAIR:
        top, bottom = _high_low(first.high, last.high)
        return [
            HandNotation(VALUE_RANKS[v], VALUE_RANKS[v], HandType.PAIR)
            for v in range(RANK_VALUES[top], RANK_VALUES[bottom] - 1, -1)
        ]

    if first.high != last.high:
        raise ValueError(f"Range '{first}-{last}' must share the high card")
    if first.hand_type != last.hand_type:
        raise ValueError(f"Range '{first}-{last}' mixes suited and offsuit hands")

    top, bottom = _high_low(first.low, last.low)
    return [
        HandNotation(first.high, VALUE_RANKS[v], first.hand_type)
        for v in range(RANK_VALUES[top], RANK_VALUES[bottom] - 1, -1)
    ]


def expand_notation(token: str) -> list[HandNotation]:
    """Hands named by one range token, strongest first."""
    token = token.strip()

    if token.endswith("+"):
        base = HandNotation.parse(token[:-1])
        if base.hand_type == HandType.PAIR:
            best = HandNotation(Rank.ACE, Rank.ACE, HandType.PAIR)
        else:
            below_high = VALUE_RANKS[RANK_VALUES[base.high] - 1]
            best = HandNotation(base.high, below_high, base.hand_type)
        return _span(best, base)

    first, sep, last = token.partition("-")
    if sep:
        return _span(HandNotation.parse(first), HandNotation.parse(last))
    return [HandNotation.parse(token)]


def parse_range(text: str) -> frozenset[HandNotation]:
    """Set of hands named by comma-separated range tokens."""
    return frozenset(
        hand
        for token in text.split(",")
        if token.strip()
        for hand in expand_notation(token)
    )


def range_percentage(hands: Iterable[HandNotation]) -> float:
    """Share of all 1326 starting deals covered by ``hands``."""
    return sum(h.combo_count for h in hands) / _TOTAL_COMBOS * 100


# ---------------------------------------------------------------------------
# Sklansky tiers
# ---------------------------------------------------------------------------

SKLANSKY_TIERS: dict[int, frozenset[HandNotation]] = {
    tier: parse_range(text)
    for tier, text in enumerate(
        (
            "AA,KK,QQ,JJ,AKs",
            "TT,AQs,AJs,KQs,AKo",
            "99,ATs,KJs,QJs,JTs,AQo",
            "88,KTs,QTs,J9s,T9s,98s,AJo,KQo",
            "77,A9s-A2s,Q9s,T8s,97s,87s,76s,KJo,QJo,JTo",
            "66,55,K9s,J8s,86s,75s,54s,ATo,KTo,QTo",
            "44-22,K8s-K2s,Q8s,T7s,64s,53s,43s,J9o,T9o,98o",
            "J7s,96s,85s,74s,42s,32s,A9o,K9o,Q9o,J8o,T8o,87o,76o,65o",
            "Q7s-Q2s,J6s-J2s,T6s,95s,84s,73s,63s,52s",
        ),
        start=1,
    )
}

_TIER_BY_HAND: dict[HandNotation, int] = {
    hand: tier for tier, hands in SKLANSKY_TIERS.items() for hand in hands
}


def get_hand_notation(card1: Card, card2: Card) -> str:
    """Notation string for two hole cards: 'AA', 'AKs', 'T9o'."""
    return str(HandNotation.from_cards(card1, card2))


def get_sklansky_tier(hole_cards: Sequence[Card]) -> int:
    """Tier 1-9 for a starting hand, or 10 when it is unplayable."""
    hand = HandNotation.from_cards(hole_cards[0], hole_cards[1])
    return _TIER_BY_HAND.get(hand, UNPLAYABLE_TIER)


def tier_percentage(tier: int) -> float:
    """Share of all starting hands at this tier or better."""
    return range_percentage(
        hand for t, hands in SKLANSKY_TIERS.items() if t <= tier for hand in hands
    )


def tier_confidence(tier: int) -> Confidence:
    if tier <= 3:
        return Confidence.HIGH
    if tier <= 6:
        return Confidence.MEDIUM
    return Confidence.LOW


# ---------------------------------------------------------------------------
# Pre-flop recommendation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PreflopRecommendation:
    action: ActionType
    reasoning: str
    tier: int
    hand_description: str

    @property
    def confidence(self) -> Confidence:
        return tier_confidence(self.tier)


def _preflop_action(tier: int, position: Position) -> tuple[ActionType, str]:
    """Pick the action for a tier from a position, with a short rationale."""
    label = position.label

    if tier <= 2:
        return (
            ActionType.RAISE,
            f"a premium hand. Raise from {label} position to build the pot "
            f"and protect your hand.",
        )

    if tier <= 4:
        if position == Position.EARLY and tier == 4:
            return (
                ActionType.CALL,
                f"a strong hand, but from {label} position just call and see "
                f"how the table acts behind you.",
            )
        return (
            ActionType.RAISE,
            f"a strong hand. Raise from {label} position.",
        )

    if tier <= 6:
        if position == Position.EARLY:
            return (
                ActionType.FOLD,
                f"playable, but too loose for {label} position with the whole "
                f"table still to act. Fold.",
            )
        if position == Position.LATE:
            return (
                ActionType.RAISE,
                f"a playable hand that gains value in {label} position. Raise "
                f"to take the initiative.",
            )
        return (
            ActionType.CALL,
            f"a playable hand. Call from {label} position to see the flop, "
            f"but be cautious.",
        )

    if tier <= 8:
        if position == Position.LATE:
            return (
                ActionType.CALL,
                f"a marginal hand. From {label} position you can call if it's "
                f"cheap to see the flop.",
            )
        if position == Position.BLINDS:
            return (
                ActionType.CHECK,
                f"a marginal hand. In the {label} check if nobody has raised; "
                f"defend selectively.",
            )
        return (
            ActionType.FOLD,
            f"a marginal hand. Fold from {label} position.",
        )

    if position == Position.BLINDS:
        return (
            ActionType.CHECK,
            f"a weak hand. In the {label} check for free if nobody has "
            f"raised, otherwise fold.",
        )
    return (
        ActionType.FOLD,
        f"a weak hand. Fold from {label} position and wait for a better "
        f"opportunity.",
    )


def get_preflop_recommendation(
    hole_cards: Sequence[Card],
    position: Position = Position.MIDDLE,
) -> PreflopRecommendation:
    """Recommend a pre-flop action from the hand's tier and table position.

    Thresholds:
      - tier 1-2: raise everywhere
      - tier 3-4: raise, except tier 4 from early position calls
      - tier 5-6: call; early folds, late raises
      - tier 7-8: fold; late calls, blinds check
      - tier 9-10: fold; blinds check
    """
    hand = HandNotation.from_cards(hole_cards[0], hole_cards[1])
    tier = _TIER_BY_HAND.get(hand, UNPLAYABLE_TIER)
    action, rationale = _preflop_action(tier, position)

    if tier < UNPLAYABLE_TIER:
        tier_label = f"Tier {tier}, top {tier_percentage(tier):.0f}% of starting hands"
    else:
        tier_label = "unranked"

    return PreflopRecommendation(
        action=action,
        reasoning=f"{hand} ({tier_label}) is {rationale}",
        tier=tier,
        hand_description=hand.description,
    )
