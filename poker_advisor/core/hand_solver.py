"""Best 5-card hand solver for Texas Hold'em.

Implements the hand-ranking primitive the evaluator consumes: given 2 to 7
cards, find the best hand category, an ordinal on the 1-10 scale and a
readable description.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from functools import total_ordering
from itertools import combinations
from typing import Protocol, runtime_checkable

from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import (
    RANK_NAMES,
    RANK_PLURALS,
    RANK_VALUES,
    VALUE_RANKS,
    HandRanking,
    Rank,
)

MIN_CARDS = 2
MAX_CARDS = 7


@dataclass(frozen=True)
class SolvedHand:
    """Output of a hand-ranking primitive.

    Attributes:
        name: Category name ("Pair", "Full House", ...).
        rank: Comparable ordinal on a 0-10 scale.
        description: Readable hand ("Pair of Kings").
        best_cards: Up to 5 cards that make the hand.
    """

    name: str
    rank: int
    description: str
    best_cards: tuple[Card, ...] = ()


@runtime_checkable
class HandRankingPrimitive(Protocol):
    """Interface for "solve the best hand" backends.

    Usage:
        def evaluate(solver: HandRankingPrimitive, cards):
            solved = solver.solve(cards)
    """

    def solve(self, cards: Sequence[Card]) -> SolvedHand: ...


@total_ordering
@dataclass(frozen=True)
class HandResult:
    """Result of evaluating a poker hand.

    ``straight_high`` is set for straights and straight flushes so the
    wheel (A-2-3-4-5) ranks below a six-high straight.
    """

    ranking: HandRanking
    best_cards: tuple[Card, ...]
    kickers: tuple[Card, ...] = ()
    straight_high: int | None = None

    @property
    def key(self) -> tuple[int, ...]:
        """Comparison key: category first, then card values in hand order."""
        if self.straight_high is not None:
            return (int(self.ranking), self.straight_high)
        return (
            int(self.ranking),
            *(c.value for c in self.best_cards),
            *(c.value for c in self.kickers),
        )

    @property
    def cards(self) -> tuple[Card, ...]:
        """The (up to) five cards that play."""
        return (self.best_cards + self.kickers)[:5]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return self.key < other.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class HandSolver:
    """Finds the best hand among 2 to 7 cards.

    With fewer than five cards only pairs, trips and quads are possible;
    straights and flushes need five cards.
    """

    def solve(self, cards: Sequence[Card]) -> SolvedHand:
        result = self.evaluate(cards)
        return SolvedHand(
            name=result.ranking.display_name,
            rank=int(result.ranking),
            description=describe(result),
            best_cards=result.cards,
        )

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandResult:
        """Evaluate the best hand from a list of cards.

        Args:
            cards: 2 to 7 cards (hole cards + community cards).

        Returns:
            HandResult with the best hand ranking, cards, and kickers.

        Raises:
            ValueError: If fewer than 2 or more than 7 cards are provided.
        """
        if len(cards) < MIN_CARDS:
            raise ValueError(f"Need at least {MIN_CARDS} cards, got {len(cards)}")
        if len(cards) > MAX_CARDS:
            raise ValueError(f"At most {MAX_CARDS} cards, got {len(cards)}")

        if len(cards) < 5:
            return HandSolver._evaluate_partial(list(cards))

        return max(
            HandSolver._evaluate_five(list(combo))
            for combo in combinations(cards, 5)
        )

    @staticmethod
    def _evaluate_five(cards: list[Card]) -> HandResult:
        """Evaluate exactly 5 cards."""
        sorted_cards = sorted(cards, key=lambda c: c.value, reverse=True)
        is_flush = len({c.suit for c in sorted_cards}) == 1
        straight_high = HandSolver._straight_high(sorted_cards)
        rank_counts = Counter(c.rank for c in sorted_cards)
        counts = sorted(rank_counts.values(), reverse=True)

        if is_flush and straight_high is not None:
            ranking = (
                HandRanking.ROYAL_FLUSH if straight_high == 14
                else HandRanking.STRAIGHT_FLUSH
            )
            return HandResult(ranking, tuple(sorted_cards), (), straight_high)

        if counts == [4, 1]:
            return HandSolver._make_group_result(
                HandRanking.FOUR_OF_A_KIND, sorted_cards, rank_counts
            )

        if counts == [3, 2]:
            return HandSolver._make_group_result(
                HandRanking.FULL_HOUSE, sorted_cards, rank_counts
            )

        if is_flush:
            return HandResult(HandRanking.FLUSH, tuple(sorted_cards))

        if straight_high is not None:
            return HandResult(
                HandRanking.STRAIGHT, tuple(sorted_cards), (), straight_high
            )

        return HandSolver._evaluate_groups(sorted_cards, rank_counts)

    @staticmethod
    def _evaluate_partial(cards: list[Card]) -> HandResult:
        """Evaluate 2-4 cards: only rank groupings can be made."""
        sorted_cards = sorted(cards, key=lambda c: c.value, reverse=True)
        return HandSolver._evaluate_groups(
            sorted_cards, Counter(c.rank for c in sorted_cards)
        )

    @staticmethod
    def _evaluate_groups(
        sorted_cards: list[Card],
        rank_counts: Counter[Rank],
    ) -> HandResult:
        """Classify by rank multiplicity alone (no straight or flush)."""
        counts = sorted(rank_counts.values(), reverse=True)
        top = counts[0]

        if top == 4:
            ranking = HandRanking.FOUR_OF_A_KIND
        elif top == 3:
            ranking = HandRanking.THREE_OF_A_KIND
        elif top == 2 and len(counts) > 1 and counts[1] == 2:
            ranking = HandRanking.TWO_PAIR
        elif top == 2:
            ranking = HandRanking.ONE_PAIR
        else:
            return HandResult(
                HandRanking.HIGH_CARD,
                tuple(sorted_cards[:1]),
                tuple(sorted_cards[1:5]),
            )
        return HandSolver._make_group_result(ranking, sorted_cards, rank_counts)

    @staticmethod
    def _straight_high(cards: list[Card]) -> int | None:
        """Return the high card value of a straight, or None.

        Handles the A-2-3-4-5 (wheel) straight as a special case.
        """
        values = sorted({c.value for c in cards}, reverse=True)
        if len(values) != 5:
            return None

        if values[0] - values[4] == 4:
            return values[0]

        if values == [14, 5, 4, 3, 2]:
            return 5

        return None

    @staticmethod
    def _make_group_result(
        ranking: HandRanking,
        sorted_cards: list[Card],
        rank_counts: Counter[Rank],
    ) -> HandResult:
        """Build a HandResult for group-based hands (pairs, trips, quads, full house).

        Groups are ordered by size, then by rank, so a full house lists
        its trips before its pair.
        """
        group_sizes = {
            HandRanking.FOUR_OF_A_KIND: (4,),
            HandRanking.FULL_HOUSE: (3, 2),
            HandRanking.THREE_OF_A_KIND: (3,),
            HandRanking.TWO_PAIR: (2,),
            HandRanking.ONE_PAIR: (2,),
        }[ranking]

        group_ranks = [r for r, c in rank_counts.items() if c in group_sizes]
        group_ranks.sort(
            key=lambda r: (rank_counts[r], RANK_VALUES[r]), reverse=True
        )
        if ranking == HandRanking.TWO_PAIR:
            group_ranks = group_ranks[:2]

        best = [c for r in group_ranks for c in sorted_cards if c.rank == r]
        kickers = [c for c in sorted_cards if c.rank not in group_ranks]
        return HandResult(
            ranking=ranking,
            best_cards=tuple(best),
            kickers=tuple(kickers[:max(0, 5 - len(best))]),
        )


def describe(result: HandResult) -> str:
    """Readable description of a hand result, e.g. 'Full House, Jacks over Eights'."""
    ranking = result.ranking
    lead = result.best_cards[0].rank if result.best_cards else Rank.TWO

    match ranking:
        case HandRanking.ROYAL_FLUSH:
            return "Royal Flush"
        case HandRanking.STRAIGHT_FLUSH | HandRanking.STRAIGHT:
            high = VALUE_RANKS[result.straight_high or 5]
            return f"{ranking.display_name}, {RANK_NAMES[high]} High"
        case HandRanking.FOUR_OF_A_KIND | HandRanking.THREE_OF_A_KIND:
            return f"{ranking.display_name}, {RANK_PLURALS[lead]}"
        case HandRanking.FULL_HOUSE:
            pair = result.best_cards[3].rank
            return f"Full House, {RANK_PLURALS[lead]} over {RANK_PLURALS[pair]}"
        case HandRanking.FLUSH:
            return f"Flush, {RANK_NAMES[lead]} High"
        case HandRanking.TWO_PAIR:
            low = result.best_cards[2].rank
            return f"Two Pair, {RANK_PLURALS[lead]} and {RANK_PLURALS[low]}"
        case HandRanking.ONE_PAIR:
            return f"Pair of {RANK_PLURALS[lead]}"
        case _:
            return f"{RANK_NAMES[lead]} High"


def compare_hands(
    first_hole: Sequence[Card],
    second_hole: Sequence[Card],
    community: Sequence[Card],
) -> int:
    """Compare two holdings on the same board.

    Returns:
        1 if the first holding wins, -1 if the second wins, 0 on a tie.
    """
    first = HandSolver.evaluate([*first_hole, *community])
    second = HandSolver.evaluate([*second_hole, *community])
    if first > second:
        return 1
    if second > first:
        return -1
    return 0
