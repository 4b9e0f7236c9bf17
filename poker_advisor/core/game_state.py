"""Per-hand card selection state for the coach."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from poker_advisor.utils.card import Card, unique_cards
from poker_advisor.utils.constants import (
    MAX_COMMUNITY_CARDS,
    STAGE_CARD_COUNTS,
    GameStage,
    Position,
)

_STAGE_BY_COUNT: dict[int, GameStage] = {n: s for s, n in STAGE_CARD_COUNTS.items()}


def stage_for_count(n: int) -> GameStage:
    """Stage implied by the number of community cards.

    Raises:
        ValueError: For a count no street produces (1, 2 or more than 5).
    """
    try:
        return _STAGE_BY_COUNT[n]
    except KeyError:
        raise ValueError(f"No stage has {n} community cards") from None


def infer_stage(n: int) -> GameStage:
    """Latest stage whose card count is reached by ``n`` community cards."""
    reached = [s for s, count in STAGE_CARD_COUNTS.items() if count <= n]
    return reached[-1]


@dataclass
class HandState:
    """Cards selected so far in the current hand.

    The stage follows the community-card count: three cards make it the
    flop, four the turn, five the river. A partial board, including one
    left by removing a card, counts as the last street it completes.
    """

    position: Position = Position.MIDDLE
    hole_cards: list[Card] = field(default_factory=list)
    community_cards: list[Card] = field(default_factory=list)
    stage: GameStage = GameStage.PREFLOP

    def set_hole_cards(self, cards: Iterable[Card]) -> None:
        """Replace the hole cards.

        Raises:
            ValueError: Unless exactly two distinct cards, neither on the board.
        """
        cards = list(cards)
        if len(cards) != 2 or cards[0] == cards[1]:
            raise ValueError("Hole cards must be exactly 2 distinct cards")
        clash = [c for c in cards if c in self.community_cards]
        if clash:
            raise ValueError(f"{clash[0]} is already on the board")
        self.hole_cards = cards

    def add_community_cards(self, cards: Iterable[Card]) -> list[Card]:
        """Add cards to the board, skipping duplicates and capping at five.

        Returns:
            The cards actually added.
        """
        taken = set(self.hole_cards) | set(self.community_cards)
        fresh = [c for c in unique_cards(cards) if c not in taken]
        room = MAX_COMMUNITY_CARDS - len(self.community_cards)
        added = fresh[:max(0, room)]
        self.community_cards.extend(added)
        self._follow_board()
        return added

    def remove_card(self, card: Card) -> None:
        """Remove a card. Removing either hole card clears both."""
        if card in self.hole_cards:
            self.hole_cards = []
        elif card in self.community_cards:
            self.community_cards.remove(card)
            self._follow_board()

    def reset(self) -> None:
        """Clear the cards for a new hand, keeping the seat position."""
        self.hole_cards = []
        self.community_cards = []
        self.stage = GameStage.PREFLOP

    @property
    def has_hole_cards(self) -> bool:
        return len(self.hole_cards) == 2

    def _follow_board(self) -> None:
        self.stage = infer_stage(len(self.community_cards))
