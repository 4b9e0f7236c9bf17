"""Card value type and card-token helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering

from poker_advisor.utils.constants import RANK_DISPLAY, RANK_VALUES, Rank, Suit


@total_ordering
@dataclass(frozen=True)
class Card:
    """One playing card. Ordered by rank only; equal only with the same suit."""

    rank: Rank
    suit: Suit

    @classmethod
    def from_str(cls, s: str) -> Card:
        """Build a card from a token like 'Ah' or 'Td'.

        The rank character is case-insensitive, as is the suit initial.

        Raises:
            ValueError: If the token is not two characters or names an
                unknown rank or suit.
        """
        if len(s) != 2:
            raise ValueError(f"Card string must be 2 characters, got '{s}'")
        rank_char, suit_char = s
        try:
            rank = Rank(rank_char.upper())
        except ValueError:
            raise ValueError(f"Invalid rank character: '{rank_char}'") from None
        try:
            suit = Suit(suit_char.lower())
        except ValueError:
            raise ValueError(f"Invalid suit character: '{suit_char}'") from None
        return cls(rank, suit)

    @property
    def value(self) -> int:
        """Rank value, 2 through 14 (ace high)."""
        return RANK_VALUES[self.rank]

    @property
    def display(self) -> str:
        """Human-facing form, e.g. '10♥' or 'A♠'."""
        return f"{RANK_DISPLAY[self.rank]}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.rank.value + self.suit.value

    def __repr__(self) -> str:
        return f"Card.from_str({str(self)!r})"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.value < other.value


def parse_cards(s: str) -> list[Card]:
    """Parse card string: 'AhKs' or 'Ah Ks' or 'Ah, Ks, Td' -> list[Card].

    Supports both concatenated (2-char groups) and separated formats.
    """
    s = s.replace(",", " ").strip()
    if not s:
        return []
    if " " in s:
        return [Card.from_str(c) for c in s.split()]
    if len(s) % 2 != 0:
        raise ValueError(f"Invalid card string: '{s}' (odd length)")
    return [Card.from_str(s[i:i + 2]) for i in range(0, len(s), 2)]


def format_cards(cards: Iterable[Card]) -> str:
    """Render cards as space-separated tokens: 'Ah Ks'."""
    return " ".join(str(c) for c in cards)


def unique_cards(cards: Iterable[Card]) -> list[Card]:
    """Drop repeated cards, keeping first-seen order."""
    seen: set[Card] = set()
    result = []
    for card in cards:
        if card not in seen:
            seen.add(card)
            result.append(card)
    return result


def full_deck() -> list[Card]:
    """All 52 distinct cards, grouped by suit."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in Rank]
