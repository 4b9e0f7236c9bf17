"""Constants for the poker advisor."""

from enum import IntEnum, StrEnum


class Suit(StrEnum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]

    @property
    def full_name(self) -> str:
        return self.name.lower()


class Rank(StrEnum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


RANK_VALUES: dict[Rank, int] = {
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 11,
    Rank.QUEEN: 12,
    Rank.KING: 13,
    Rank.ACE: 14,
}

# Reverse lookup; the low-Ace alias 1 maps back to the Ace.
VALUE_RANKS: dict[int, Rank] = {v: r for r, v in RANK_VALUES.items()}
VALUE_RANKS[1] = Rank.ACE

# Names used in human-readable descriptions ("Pair of Kings", "Jack kicker")
RANK_NAMES: dict[Rank, str] = {
    Rank.TWO: "Two",
    Rank.THREE: "Three",
    Rank.FOUR: "Four",
    Rank.FIVE: "Five",
    Rank.SIX: "Six",
    Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight",
    Rank.NINE: "Nine",
    Rank.TEN: "Ten",
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
    Rank.ACE: "Ace",
}

RANK_PLURALS: dict[Rank, str] = {
    r: ("Sixes" if r == Rank.SIX else f"{name}s") for r, name in RANK_NAMES.items()
}

# Short labels used when rendering cards for a player ("10♥", "K♠")
RANK_DISPLAY: dict[Rank, str] = {r: r.value for r in Rank}
RANK_DISPLAY[Rank.TEN] = "10"

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}


class HandRanking(IntEnum):
    """Hand categories, ordered 1 (High Card) to 10 (Royal Flush)."""

    HIGH_CARD = 1
    ONE_PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    @property
    def display_name(self) -> str:
        return HAND_RANKING_NAMES[self]


HAND_RANKING_NAMES: dict[HandRanking, str] = {
    HandRanking.HIGH_CARD: "High Card",
    HandRanking.ONE_PAIR: "Pair",
    HandRanking.TWO_PAIR: "Two Pair",
    HandRanking.THREE_OF_A_KIND: "Three of a Kind",
    HandRanking.STRAIGHT: "Straight",
    HandRanking.FLUSH: "Flush",
    HandRanking.FULL_HOUSE: "Full House",
    HandRanking.FOUR_OF_A_KIND: "Four of a Kind",
    HandRanking.STRAIGHT_FLUSH: "Straight Flush",
    HandRanking.ROYAL_FLUSH: "Royal Flush",
}


class Position(StrEnum):
    EARLY = "early"
    MIDDLE = "middle"
    LATE = "late"
    BLINDS = "blinds"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return POSITION_DESCRIPTIONS[self]


POSITION_DESCRIPTIONS: dict[Position, str] = {
    Position.EARLY: "First to act - play tight",
    Position.MIDDLE: "Middle position - moderate range",
    Position.LATE: "Last to act - wider range",
    Position.BLINDS: "Forced bets - defend selectively",
}


class ActionType(StrEnum):
    """The action types the advisor can recommend."""

    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    ALL_IN = "ALL_IN"


class Confidence(StrEnum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class GameStage(StrEnum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


# Community-card count at each stage
STAGE_CARD_COUNTS: dict[GameStage, int] = {
    GameStage.PREFLOP: 0,
    GameStage.FLOP: 3,
    GameStage.TURN: 4,
    GameStage.RIVER: 5,
}

MAX_COMMUNITY_CARDS = 5
