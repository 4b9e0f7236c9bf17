"""Tests for pre-flop tiers and recommendations."""

import pytest

from poker_advisor.strategy.preflop_ranges import (
    SKLANSKY_TIERS,
    UNPLAYABLE_TIER,
    HandNotation,
    HandType,
    expand_notation,
    parse_range,
    range_percentage,
    get_hand_notation,
    get_preflop_recommendation,
    get_sklansky_tier,
    tier_confidence,
    tier_percentage,
)
from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import ActionType, Confidence, Position, Rank


def _cards(s: str) -> list[Card]:
    """Helper: parse space-separated card strings like 'Ah Kd'."""
    return [Card.from_str(c) for c in s.split()]


class TestHandNotation:
    def test_parse_pair(self) -> None:
        h = HandNotation.parse("AA")
        assert h.high == Rank.ACE
        assert h.low == Rank.ACE
        assert h.hand_type == HandType.PAIR

    def test_parse_suited(self) -> None:
        h = HandNotation.parse("AKs")
        assert h.high == Rank.ACE
        assert h.low == Rank.KING
        assert h.hand_type == HandType.SUITED

    def test_parse_normalizes_rank_order(self) -> None:
        h = HandNotation.parse("KAs")
        assert h.high == Rank.ACE
        assert h.low == Rank.KING

    def test_combo_counts(self) -> None:
        assert HandNotation.parse("AA").combo_count == 6
        assert HandNotation.parse("AKs").combo_count == 4
        assert HandNotation.parse("AKo").combo_count == 12

    @pytest.mark.parametrize("text", ["AKx", "AK", "AAs", "ZZ", "AKso"])
    def test_invalid_notation(self, text: str) -> None:
        with pytest.raises(ValueError):
            HandNotation.parse(text)

    @pytest.mark.parametrize(
        "cards, expected",
        [("As Ad", "AA"), ("Ks As", "AKs"), ("9d Th", "T9o"), ("2c 7d", "72o")],
    )
    def test_from_cards(self, cards: str, expected: str) -> None:
        c1, c2 = _cards(cards)
        assert get_hand_notation(c1, c2) == expected

    def test_description(self) -> None:
        assert HandNotation.parse("AA").description == "Pocket Aces"
        assert HandNotation.parse("AKs").description == "Ace-King suited"
        assert HandNotation.parse("T9o").description == "Ten-Nine offsuit"

    def test_str_round_trips_through_cards(self) -> None:
        c1, c2 = _cards("Jd Qd")
        assert str(HandNotation.from_cards(c1, c2)) == "QJs"
        assert HandNotation.from_cards(c1, c2) == HandNotation.parse("QJs")


class TestExpandNotation:
    def test_plus_pairs(self) -> None:
        hands = expand_notation("JJ+")
        assert {h.high for h in hands} == {Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE}

    def test_dash_pairs(self) -> None:
        assert len(expand_notation("44-22")) == 3

    def test_dash_suited(self) -> None:
        assert len(expand_notation("Q7s-Q2s")) == 6

    def test_invalid_dash_different_high(self) -> None:
        with pytest.raises(ValueError, match="share the high card"):
            expand_notation("A5s-K2s")

    def test_plus_non_pairs(self) -> None:
        assert [str(h) for h in expand_notation("ATs+")] == ["AKs", "AQs", "AJs", "ATs"]

    def test_mixed_dash_types(self) -> None:
        with pytest.raises(ValueError, match="mixes"):
            expand_notation("A5s-A2o")

    def test_range_percentage(self) -> None:
        hands = parse_range("AA, AKs")
        assert len(hands) == 2
        assert range_percentage(hands) == pytest.approx(10 / 1326 * 100)


class TestSklanskyTiers:
    @pytest.mark.parametrize(
        "cards, tier",
        [
            ("As Ad", 1),
            ("Ah Kh", 1),
            ("Ah Kd", 2),
            ("9s 9d", 3),
            ("Kh Qd", 4),
            ("Ah 5h", 5),
            ("6s 6c", 6),
            ("2s 2c", 7),
            ("6h 5d", 8),
            ("Qc 2c", 9),
            ("7d 2c", UNPLAYABLE_TIER),
        ],
    )
    def test_tier(self, cards: str, tier: int) -> None:
        assert get_sklansky_tier(_cards(cards)) == tier

    def test_order_independent(self) -> None:
        assert get_sklansky_tier(_cards("Ks As")) == get_sklansky_tier(_cards("As Ks"))

    def test_tiers_are_disjoint(self) -> None:
        hands = [h for tier in SKLANSKY_TIERS.values() for h in tier]
        assert len(hands) == len(set(hands))

    def test_tier_percentage_grows(self) -> None:
        shares = [tier_percentage(t) for t in range(1, 10)]
        assert shares == sorted(shares)
        assert tier_percentage(1) == pytest.approx(28 / 1326 * 100)

    def test_confidence(self) -> None:
        assert tier_confidence(3) == Confidence.HIGH
        assert tier_confidence(6) == Confidence.MEDIUM
        assert tier_confidence(7) == Confidence.LOW
        assert tier_confidence(UNPLAYABLE_TIER) == Confidence.LOW


class TestPreflopRecommendation:
    def test_premium_raises(self) -> None:
        rec = get_preflop_recommendation(_cards("As Ad"), Position.MIDDLE)
        assert rec.action == ActionType.RAISE
        assert rec.tier == 1
        assert rec.confidence == Confidence.HIGH
        assert rec.hand_description == "Pocket Aces"
        assert "AA" in rec.reasoning
        assert "Middle" in rec.reasoning

    def test_default_position_is_middle(self) -> None:
        rec = get_preflop_recommendation(_cards("Ah 5h"))
        assert rec.action == ActionType.CALL

    @pytest.mark.parametrize(
        "cards, position, action",
        [
            ("Kh Qd", Position.EARLY, ActionType.CALL),
            ("Kh Qd", Position.MIDDLE, ActionType.RAISE),
            ("9s 9d", Position.EARLY, ActionType.RAISE),
            ("Ah 5h", Position.EARLY, ActionType.FOLD),
            ("Ah 5h", Position.LATE, ActionType.RAISE),
            ("Ah 5h", Position.BLINDS, ActionType.CALL),
            ("2s 2c", Position.EARLY, ActionType.FOLD),
            ("2s 2c", Position.MIDDLE, ActionType.FOLD),
            ("2s 2c", Position.LATE, ActionType.CALL),
            ("2s 2c", Position.BLINDS, ActionType.CHECK),
            ("7d 2c", Position.LATE, ActionType.FOLD),
            ("7d 2c", Position.BLINDS, ActionType.CHECK),
        ],
    )
    def test_position_thresholds(
        self, cards: str, position: Position, action: ActionType,
    ) -> None:
        rec = get_preflop_recommendation(_cards(cards), position)
        assert rec.action == action
        assert position.label in rec.reasoning

    def test_unplayable_hand(self) -> None:
        rec = get_preflop_recommendation(_cards("7d 2c"), Position.EARLY)
        assert rec.tier == UNPLAYABLE_TIER
        assert "unranked" in rec.reasoning
        assert rec.hand_description == "Seven-Two offsuit"
