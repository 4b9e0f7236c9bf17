"""Tests for the rule-based recommendation cascade."""

from dataclasses import FrozenInstanceError

import pytest

from poker_advisor.core.hand_evaluator import UNKNOWN_EVALUATION, evaluate_hand
from poker_advisor.strategy.recommendation_engine import (
    RULES,
    AnalysisInput,
    Recommendation,
    Rule,
    get_rules_based_recommendation,
    rule_for,
)
from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import ActionType, Confidence, GameStage, Position


def _cards(s: str) -> list[Card]:
    """Helper: parse space-separated card strings like 'Ah Kd'."""
    return [Card.from_str(c) for c in s.split()]


def _analysis(
    hole: str,
    board: str = "",
    stage: GameStage | None = None,
    position: Position = Position.MIDDLE,
) -> AnalysisInput:
    hole_cards = _cards(hole)
    community = _cards(board)
    if stage is None:
        stage = {0: GameStage.PREFLOP, 3: GameStage.FLOP, 4: GameStage.TURN}.get(
            len(community), GameStage.RIVER
        )
    return AnalysisInput(
        hole_cards=hole_cards,
        community_cards=community,
        stage=stage,
        evaluation=evaluate_hand(hole_cards, community),
        position=position,
    )


def _recommend(*args, **kwargs) -> Recommendation:
    return get_rules_based_recommendation(_analysis(*args, **kwargs))


class TestScenarios:
    def test_pocket_aces_preflop(self) -> None:
        rec = _recommend("As Ad", "", GameStage.PREFLOP, Position.MIDDLE)
        assert rec.action == ActionType.RAISE
        assert rec.confidence == Confidence.HIGH
        assert rec.rule == "preflop"

    def test_four_flush_board_without_a_flush_card(self) -> None:
        rec = _recommend("2c 7d", "Ks Qs Js 3s", GameStage.RIVER)
        assert rec.action == ActionType.FOLD
        assert rec.confidence == Confidence.HIGH
        assert rec.board_warning
        assert "spades" in rec.board_warning
        assert rec.rule == "four_flush_danger"

    def test_overpair(self) -> None:
        rec = _recommend("Kh Kd", "2c 5d 9s", GameStage.FLOP)
        assert rec.action == ActionType.RAISE
        assert rec.confidence == Confidence.HIGH
        assert rec.hand_description == "Overpair, Kings"
        assert rec.rule == "pair"

    def test_open_ended_draw(self) -> None:
        rec = _recommend("9s 8s", "7s 6d 2c", GameStage.FLOP)
        assert rec.action == ActionType.CALL
        assert rec.confidence == Confidence.MEDIUM
        assert "8 outs" in rec.draw_info
        assert rec.outs_odds == "8 outs, ~31% to hit (2.2:1 against)"
        assert rec.rule == "high_card"

    def test_pair_on_the_board_only(self) -> None:
        rec = _recommend("4c 9d", "Ks Kd 2c", GameStage.FLOP)
        assert rec.action == ActionType.FOLD
        assert rec.confidence == Confidence.HIGH
        assert rec.hand_description == "Pair of Kings (on the board)"
        assert rec.rule == "pair"


class TestPreflopRule:
    def test_empty_board_is_preflop_whatever_the_stage(self) -> None:
        assert rule_for(_analysis("As Ad", "", GameStage.FLOP)) == "preflop"

    def test_position_is_passed_through(self) -> None:
        rec = _recommend("2s 2c", "", GameStage.PREFLOP, Position.BLINDS)
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW

    def test_hand_description(self) -> None:
        rec = _recommend("Ah Kh")
        assert rec.hand_description == "Ace-King suited"


class TestBoardDanger:
    def test_holding_the_flush_suit_skips_danger(self) -> None:
        rec = _recommend("As 2d", "Ks Qs Js 3s")
        assert rec.rule == "strong_made_hand"
        assert rec.action == ActionType.RAISE
        assert rec.board_warning

    def test_five_flush_board_without_the_suit(self) -> None:
        rec = _recommend("Qc Jd", "Ah Kh 9h 5h 2h")
        assert rec.rule == "four_flush_danger"
        assert rec.action == ActionType.FOLD

    def test_four_straight_board(self) -> None:
        rec = _recommend("2c 2d", "9h 8d 7c 6s")
        assert rec.rule == "four_straight_danger"
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW
        assert "5 or T" in rec.board_warning

    def test_holding_the_straight_card_skips_danger(self) -> None:
        rec = _recommend("Th 2d", "9h 8d 7c 6s")
        assert rec.rule == "strong_made_hand"
        assert rec.action == ActionType.RAISE


class TestStrongMadeHand:
    def test_contributing_two_pair(self) -> None:
        rec = _recommend("Kh 9d", "Kc 9s 2d")
        assert rec.action == ActionType.RAISE
        assert rec.confidence == Confidence.HIGH
        assert rec.board_warning is None

    def test_set_on_wet_board_is_annotated(self) -> None:
        rec = _recommend("8h 8c", "9h 8d 7h")
        assert rec.action == ActionType.RAISE
        assert rec.board_warning and "Wet board" in rec.board_warning

    def test_two_pair_on_the_board(self) -> None:
        rec = _recommend("2c 3d", "Kh Kd 9s 9c 4h", GameStage.RIVER)
        assert rec.rule == "strong_made_hand"
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW
        assert rec.board_warning == "Your hand plays the board"


class TestPairRule:
    def test_board_pair_with_strong_draw(self) -> None:
        rec = _recommend("9h 8h", "Kh Kd 7h")
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW
        assert rec.draw_info == "flush draw (9 outs)"
        assert rec.outs_odds == "9 outs, ~35% to hit (1.9:1 against)"

    def test_board_pair_with_missed_draw_on_river(self) -> None:
        rec = _recommend("9h 8h", "Kh Kd 7h 2c 3s", GameStage.RIVER)
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW
        assert "free card" not in rec.reasoning
        assert "missed on the river" in rec.reasoning

    def test_top_pair_strong_kicker(self) -> None:
        rec = _recommend("Ah Kd", "Kc 7s 2d")
        assert rec.action == ActionType.RAISE
        assert rec.confidence == Confidence.HIGH
        assert rec.hand_description == "Top pair, Kings (A kicker)"

    def test_top_pair_weak_kicker(self) -> None:
        rec = _recommend("Kh 4d", "Kc 9s 2d")
        assert rec.action == ActionType.CALL
        assert rec.confidence == Confidence.MEDIUM
        assert "weak 4 kicker" in rec.reasoning

    def test_top_pair_medium_kicker(self) -> None:
        rec = _recommend("Kh Td", "Kc 9s 2d")
        assert rec.action == ActionType.CALL
        assert rec.confidence == Confidence.MEDIUM
        assert "medium kicker" in rec.reasoning

    def test_bottom_pair_under_two_overcards(self) -> None:
        rec = _recommend("2h 5d", "Kc 9s 2d")
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW
        assert rec.hand_description == "Bottom pair, Twos"

    def test_second_pair(self) -> None:
        rec = _recommend("9h 5d", "Kc 9s 2d")
        assert rec.action == ActionType.CALL
        assert rec.confidence == Confidence.LOW

    def test_underpair_is_not_an_overpair(self) -> None:
        rec = _recommend("7h 7d", "Kc 9s 2d")
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW


class TestHighCardRule:
    def test_monster_draw(self) -> None:
        rec = _recommend("9h 8h", "7h 6c 2h")
        assert rec.action == ActionType.RAISE
        assert rec.confidence == Confidence.MEDIUM
        assert rec.draw_info == "flush draw + open-ended straight draw (17 outs)"

    def test_flush_draw(self) -> None:
        rec = _recommend("Ah 9h", "Kh 4h 2c")
        assert rec.action == ActionType.CALL
        assert rec.confidence == Confidence.MEDIUM

    def test_gutshot(self) -> None:
        rec = _recommend("9h 8d", "6c 5s Kd")
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW

    def test_nothing(self) -> None:
        rec = _recommend("2c 7d", "Kh Qs 9c")
        assert rec.action == ActionType.FOLD
        assert rec.confidence == Confidence.HIGH
        assert rec.draw_info is None
        assert rec.outs_odds is None

    def test_river_has_no_cards_to_come(self) -> None:
        rec = _recommend("9s 8s", "7s 6d 2c Kh Ah", GameStage.RIVER)
        assert rec.outs_odds == "8 outs, but no cards to come"

    def test_river_draw_keeps_action_but_not_the_next_card(self) -> None:
        rec = _recommend("9s 8s", "7s 6d 2c Kh Ah", GameStage.RIVER)
        assert rec.action == ActionType.CALL
        assert rec.confidence == Confidence.MEDIUM
        assert "missed on the river" in rec.reasoning
        assert "next card" not in rec.reasoning

    def test_turn_draw_sees_the_next_card(self) -> None:
        rec = _recommend("9s 8s", "7s 6d 2c Kh", GameStage.TURN)
        assert rec.action == ActionType.CALL
        assert "next card" in rec.reasoning

    def test_river_monster_draw_is_a_bluff(self) -> None:
        rec = _recommend("9h 8h", "7h 6c 2h Kd As", GameStage.RIVER)
        assert rec.action == ActionType.RAISE
        assert "bluff" in rec.reasoning


class TestCascade:
    def test_rule_order(self) -> None:
        assert [r.name for r in RULES] == [
            "preflop",
            "four_flush_danger",
            "four_straight_danger",
            "strong_made_hand",
            "pair",
            "high_card",
            "fallback",
        ]

    def test_unknown_evaluation_falls_back(self) -> None:
        analysis = AnalysisInput(
            hole_cards=_cards("2c 7d"),
            community_cards=_cards("Kh Qs 9c"),
            stage=GameStage.FLOP,
            evaluation=UNKNOWN_EVALUATION,
        )
        rec = get_rules_based_recommendation(analysis)
        assert rec.rule == "fallback"
        assert rec.action == ActionType.CHECK
        assert rec.confidence == Confidence.LOW

    def test_inserted_rule_wins(self) -> None:
        shove = Rule(
            "shove",
            lambda ctx: True,
            lambda ctx: Recommendation(ActionType.ALL_IN, Confidence.HIGH, "Shove."),
        )
        rec = get_rules_based_recommendation(_analysis("As Ad"), (shove, *RULES))
        assert rec.action == ActionType.ALL_IN
        assert rec.rule == "shove"

    def test_no_matching_rule_raises(self) -> None:
        with pytest.raises(LookupError):
            get_rules_based_recommendation(_analysis("As Ad"), RULES[1:2])

    def test_recommendation_is_frozen(self) -> None:
        rec = _recommend("As Ad")
        with pytest.raises(FrozenInstanceError):
            rec.action = ActionType.FOLD  # type: ignore[misc]


class TestAnalysisInput:
    def test_stage_string_is_normalized(self) -> None:
        analysis = _analysis("As Ad", "2c 5d 9s", "FLOP")
        assert analysis.stage == GameStage.FLOP
        assert isinstance(analysis.community_cards, tuple)

    def test_one_hole_card_raises(self) -> None:
        with pytest.raises(ValueError, match="Exactly 2 hole cards"):
            AnalysisInput(_cards("As"), [], GameStage.PREFLOP, UNKNOWN_EVALUATION)

    def test_six_community_cards_raise(self) -> None:
        with pytest.raises(ValueError, match="At most 5"):
            AnalysisInput(
                _cards("As Ad"),
                _cards("2c 3c 4c 5d 6d 7d"),
                GameStage.RIVER,
                UNKNOWN_EVALUATION,
            )
