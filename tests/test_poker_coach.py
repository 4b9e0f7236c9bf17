"""Tests for the CLI coach helpers."""

import pytest

from poker_advisor.advisor.engine import AdvisorEngine
from poker_advisor.interface import poker_coach
from poker_advisor.interface.poker_coach import (
    _grade_play,
    _hand_display,
    _parse_action,
    _parse_position,
)
from poker_advisor.strategy.recommendation_engine import Recommendation
from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import ActionType, Confidence, Position


def _cards(s: str) -> list[Card]:
    """Helper: parse space-separated card strings like 'Ah Kd'."""
    return [Card.from_str(c) for c in s.split()]


def _rec(action: ActionType, confidence: Confidence = Confidence.HIGH) -> Recommendation:
    return Recommendation(action, confidence, "Because.")


class TestParsing:
    def test_position(self) -> None:
        assert _parse_position(" Late ") == Position.LATE

    def test_bad_position(self) -> None:
        with pytest.raises(ValueError):
            _parse_position("button")

    @pytest.mark.parametrize(
        "text, action",
        [("fold", ActionType.FOLD), ("Raise", ActionType.RAISE),
         ("all-in", ActionType.ALL_IN), ("allin", ActionType.ALL_IN)],
    )
    def test_action(self, text: str, action: ActionType) -> None:
        assert _parse_action(text) == action

    def test_hand_display(self) -> None:
        assert _hand_display(_cards("Ah Ks")) == "Ah Ks (AKo)"


class TestGradePlay:
    def test_same_action_is_optimal(self) -> None:
        grade, _ = _grade_play(ActionType.RAISE, _rec(ActionType.RAISE))
        assert grade == "Optimal"

    def test_one_step_off_is_a_mistake(self) -> None:
        grade, explanation = _grade_play(ActionType.CALL, _rec(ActionType.RAISE))
        assert grade == "Mistake"
        assert explanation.startswith("Too passive")

    def test_one_step_off_low_confidence_is_acceptable(self) -> None:
        grade, _ = _grade_play(ActionType.CALL, _rec(ActionType.CHECK, Confidence.LOW))
        assert grade == "Acceptable"

    def test_far_off_is_a_blunder(self) -> None:
        grade, explanation = _grade_play(ActionType.ALL_IN, _rec(ActionType.FOLD))
        assert grade == "Blunder"
        assert explanation.startswith("Way too aggressive")


class TestSession:
    def test_live_coaching_street_by_street(self, monkeypatch, capsys) -> None:
        answers = iter(["KhKd", "late", "2c 5d 9s", "7h", ""])
        monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

        poker_coach._live_coaching(AdvisorEngine())

        out = capsys.readouterr().out
        assert out.count("RECOMMENDATION:") == 2
        assert "Overpair, Kings" in out
        assert "Stage:      turn" in out

    def test_hand_review(self, monkeypatch, capsys) -> None:
        answers = iter(["4c9d", "middle", "Ks Kd 2c", "raise"])
        monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

        poker_coach._hand_review(AdvisorEngine())

        out = capsys.readouterr().out
        assert "Optimal play:  FOLD" in out
        assert "Blunder" in out

    def test_bad_hand_aborts(self, monkeypatch, capsys) -> None:
        answers = iter(["Zz"])
        monkeypatch.setattr("builtins.input", lambda _prompt: next(answers))

        assert poker_coach._build_hand() is None
        assert "Invalid rank" in capsys.readouterr().out

    def test_run_quits(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("builtins.input", lambda _prompt: "3")
        poker_coach.run(["--no-narrative"])
        assert "Good luck" in capsys.readouterr().out
