"""Tests for hand-strength evaluation."""

import pytest

from poker_advisor.core.hand_evaluator import (
    HAND_RANKS,
    STRENGTH_BANDS,
    UNKNOWN_EVALUATION,
    band_strength,
    evaluate_hand,
    get_strength_category,
)
from poker_advisor.core.hand_solver import SolvedHand
from poker_advisor.utils.card import Card


def _cards(s: str) -> list[Card]:
    """Helper: parse space-separated card strings like 'Ah Kd'."""
    return [Card.from_str(c) for c in s.split()]


class _FixedSolver:
    """Deterministic hand-ranking primitive for tests."""

    def __init__(self, solved: SolvedHand) -> None:
        self.solved = solved
        self.calls: list[list[Card]] = []

    def solve(self, cards):
        self.calls.append(list(cards))
        return self.solved


class TestStaticTables:
    def test_hand_ranks(self) -> None:
        assert HAND_RANKS["High Card"] == 1
        assert HAND_RANKS["Pair"] == 2
        assert HAND_RANKS["Royal Flush"] == 10
        assert len(HAND_RANKS) == 10

    def test_bands_do_not_overlap(self) -> None:
        for rank in range(1, 10):
            assert STRENGTH_BANDS[rank][1] <= STRENGTH_BANDS[rank + 1][0]

    @pytest.mark.parametrize(
        "rank, ordinal, expected",
        [
            (1, 1, 7),
            (2, 2, 28),
            (3, 3, 50),
            (4, 4, 65),
            (5, 5, 76),
            (6, 6, 83),
            (7, 7, 90),
            (8, 8, 95),
            (9, 9, 99),
            (10, 10, 100),
        ],
    )
    def test_band_strength(self, rank: int, ordinal: int, expected: int) -> None:
        assert band_strength(rank, ordinal) == expected

    def test_ordinal_is_clamped(self) -> None:
        assert band_strength(2, -5) == 25
        assert band_strength(2, 50) == 40

    def test_unknown_rank_uses_low_band(self) -> None:
        assert band_strength(0, 5) == 5


class TestEvaluateHand:
    def test_missing_hole_cards_is_sentinel(self) -> None:
        assert evaluate_hand([], _cards("Ah Kh Qh")) == UNKNOWN_EVALUATION
        assert evaluate_hand(_cards("Ah"), []) == UNKNOWN_EVALUATION
        assert not UNKNOWN_EVALUATION.is_known

    def test_pocket_pair_preflop(self) -> None:
        evaluation = evaluate_hand(_cards("Ah Ad"), [])
        assert evaluation.hand_name == "Pair"
        assert evaluation.hand_rank == 2
        assert evaluation.description == "Pair of Aces"

    def test_made_hand_on_flop(self) -> None:
        evaluation = evaluate_hand(_cards("Jh Jd"), _cards("Jc 8s 8h"))
        assert evaluation.hand_rank == 7
        assert evaluation.strength == 90
        assert evaluation.description == "Full House, Jacks over Eights"
        assert len(evaluation.best_cards) == 5

    def test_rank_is_monotonic_with_quality(self) -> None:
        board = _cards("Qh Jh 7h 3d 2s")
        hands = [
            _cards("9c 8d"),  # high card
            _cards("Qc 4d"),  # pair
            _cards("Qc Jd"),  # two pair
            _cards("Qc Qd"),  # trips
            _cards("Kh 4h"),  # flush
        ]
        evaluations = [evaluate_hand(h, board) for h in hands]
        ranks = [e.hand_rank for e in evaluations]
        strengths = [e.strength for e in evaluations]
        assert ranks == sorted(ranks)
        assert strengths == sorted(strengths)

    def test_uses_injected_solver(self) -> None:
        solver = _FixedSolver(SolvedHand("Straight", 5, "Straight, Nine High"))
        evaluation = evaluate_hand(_cards("9h 8h"), _cards("7c 6d 5s"), solver)
        assert evaluation.hand_rank == 5
        assert evaluation.strength == 76
        assert len(solver.calls) == 1
        assert len(solver.calls[0]) == 5

    def test_unknown_category_falls_back_to_high_card(self) -> None:
        solver = _FixedSolver(SolvedHand("Five of a Kind", 10, ""))
        evaluation = evaluate_hand(_cards("9h 8h"), [], solver)
        assert evaluation.hand_rank == 1
        assert evaluation.description == "Five of a Kind"

    def test_solver_failure_propagates(self) -> None:
        class _Broken:
            def solve(self, cards):
                raise RuntimeError("solver down")

        with pytest.raises(RuntimeError, match="solver down"):
            evaluate_hand(_cards("Ah Kh"), [], _Broken())


class TestStrengthCategory:
    @pytest.mark.parametrize(
        "cards, board, expected",
        [
            ("9c 8d", "Qh Jh 3d", "weak"),
            ("Qc Jd", "Qh Jh 3d", "strong"),
            ("Kh Th", "Qh Jh 3h", "monster"),
        ],
    )
    def test_category(self, cards: str, board: str, expected: str) -> None:
        assert get_strength_category(evaluate_hand(_cards(cards), _cards(board))) == expected
