"""AdvisorEngine: top-level orchestrator for one decision.

Evaluates the hand, runs the rule cascade and, when a narrative advisor
is configured, decorates the verdict with one sentence of commentary.

The rules verdict is computed before any narrative call; a failing
narrative step is logged and the verdict is returned unchanged.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, replace

from poker_advisor.advisor.narrative import AdviceError, NarrativeAdvisor
from poker_advisor.core.game_state import HandState, infer_stage
from poker_advisor.core.hand_evaluator import (
    UNKNOWN_EVALUATION,
    HandEvaluation,
    evaluate_hand,
)
from poker_advisor.core.hand_solver import HandRankingPrimitive
from poker_advisor.strategy.board_analysis import BoardTexture, analyze_board_texture
from poker_advisor.strategy.draws import NO_DRAWS, DrawInfo, detect_draws
from poker_advisor.strategy.recommendation_engine import (
    AnalysisInput,
    Recommendation,
    get_rules_based_recommendation,
)
from poker_advisor.utils.card import Card, unique_cards
from poker_advisor.utils.constants import (
    STAGE_CARD_COUNTS,
    ActionType,
    Confidence,
    GameStage,
    Position,
)

logger = logging.getLogger("poker_advisor.advisor")

_NO_HOLE_CARDS = Recommendation(
    action=ActionType.FOLD,
    confidence=Confidence.LOW,
    reasoning="No hole cards - cannot make a recommendation",
    hand_description=UNKNOWN_EVALUATION.description,
    rule="no_hole_cards",
)


@dataclass(frozen=True)
class Analysis:
    """Everything computed for one decision."""

    stage: GameStage
    evaluation: HandEvaluation
    texture: BoardTexture
    draws: DrawInfo
    recommendation: Recommendation


class AdvisorEngine:
    """Decision pipeline: evaluate → synthesize → (optional) narrate.

    Usage:
        engine = AdvisorEngine()
        analysis = engine.analyze(parse_cards("AhKh"), parse_cards("Qh Jh 2c"))
        print(analysis.recommendation.action)
    """

    def __init__(
        self,
        solver: HandRankingPrimitive | None = None,
        advisor: NarrativeAdvisor | None = None,
    ) -> None:
        self._solver = solver
        self._advisor = advisor

    @property
    def has_narrative(self) -> bool:
        return self._advisor is not None

    def analyze(
        self,
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card] = (),
        stage: GameStage | str | None = None,
        position: Position = Position.MIDDLE,
    ) -> Analysis:
        """Produce a recommendation for the given cards.

        Args:
            hole_cards: The player's two hole cards. Fewer than two yields
                a FOLD with an unknown evaluation rather than an error.
            community_cards: 0-5 community cards. Repeats are dropped.
            stage: Betting stage; inferred from the board size when omitted.
                A post-flop stage with fewer than three community cards
                is logged and analysed as pre-flop.
            position: Table position, used pre-flop.

        Returns:
            Analysis with the evaluation, board texture, draws and verdict.

        Raises:
            ValueError: More than two hole cards or five community cards.
        """
        t_start = time.perf_counter()

        hole = unique_cards(hole_cards)
        board = [c for c in unique_cards(community_cards) if c not in hole]
        stage = GameStage(str(stage).lower()) if stage else infer_stage(len(board))
        if stage != GameStage.PREFLOP and len(board) < STAGE_CARD_COUNTS[GameStage.FLOP]:
            logger.warning(
                "Stage %s given with %d community card(s); analysing as preflop",
                stage,
                len(board),
            )
            stage = GameStage.PREFLOP

        if len(hole) < 2:
            logger.debug("No hole cards - returning fold")
            return Analysis(
                stage=stage,
                evaluation=UNKNOWN_EVALUATION,
                texture=analyze_board_texture(board),
                draws=NO_DRAWS,
                recommendation=_NO_HOLE_CARDS,
            )

        t0 = time.perf_counter()
        evaluation = evaluate_hand(hole, board, self._solver)
        logger.debug(
            "Evaluated %s: rank=%d strength=%d (%.1fms)",
            evaluation.description,
            evaluation.hand_rank,
            evaluation.strength,
            (time.perf_counter() - t0) * 1000,
        )

        analysis_input = AnalysisInput(
            hole_cards=tuple(hole),
            community_cards=tuple(board),
            stage=stage,
            evaluation=evaluation,
            position=position,
        )

        t0 = time.perf_counter()
        recommendation = get_rules_based_recommendation(analysis_input)
        logger.debug(
            "Rule %s fired (%.1fms)",
            recommendation.rule,
            (time.perf_counter() - t0) * 1000,
        )

        if self._advisor is not None:
            recommendation = self._narrate(analysis_input, recommendation)

        elapsed_ms = (time.perf_counter() - t_start) * 1000
        logger.info(
            "%s %s → %s (confidence=%s, rule=%s, %.1fms)",
            stage.value,
            evaluation.hand_name,
            recommendation.action.value,
            recommendation.confidence.value,
            recommendation.rule,
            elapsed_ms,
        )

        return Analysis(
            stage=stage,
            evaluation=evaluation,
            texture=analyze_board_texture(board),
            draws=detect_draws(hole, board),
            recommendation=recommendation,
        )

    def analyze_state(self, state: HandState) -> Analysis:
        """Analyze the cards currently held in a HandState."""
        return self.analyze(
            state.hole_cards,
            state.community_cards,
            stage=state.stage,
            position=state.position,
        )

    def _narrate(
        self,
        analysis_input: AnalysisInput,
        recommendation: Recommendation,
    ) -> Recommendation:
        """Attach narrative advice; on any failure keep the verdict as is."""
        t0 = time.perf_counter()
        try:
            advice = self._advisor.advise(analysis_input, recommendation)
        except AdviceError as e:
            logger.warning("Narrative advice unavailable: %s", e)
            return recommendation
        except Exception:
            logger.exception("Unexpected error in narrative advisor")
            return recommendation

        logger.debug("Narrative advice: %.1fms", (time.perf_counter() - t0) * 1000)
        return replace(recommendation, narrative_advice=advice)
