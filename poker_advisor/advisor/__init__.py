"""Texas Hold'em decision advisor.

Turns hole cards, community cards and table position into a single
actionable verdict with a confidence level and a readable rationale.

Key public API:
    AdvisorEngine                  -- Evaluate, synthesize and optionally narrate
    evaluate_hand                  -- Hand category and 0-100 strength
    analyze_board_texture          -- Flush/straight/pairing structure of the board
    detect_draws                   -- Flush and straight draws with outs
    get_accurate_odds              -- Outs to percentage for a street
    get_preflop_recommendation     -- Tier-based pre-flop action
    get_rules_based_recommendation -- The post-flop rule cascade
"""

from poker_advisor.advisor.engine import AdvisorEngine, Analysis
from poker_advisor.advisor.narrative import (
    AdviceConfig,
    AdviceError,
    NarrativeAdvisor,
    create_advisor,
    load_advice_config,
)
from poker_advisor.core.hand_evaluator import HandEvaluation, evaluate_hand
from poker_advisor.strategy.board_analysis import BoardTexture, analyze_board_texture
from poker_advisor.strategy.draws import DrawInfo, detect_draws
from poker_advisor.strategy.odds import get_accurate_odds
from poker_advisor.strategy.preflop_ranges import get_preflop_recommendation
from poker_advisor.strategy.recommendation_engine import (
    AnalysisInput,
    Recommendation,
    get_rules_based_recommendation,
)

__all__ = [
    "AdviceConfig",
    "AdviceError",
    "AdvisorEngine",
    "Analysis",
    "AnalysisInput",
    "BoardTexture",
    "DrawInfo",
    "HandEvaluation",
    "NarrativeAdvisor",
    "Recommendation",
    "analyze_board_texture",
    "create_advisor",
    "detect_draws",
    "evaluate_hand",
    "get_accurate_odds",
    "get_preflop_recommendation",
    "get_rules_based_recommendation",
    "load_advice_config",
]
