"""Rule-based recommendation synthesis.

Turns hole cards, community cards, stage and a hand evaluation into one
actionable verdict. The cascade is an explicit ordered list of rules;
the first rule whose predicate matches builds the Recommendation.

Cascade:
  preflop → four_flush_danger → four_straight_danger
    → strong_made_hand → pair → high_card → fallback
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from functools import cached_property

from poker_advisor.core.hand_evaluator import HandEvaluation
from poker_advisor.strategy.board_analysis import (
    BoardTexture,
    KickerInfo,
    KickerStrength,
    PairPosition,
    analyze_board_texture,
    count_overcards,
    get_kicker_strength,
    get_pair_rank,
    is_overpair,
    pair_position,
    user_completes_straight,
    user_has_flush_card,
)
from poker_advisor.strategy.draws import DrawInfo, detect_draws
from poker_advisor.strategy.odds import outs_to_odds
from poker_advisor.strategy.preflop_ranges import (
    get_preflop_recommendation,
    tier_confidence,
)
from poker_advisor.utils.card import Card
from poker_advisor.utils.constants import (
    MAX_COMMUNITY_CARDS,
    RANK_PLURALS,
    ActionType,
    Confidence,
    GameStage,
    HandRanking,
    Position,
    Rank,
)

_FLUSH_FAMILY = frozenset({
    int(HandRanking.FLUSH),
    int(HandRanking.STRAIGHT_FLUSH),
    int(HandRanking.ROYAL_FLUSH),
})


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnalysisInput:
    """Everything the cascade needs for one decision."""

    hole_cards: tuple[Card, ...]
    community_cards: tuple[Card, ...]
    stage: GameStage
    evaluation: HandEvaluation
    position: Position = Position.MIDDLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "hole_cards", tuple(self.hole_cards))
        object.__setattr__(self, "community_cards", tuple(self.community_cards))
        object.__setattr__(self, "stage", GameStage(str(self.stage).lower()))
        object.__setattr__(self, "position", Position(self.position))

        if len(self.hole_cards) != 2:
            raise ValueError(
                f"Exactly 2 hole cards required, got {len(self.hole_cards)}"
            )
        if len(self.community_cards) > MAX_COMMUNITY_CARDS:
            raise ValueError(
                f"At most {MAX_COMMUNITY_CARDS} community cards, "
                f"got {len(self.community_cards)}"
            )


@dataclass(frozen=True)
class Recommendation:
    """The engine's verdict with its rationale and annotations."""

    action: ActionType
    confidence: Confidence
    reasoning: str
    hand_description: str = ""
    board_warning: str | None = None
    draw_info: str | None = None
    outs_odds: str | None = None
    narrative_advice: str | None = None
    rule: str | None = None  # Name of the cascade rule that fired


class RuleContext:
    """Lazily derived facts about an AnalysisInput, shared across rules."""

    def __init__(self, analysis: AnalysisInput) -> None:
        self.analysis = analysis
        self.hole = analysis.hole_cards
        self.board = analysis.community_cards
        self.evaluation = analysis.evaluation

    @property
    def hand_rank(self) -> int:
        return self.evaluation.hand_rank

    @property
    def description(self) -> str:
        return self.evaluation.description

    @cached_property
    def texture(self) -> BoardTexture:
        return analyze_board_texture(self.board)

    @cached_property
    def draws(self) -> DrawInfo:
        return detect_draws(self.hole, self.board)

    @cached_property
    def pair_rank(self) -> Rank | None:
        return get_pair_rank(self.hole, self.board)

    @cached_property
    def kicker(self) -> KickerInfo:
        return get_kicker_strength(self.hole, self.board)

    @cached_property
    def overcards(self) -> int:
        return count_overcards(self.board, self.pair_rank)

    @cached_property
    def hole_contributes(self) -> bool:
        """Whether the hole cards play in the made hand."""
        if self.hand_rank in _FLUSH_FAMILY:
            suit_counts = Counter(c.suit for c in (*self.hole, *self.board))
            flush_suits = {s for s, n in suit_counts.items() if n >= 5}
            return any(c.suit in flush_suits for c in self.hole)

        if self.hand_rank == HandRanking.STRAIGHT and self.evaluation.best_cards:
            return any(c in self.evaluation.best_cards for c in self.hole)

        if self.hole[0].rank == self.hole[1].rank:
            return True
        board_ranks = {c.rank for c in self.board}
        return any(c.rank in board_ranks for c in self.hole)

    @property
    def draw_info(self) -> str | None:
        if not self.draws.has_draw:
            return None
        return f"{self.draws.description} ({self.draws.outs} outs)"

    @property
    def cards_to_come(self) -> bool:
        return self.analysis.stage != GameStage.RIVER

    @property
    def outs_odds(self) -> str | None:
        outs = self.draws.outs
        if outs <= 0:
            return None
        if not self.cards_to_come:
            return f"{outs} outs, but no cards to come"
        odds = outs_to_odds(outs, self.analysis.stage)
        return (
            f"{outs} outs, ~{odds.win_probability}% to hit "
            f"({odds.odds_against} against)"
        )

    def draw_fields(self) -> dict[str, str | None]:
        return {"draw_info": self.draw_info, "outs_odds": self.outs_odds}


@dataclass(frozen=True)
class Rule:
    """One step of the cascade: a predicate and a result builder."""

    name: str
    applies: Callable[[RuleContext], bool]
    build: Callable[[RuleContext], Recommendation]


# ---------------------------------------------------------------------------
# Rule implementations
# ---------------------------------------------------------------------------


def _is_preflop(ctx: RuleContext) -> bool:
    return ctx.analysis.stage == GameStage.PREFLOP or not ctx.board


def _preflop(ctx: RuleContext) -> Recommendation:
    pre = get_preflop_recommendation(ctx.hole, ctx.analysis.position)
    return Recommendation(
        action=pre.action,
        confidence=tier_confidence(pre.tier),
        reasoning=pre.reasoning,
        hand_description=pre.hand_description,
    )


def _four_flush_danger_applies(ctx: RuleContext) -> bool:
    return ctx.texture.four_flush and not user_has_flush_card(
        ctx.hole, ctx.texture.flush_suit
    )


def _four_flush_danger(ctx: RuleContext) -> Recommendation:
    # four_flush implies a flush suit
    suit_name = ctx.texture.flush_suit.full_name
    singular = suit_name[:-1]
    return Recommendation(
        action=ActionType.FOLD,
        confidence=Confidence.HIGH,
        reasoning=(
            f"You have {ctx.description}, but the board shows four {suit_name} "
            f"and you hold none. Any opponent with a single {singular} "
            f"has a flush. Fold."
        ),
        hand_description=ctx.description,
        board_warning=f"Four {suit_name} on board - any {singular} makes a flush",
    )


def _four_straight_danger_applies(ctx: RuleContext) -> bool:
    return ctx.texture.four_straight and not user_completes_straight(
        ctx.hole, ctx.texture.missing_straight_cards
    )


def _four_straight_danger(ctx: RuleContext) -> Recommendation:
    needed = " or ".join(
        str(r) for r in ctx.texture.missing_straight_cards
    ) or "one card"
    return Recommendation(
        action=ActionType.CHECK,
        confidence=Confidence.LOW,
        reasoning=(
            f"You have {ctx.description}, but four to a straight sits on the "
            f"board and you don't hold the card that completes it. Check and "
            f"avoid a big pot."
        ),
        hand_description=ctx.description,
        board_warning=f"Four to a straight on board - any {needed} makes a straight",
    )


def _strong_made_hand(ctx: RuleContext) -> Recommendation:
    if not ctx.hole_contributes:
        return Recommendation(
            action=ActionType.CHECK,
            confidence=Confidence.LOW,
            reasoning=(
                f"{ctx.description} is entirely on the board, so every player "
                f"shares it. You have no edge - check and see what develops."
            ),
            hand_description=ctx.description,
            board_warning="Your hand plays the board",
        )

    warning = None
    reasoning = f"You have {ctx.description}! This is a strong hand - raise to build the pot."
    if ctx.texture.wet:
        warning = "Wet board - flush and straight draws are possible"
        if ctx.cards_to_come:
            reasoning += " The board is wet, so charge the draws now."
        else:
            reasoning += " The board is wet, so a flush or straight may already be ahead of you."
    return Recommendation(
        action=ActionType.RAISE,
        confidence=Confidence.HIGH,
        reasoning=reasoning,
        hand_description=ctx.description,
        board_warning=warning,
    )


def _board_pair(ctx: RuleContext) -> Recommendation:
    if ctx.draws.is_strong:
        if ctx.cards_to_come:
            follow_up = "Check and take a free card if you can."
        else:
            follow_up = "The draw missed on the river, so check and give up to a bet."
        return Recommendation(
            action=ActionType.CHECK,
            confidence=Confidence.LOW,
            reasoning=(
                f"The pair is on the board, not in your hand, but you have a "
                f"{ctx.draws.description}. {follow_up}"
            ),
            hand_description=f"{ctx.description} (on the board)",
            **ctx.draw_fields(),
        )
    return Recommendation(
        action=ActionType.FOLD,
        confidence=Confidence.HIGH,
        reasoning=(
            f"{ctx.description} is on the board and your hole cards don't "
            f"help. Everyone shares that pair. Fold."
        ),
        hand_description=f"{ctx.description} (on the board)",
        **ctx.draw_fields(),
    )


def _pair(ctx: RuleContext) -> Recommendation:
    pair_rank = ctx.pair_rank
    if pair_rank is None:
        return _board_pair(ctx)

    plural = RANK_PLURALS[pair_rank]
    draw_fields = ctx.draw_fields()

    if is_overpair(ctx.hole, ctx.board):
        return Recommendation(
            action=ActionType.RAISE,
            confidence=Confidence.HIGH,
            reasoning=(
                f"Pocket {plural} beat every card on the board. Raise to "
                f"protect your overpair."
            ),
            hand_description=f"Overpair, {plural}",
            **draw_fields,
        )

    position = pair_position(pair_rank, ctx.board)
    kicker = ctx.kicker
    overcards = ctx.overcards

    if position == PairPosition.TOP:
        description = f"Top pair, {plural} ({kicker.kicker} kicker)"
        if kicker.strength == KickerStrength.STRONG and overcards == 0:
            return Recommendation(
                action=ActionType.RAISE,
                confidence=Confidence.HIGH,
                reasoning=(
                    f"Top pair with a strong {kicker.kicker} kicker. Raise for "
                    f"value."
                ),
                hand_description=description,
                **draw_fields,
            )
        if kicker.strength == KickerStrength.WEAK or overcards >= 1:
            issues = []
            if kicker.strength == KickerStrength.WEAK:
                issues.append(f"weak {kicker.kicker} kicker")
            if overcards:
                issues.append(f"{overcards} overcard{'s' if overcards > 1 else ''}")
            return Recommendation(
                action=ActionType.CALL,
                confidence=Confidence.MEDIUM,
                reasoning=(
                    f"Top pair, but with {' and '.join(issues)}. Call, and be "
                    f"careful against heavy betting."
                ),
                hand_description=description,
                **draw_fields,
            )
        return Recommendation(
            action=ActionType.CALL,
            confidence=Confidence.MEDIUM,
            reasoning=(
                f"Top pair with a {kicker.strength.value} kicker. Call to see "
                f"more cards."
            ),
            hand_description=description,
            **draw_fields,
        )

    description = f"{position.value.capitalize()} pair, {plural}"
    if overcards >= 2:
        return Recommendation(
            action=ActionType.CHECK,
            confidence=Confidence.LOW,
            reasoning=(
                f"{position.value.capitalize()} pair with {overcards} overcards "
                f"on the board. Check and keep the pot small."
            ),
            hand_description=description,
            **draw_fields,
        )
    return Recommendation(
        action=ActionType.CALL,
        confidence=Confidence.LOW,
        reasoning=(
            f"{position.value.capitalize()} pair. Call small bets, but fold to "
            f"heavy pressure."
        ),
        hand_description=description,
        **draw_fields,
    )


def _high_card(ctx: RuleContext) -> Recommendation:
    draws = ctx.draws
    draw_fields = ctx.draw_fields()
    if ctx.cards_to_come:
        combo = "Raise - you are often ahead of a made pair."
        chase = "Call to see the next card."
        gutshot = "Check, and don't pay much to chase it."
    else:
        combo = "Both draws missed on the river, so a raise here is a pure bluff."
        chase = "The draw missed on the river; only call if the price is tiny."
        gutshot = "It missed on the river, so check and give up to a bet."

    if draws.flush_draw and draws.open_ended:
        return Recommendation(
            action=ActionType.RAISE,
            confidence=Confidence.MEDIUM,
            reasoning=(
                f"You have {ctx.description} with a monster draw: a flush draw "
                f"plus an open-ended straight draw. {combo}"
            ),
            hand_description=ctx.description,
            **draw_fields,
        )
    if draws.flush_draw:
        return Recommendation(
            action=ActionType.CALL,
            confidence=Confidence.MEDIUM,
            reasoning=f"You have {ctx.description} and a flush draw. {chase}",
            hand_description=ctx.description,
            **draw_fields,
        )
    if draws.open_ended:
        return Recommendation(
            action=ActionType.CALL,
            confidence=Confidence.MEDIUM,
            reasoning=(
                f"You have {ctx.description} and an open-ended straight draw. {chase}"
            ),
            hand_description=ctx.description,
            **draw_fields,
        )
    if draws.gutshot:
        return Recommendation(
            action=ActionType.CHECK,
            confidence=Confidence.LOW,
            reasoning=(
                f"You have {ctx.description} and only a gutshot. {gutshot}"
            ),
            hand_description=ctx.description,
            **draw_fields,
        )
    return Recommendation(
        action=ActionType.FOLD,
        confidence=Confidence.HIGH,
        reasoning=(
            f"You have {ctx.description}. With no pair and no draw, fold and "
            f"wait for a better hand."
        ),
        hand_description=ctx.description,
    )


def _fallback(ctx: RuleContext) -> Recommendation:
    return Recommendation(
        action=ActionType.CHECK,
        confidence=Confidence.LOW,
        reasoning=f"You have {ctx.description}. Check and proceed carefully.",
        hand_description=ctx.description,
    )


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------

RULES: tuple[Rule, ...] = (
    Rule("preflop", _is_preflop, _preflop),
    Rule("four_flush_danger", _four_flush_danger_applies, _four_flush_danger),
    Rule("four_straight_danger", _four_straight_danger_applies, _four_straight_danger),
    Rule("strong_made_hand", lambda ctx: ctx.hand_rank >= HandRanking.TWO_PAIR, _strong_made_hand),
    Rule("pair", lambda ctx: ctx.hand_rank == HandRanking.ONE_PAIR, _pair),
    Rule("high_card", lambda ctx: ctx.hand_rank == HandRanking.HIGH_CARD, _high_card),
    Rule("fallback", lambda ctx: True, _fallback),
)


def _first_match(ctx: RuleContext, rules: Sequence[Rule]) -> Rule:
    for rule in rules:
        if rule.applies(ctx):
            return rule
    raise LookupError("No recommendation rule matched")


def rule_for(analysis: AnalysisInput, rules: Sequence[Rule] = RULES) -> str:
    """Name of the rule that fires for ``analysis``."""
    return _first_match(RuleContext(analysis), rules).name


def get_rules_based_recommendation(
    analysis: AnalysisInput,
    rules: Sequence[Rule] = RULES,
) -> Recommendation:
    """Run the cascade and return the first matching rule's verdict.

    Args:
        analysis: Hole cards, community cards, stage, evaluation, position.
        rules: Ordered rules; the default cascade ends with a catch-all.

    Returns:
        Recommendation tagged with the name of the rule that produced it.
    """
    ctx = RuleContext(analysis)
    rule = _first_match(ctx, rules)
    return replace(rule.build(ctx), rule=rule.name)
