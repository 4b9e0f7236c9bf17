"""Optional narrative coaching from a language model.

The rules-based verdict is always complete on its own. A narrative
advisor only adds one sentence of commentary on top of it; any failure
here surfaces as AdviceError and the caller drops the commentary.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

import anthropic

from poker_advisor.strategy.recommendation_engine import AnalysisInput, Recommendation
from poker_advisor.utils.card import Card

logger = logging.getLogger("poker_advisor.advisor.narrative")

DEFAULT_MODEL = "claude-3-5-haiku-latest"
DEFAULT_MAX_TOKENS = 100
API_KEY_ENV = "ANTHROPIC_API_KEY"


class AdviceError(Exception):
    """Raised when narrative advice cannot be produced."""


@runtime_checkable
class NarrativeAdvisor(Protocol):
    """Interface for narrative-advice backends.

    Usage:
        def enrich(advisor: NarrativeAdvisor, analysis, rec):
            text = advisor.advise(analysis, rec)
    """

    def advise(self, analysis: AnalysisInput, recommendation: Recommendation) -> str: ...


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdviceConfig:
    """Settings for the narrative step."""

    enabled: bool = True
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS
    api_key: str | None = None


def default_config_path() -> Path:
    return Path.home() / ".poker_advisor" / "advice_config.json"


def load_advice_config(config_path: Path | None = None) -> AdviceConfig:
    """Load narrative-advice settings.

    Default path: ~/.poker_advisor/advice_config.json

    A missing file means defaults. An unreadable or malformed file is
    logged and ignored. The API key always comes from ANTHROPIC_API_KEY.

    Expected JSON format:
        {
            "enabled": true,
            "model": "claude-3-5-haiku-latest",
            "max_tokens": 100
        }
    """
    api_key = os.environ.get(API_KEY_ENV) or None
    defaults = AdviceConfig(api_key=api_key)

    path = config_path or default_config_path()
    if not path.exists():
        return defaults

    try:
        with open(path) as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to read advice config at %s: %s", path, e)
        return defaults

    if not isinstance(data, dict):
        logger.warning("Advice config at %s is not a JSON object", path)
        return defaults

    try:
        return AdviceConfig(
            enabled=bool(data.get("enabled", defaults.enabled)),
            model=str(data.get("model", defaults.model)),
            max_tokens=int(data.get("max_tokens", defaults.max_tokens)),
            api_key=api_key,
        )
    except (TypeError, ValueError) as e:
        logger.warning("Invalid value in advice config at %s: %s", path, e)
        return defaults


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------


def _format_card(card: Card) -> str:
    return f"{card.rank.value}{card.suit.value.upper()}"


def build_advice_prompt(analysis: AnalysisInput, recommendation: Recommendation) -> str:
    """Coaching prompt asking for one short sentence about the verdict."""
    hole = ", ".join(_format_card(c) for c in analysis.hole_cards)
    board = (
        ", ".join(_format_card(c) for c in analysis.community_cards)
        if analysis.community_cards
        else "none yet"
    )
    hand = recommendation.hand_description or analysis.evaluation.description

    return (
        "You are a poker coach for beginners learning Texas Hold'em. "
        "Give ONE short sentence (max 20 words) of strategic advice.\n"
        "\n"
        f"Game Stage: {analysis.stage.value}\n"
        f"Your Hole Cards: {hole}\n"
        f"Community Cards: {board}\n"
        f"Your Hand: {hand}\n"
        f"Suggested Action: {recommendation.action.value}\n"
        "\n"
        'Focus on the "why" behind the action. Be encouraging but honest. No jargon.'
    )


# ---------------------------------------------------------------------------
# Anthropic backend
# ---------------------------------------------------------------------------


class AnthropicAdvisor:
    """Narrative advisor backed by the Anthropic Messages API."""

    def __init__(self, config: AdviceConfig, client: anthropic.Anthropic | None = None) -> None:
        if client is None and not config.api_key:
            raise AdviceError(f"{API_KEY_ENV} is not set")
        self._config = config
        self._client = client or anthropic.Anthropic(api_key=config.api_key)

    def advise(self, analysis: AnalysisInput, recommendation: Recommendation) -> str:
        prompt = build_advice_prompt(analysis, recommendation)
        try:
            message = self._client.messages.create(
                model=self._config.model,
                max_tokens=self._config.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise AdviceError(f"Anthropic API error: {e}") from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise AdviceError("Empty response from narrative model")

        logger.debug("Narrative advice: %s", text)
        return text


def create_advisor(config: AdviceConfig | None = None) -> NarrativeAdvisor | None:
    """Build the configured advisor, or None when narrative advice is off."""
    config = config or load_advice_config()
    if not config.enabled:
        logger.debug("Narrative advice disabled by config")
        return None
    if not config.api_key:
        logger.debug("No %s set; narrative advice unavailable", API_KEY_ENV)
        return None
    return AnthropicAdvisor(config)
