"""Tip generation entry point"""

import logging
from dataclasses import dataclass

from tipstream.models.tips import DEFAULT_CURRENCY, DEFAULT_THEME, TipTheme, TipTierSet
from tipstream.services.gemini_client import GeminiTierGenerator
from tipstream.services.tip_catalog import filter_tiers_by_amount, get_base_tier_set

logger = logging.getLogger(__name__)


@dataclass
class GenerateTipsInput:
    stream_id: str | None = None
    viewer_segment: str | None = None
    theme: TipTheme | None = None
    currency: str | None = None
    min_amount: float | None = None
    max_amount: float | None = None
    stream_context: str | None = None
    use_ai: bool | None = None


class TipService:
    """Produce tip tier sets, preferring AI tiers when available.

    ``generator`` is None when no Gemini credential is configured, in which
    case only the static catalog is served.
    """

    def __init__(self, generator: GeminiTierGenerator | None = None):
        self.generator = generator

    @property
    def ai_available(self) -> bool:
        return self.generator is not None

    async def generate_tips(self, request: GenerateTipsInput) -> TipTierSet:
        """Return AI-generated tiers if enabled and successful, else the static set.

        Both paths apply the same min/max filter. Never raises for AI failures.
        """
        theme = request.theme or DEFAULT_THEME
        currency = request.currency or DEFAULT_CURRENCY

        enhanced = await self._generate_ai_tiers(request, theme, currency)
        if enhanced is not None:
            return enhanced

        base_set = get_base_tier_set(theme, currency)
        return TipTierSet(
            theme=theme,
            currency=currency,
            tiers=filter_tiers_by_amount(base_set.tiers, request.min_amount, request.max_amount),
        )

    async def _generate_ai_tiers(
        self, request: GenerateTipsInput, theme: TipTheme, currency: str
    ) -> TipTierSet | None:
        """Attempt the AI path; None means fall back to the static catalog."""
        if request.use_ai is False:
            return None

        if self.generator is None:
            if request.use_ai:
                logger.info("AI tiers requested but GEMINI_API_KEY is not set, using static tiers")
            return None

        result = await self.generator.try_generate_tiers(
            theme=theme,
            currency=currency,
            min_amount=request.min_amount,
            max_amount=request.max_amount,
            stream_context=request.stream_context,
        )
        if not result.success:
            logger.warning(f"AI generation failed, falling back to predefined tiers: {result.error}")
            return None

        return TipTierSet(
            theme=theme,
            currency=currency,
            tiers=filter_tiers_by_amount(result.tiers, request.min_amount, request.max_amount),
        )
