"""Tip tier API routes"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tipstream.core.dependencies import get_tip_service
from tipstream.models.tips import TipTheme, TipTier, TipTierSet
from tipstream.services import GenerateTipsInput, TipService, suggest_example_tips

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tips", tags=["tips"])


# ============================================
# Request / Response Models
# ============================================


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TipTierResponse(CamelModel):
    id: str
    theme: TipTheme
    amount: float
    emoji: str
    name: str
    perk: str
    min_amount: float | None = None
    max_amount: float | None = None

    @classmethod
    def from_tier(cls, tier: TipTier) -> "TipTierResponse":
        return cls(
            id=tier.id,
            theme=tier.theme,
            amount=tier.amount,
            emoji=tier.emoji,
            name=tier.name,
            perk=tier.perk,
            min_amount=tier.min_amount,
            max_amount=tier.max_amount,
        )


class TipTierSetResponse(CamelModel):
    theme: TipTheme
    currency: str
    tiers: list[TipTierResponse]

    @classmethod
    def from_tier_set(cls, tier_set: TipTierSet) -> "TipTierSetResponse":
        return cls(
            theme=tier_set.theme,
            currency=tier_set.currency,
            tiers=[TipTierResponse.from_tier(tier) for tier in tier_set.tiers],
        )


class GenerateTipsRequest(CamelModel):
    stream_id: str | None = None
    viewer_segment: str | None = None
    theme: TipTheme | None = None
    currency: str | None = None
    min_amount: float | None = None
    max_amount: float | None = None
    stream_context: str | None = None
    use_ai: bool | None = Field(default=None, alias="useAI")


# ============================================
# Endpoints
# ============================================


@router.get("/suggest", response_model=TipTierSetResponse, response_model_exclude_none=True)
async def suggest_tips(
    stream_id: str | None = Query(None, alias="streamId"),
    creator_id: str | None = Query(None, alias="creatorId"),
    theme: TipTheme | None = Query(None),
    currency: str | None = Query(None),
) -> TipTierSetResponse:
    """
    Get the static tier set for a theme

    Args:
        theme: Tier theme (default: fun)
        currency: Currency code (default: EUR)
    """
    tier_set = suggest_example_tips(
        stream_id=stream_id, creator_id=creator_id, theme=theme, currency=currency
    )
    return TipTierSetResponse.from_tier_set(tier_set)


@router.post("", response_model=TipTierSetResponse, response_model_exclude_none=True)
async def generate_tips(
    body: GenerateTipsRequest,
    tip_service: TipService = Depends(get_tip_service),
) -> TipTierSetResponse:
    """
    Generate a tier set, AI-generated when enabled and configured

    AI failures fall back to the static catalog; the min/max amount filter
    applies either way.
    """
    try:
        tier_set = await tip_service.generate_tips(GenerateTipsInput(**body.model_dump()))

        logger.info(
            f"Generated {len(tier_set.tiers)} tiers "
            f"(stream={body.stream_id}, theme={tier_set.theme}, currency={tier_set.currency})"
        )
        return TipTierSetResponse.from_tier_set(tier_set)

    except Exception as e:
        logger.exception(f"Failed to generate tips: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate tips") from None
