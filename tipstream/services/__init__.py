"""Services layer - Business logic

Analytics and the tip catalog are plain functions; the tip service and the
Gemini generator are classes built once and handed out through dependency
injection.
"""

from .analytics_service import compute_leaderboard, compute_payment_analytics, resolve_window
from .gemini_client import GeminiTierGenerator, TierGenerationError, TierGenerationResult
from .tip_catalog import filter_tiers_by_amount, get_base_tier_set, suggest_example_tips
from .tip_service import GenerateTipsInput, TipService

__all__ = [
    "GeminiTierGenerator",
    "GenerateTipsInput",
    "TierGenerationError",
    "TierGenerationResult",
    "TipService",
    "compute_leaderboard",
    "compute_payment_analytics",
    "filter_tiers_by_amount",
    "get_base_tier_set",
    "resolve_window",
    "suggest_example_tips",
]
