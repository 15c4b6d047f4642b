"""Dependency injection utilities for FastAPI"""

import logging

from tipstream.core.config import Settings, get_settings
from tipstream.services import GeminiTierGenerator, TipService

logger = logging.getLogger(__name__)


# ============================================
# Service Dependencies
# ============================================


_gemini_generator: GeminiTierGenerator | None = None


def build_gemini_generator(settings: Settings) -> GeminiTierGenerator | None:
    """Create a generator from settings, or None when no API key is configured."""
    if not settings.ai_enabled:
        return None
    return GeminiTierGenerator(
        api_key=settings.gemini_api_key.strip(),
        model=settings.gemini_model,
        api_base=settings.gemini_api_base,
        timeout=settings.gemini_timeout,
    )


def get_gemini_generator() -> GeminiTierGenerator | None:
    """Get shared GeminiTierGenerator singleton (connection reuse)."""
    global _gemini_generator
    if _gemini_generator is None:
        _gemini_generator = build_gemini_generator(get_settings())
        if _gemini_generator is not None:
            logger.info(f"Gemini tier generation enabled (model={_gemini_generator.model})")
    return _gemini_generator


async def close_gemini_generator() -> None:
    """Close the shared GeminiTierGenerator. Call on app shutdown."""
    global _gemini_generator
    if _gemini_generator is not None:
        await _gemini_generator.close()
        _gemini_generator = None


def get_tip_service() -> TipService:
    """Get TipService instance (dependency injection)"""
    return TipService(generator=get_gemini_generator())
