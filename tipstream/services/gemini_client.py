"""Gemini-backed tip tier generator.

One outbound ``generateContent`` request per call, no retries. Failures
raise ``TierGenerationError`` from ``generate_tiers``; callers that want a
fallback use ``try_generate_tiers`` and inspect the result instead.
"""

import json
import logging
import re
from dataclasses import dataclass, field

import httpx

from tipstream.models.tips import TipTheme, TipTier

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"

TIER_AMOUNTS = "0.5, 1, 2, 5, 10, 25, 50, 100, 250"
REQUIRED_TIER_FIELDS = ("amount", "emoji", "name", "perk")

GENERATION_CONFIG = {
    "temperature": 0.9,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 2048,
}

_FENCE_RE = re.compile(r"```(?:json)?\n?")
_WHITESPACE_RE = re.compile(r"\s+")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9-]")


class TierGenerationError(Exception):
    """Raised when the AI service cannot produce a usable tier list."""


@dataclass
class TierGenerationResult:
    """Result of a tier generation attempt."""

    success: bool
    tiers: list[TipTier] = field(default_factory=list)
    error: str | None = None


def build_prompt(
    theme: TipTheme,
    currency: str,
    min_amount: float | None = None,
    max_amount: float | None = None,
    stream_context: str | None = None,
) -> str:
    """Build the tier generation prompt."""
    min_amount = 0.5 if min_amount is None else min_amount
    max_amount = 250 if max_amount is None else max_amount
    context_note = f"\n\nStream context: {stream_context}" if stream_context else ""

    return f"""Generate 9 creative tip tiers for a live streaming platform with a "{theme}" theme.

Requirements:
- Theme: {theme}
- Currency: {currency}
- Amount range: {min_amount} to {max_amount}
- Tier amounts should be: {TIER_AMOUNTS} (in {currency})
- Each tier needs: emoji, name, and perk description
- Names should be creative and match the {theme} theme
- Perks should be engaging rewards (badges, shoutouts, unlocks, etc.)
- Emojis should be single Unicode emoji that fit the theme{context_note}

Return ONLY a valid JSON array with this exact structure (no markdown, no explanation):
[
  {{
    "amount": 0.5,
    "emoji": "✨",
    "name": "Starter Name",
    "perk": "What viewer gets"
  }},
  ...
]

Generate the tiers now:"""


def tier_id(theme: str, name: str) -> str:
    """Slug id such as ``fun-coffee-shot``."""
    slug = _SLUG_STRIP_RE.sub("", _WHITESPACE_RE.sub("-", name.lower()))
    return f"{theme}-{slug}"


def parse_tiers_from_response(text: str, theme: TipTheme) -> list[TipTier]:
    """Parse a (possibly markdown-fenced) JSON array of tiers.

    Raises:
        TierGenerationError: if the text is not a JSON array of complete tiers
    """
    json_text = text.strip()
    if json_text.startswith("```"):
        json_text = _FENCE_RE.sub("", json_text).strip()

    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse AI response: {text[:200]}")
        raise TierGenerationError(f"Failed to parse AI response: {e}") from e

    if not isinstance(parsed, list):
        raise TierGenerationError("Failed to parse AI response: response is not an array")

    tiers: list[TipTier] = []
    for index, raw in enumerate(parsed):
        if not isinstance(raw, dict) or not all(raw.get(key) for key in REQUIRED_TIER_FIELDS):
            raise TierGenerationError(f"Failed to parse AI response: invalid tier at index {index}")

        try:
            amount = float(raw["amount"])
        except (TypeError, ValueError) as e:
            raise TierGenerationError(
                f"Failed to parse AI response: invalid amount at index {index}"
            ) from e

        name = str(raw["name"])
        tiers.append(
            TipTier(
                id=tier_id(theme, name),
                theme=theme,
                amount=amount,
                emoji=str(raw["emoji"]),
                name=name,
                perk=str(raw["perk"]),
            )
        )

    return tiers


class GeminiTierGenerator:
    """Generate themed tip tiers with the Gemini REST API.

    Holds one shared httpx client; call ``close()`` on shutdown.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        api_base: str = GEMINI_API_BASE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")

        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def endpoint(self) -> str:
        return f"{self.api_base}/models/{self.model}:generateContent"

    async def close(self) -> None:
        """Close the shared HTTP client. Call on app shutdown."""
        await self._http.aclose()

    async def generate_tiers(
        self,
        theme: TipTheme,
        currency: str,
        min_amount: float | None = None,
        max_amount: float | None = None,
        stream_context: str | None = None,
    ) -> list[TipTier]:
        """Ask Gemini for a tier list.

        Raises:
            TierGenerationError: on missing credential, HTTP failure or bad response
        """
        if not self.api_key:
            raise TierGenerationError("GEMINI_API_KEY is not configured")

        prompt = build_prompt(theme, currency, min_amount, max_amount, stream_context)
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": GENERATION_CONFIG,
        }

        try:
            response = await self._http.post(
                self.endpoint, params={"key": self.api_key}, json=payload
            )
        except httpx.HTTPError as e:
            raise TierGenerationError(f"Gemini request failed: {type(e).__name__}: {e}") from e

        if not response.is_success:
            raise TierGenerationError(
                f"Gemini API error: {response.status_code} {response.reason_phrase}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TierGenerationError("Gemini API returned a non-JSON body") from e

        text = _candidate_text(data)
        if not text:
            raise TierGenerationError("No response from Gemini API")

        tiers = parse_tiers_from_response(text, theme)
        logger.info(f"Gemini generated {len(tiers)} tiers (theme={theme}, model={self.model})")
        return tiers

    async def try_generate_tiers(
        self,
        theme: TipTheme,
        currency: str,
        min_amount: float | None = None,
        max_amount: float | None = None,
        stream_context: str | None = None,
    ) -> TierGenerationResult:
        """Non-raising form of ``generate_tiers``."""
        try:
            tiers = await self.generate_tiers(
                theme, currency, min_amount, max_amount, stream_context
            )
        except TierGenerationError as e:
            logger.error(f"Failed to generate tiers with AI: {e}")
            return TierGenerationResult(success=False, error=str(e))

        return TierGenerationResult(success=True, tiers=tiers)


def _candidate_text(data: object) -> str | None:
    """Pull ``candidates[0].content.parts[0].text`` out of a response body."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
