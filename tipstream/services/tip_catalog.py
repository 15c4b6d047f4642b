"""Static tip tier catalog."""

from collections.abc import Sequence

from tipstream.models.tips import DEFAULT_CURRENCY, DEFAULT_THEME, TipTheme, TipTier, TipTierSet

FUN_TIERS: list[TipTier] = [
    TipTier(
        id="fun-spark", theme="fun", amount=0.5, emoji="✨", name="Spark", perk="You lit the flame!"
    ),
    TipTier(
        id="fun-coffee-shot",
        theme="fun",
        amount=1,
        emoji="☕️",
        name="Coffee Shot",
        perk="Added to supporter ticker",
    ),
    TipTier(
        id="fun-pixel-boost",
        theme="fun",
        amount=2,
        emoji="🧩",
        name="Pixel Boost",
        perk="Visual upgrade boost",
    ),
    TipTier(
        id="fun-epic-drop", theme="fun", amount=5, emoji="🎁", name="Epic Drop", perk="Bronze badge"
    ),
    TipTier(
        id="fun-stream-fuel",
        theme="fun",
        amount=10,
        emoji="⛽️",
        name="Stream Fuel",
        perk="Silver badge",
    ),
    TipTier(
        id="fun-golden-flame",
        theme="fun",
        amount=25,
        emoji="🔥",
        name="Golden Flame",
        perk="Exclusive emote/unlock",
    ),
    TipTier(
        id="fun-boss-tip",
        theme="fun",
        amount=50,
        emoji="💀",
        name="Boss Tip",
        perk="Leaderboard highlight",
    ),
    TipTier(
        id="fun-stream-champion",
        theme="fun",
        amount=100,
        emoji="👑",
        name="Stream Champion",
        perk="Animated crown badge",
    ),
    TipTier(
        id="fun-ascended-gifter",
        theme="fun",
        amount=250,
        emoji="🕊️",
        name="Ascended Gifter",
        perk="Custom shoutout / premium role",
    ),
]

# Themes with a dedicated tier set; everything else borrows FALLBACK_THEME.
THEME_TIERS: dict[TipTheme, list[TipTier]] = {
    "fun": FUN_TIERS,
}
FALLBACK_THEME: TipTheme = "fun"


def get_base_tier_set(theme: TipTheme, currency: str) -> TipTierSet:
    """Look up the static tiers for a theme, echoing the requested theme."""
    tiers = THEME_TIERS.get(theme, THEME_TIERS[FALLBACK_THEME])
    return TipTierSet(theme=theme, currency=currency, tiers=list(tiers))


def suggest_example_tips(
    stream_id: str | None = None,
    creator_id: str | None = None,
    theme: TipTheme | None = None,
    currency: str | None = None,
) -> TipTierSet:
    """Suggested tiers for a stream; stream and creator are accepted for future targeting."""
    return get_base_tier_set(theme or DEFAULT_THEME, currency or DEFAULT_CURRENCY)


def filter_tiers_by_amount(
    tiers: Sequence[TipTier],
    min_amount: float | None = None,
    max_amount: float | None = None,
) -> list[TipTier]:
    """Keep tiers priced within ``[min_amount, max_amount]``.

    Returns the unfiltered tiers when nothing matches.
    """
    filtered = [
        tier
        for tier in tiers
        if (min_amount is None or tier.amount >= min_amount)
        and (max_amount is None or tier.amount <= max_amount)
    ]
    return filtered if filtered else list(tiers)
