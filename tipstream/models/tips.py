"""Data models for tip tiers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

TipTheme = Literal[
    "fun",
    "fantasy",
    "sci-fi",
    "gaming",
    "retro",
    "space",
    "nature",
    "food",
    "music",
    "crypto",
]

DEFAULT_THEME: TipTheme = "fun"
DEFAULT_CURRENCY = "EUR"


@dataclass(frozen=True)
class TipTier:
    """A priced reward level offered to viewers.

    ``amount`` is in major currency units (0.5 == 0.50 EUR).
    """

    id: str
    theme: TipTheme
    amount: float
    emoji: str
    name: str
    perk: str
    min_amount: float | None = None
    max_amount: float | None = None


@dataclass(frozen=True)
class TipTierSet:
    """Tiers suggested for one theme and currency."""

    theme: TipTheme
    currency: str
    tiers: list[TipTier] = field(default_factory=list)
