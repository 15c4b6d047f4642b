"""Data models shared by the tipstream services and routers."""

from .analytics import (
    LeaderboardEntry,
    LeaderboardQuery,
    LeaderboardScope,
    PaymentAnalyticsSnapshot,
    PaymentEventCounts,
    PaymentTotals,
    TimeBucket,
)
from .events import SupportEvent
from .tips import TipTheme, TipTier, TipTierSet

__all__ = [
    "LeaderboardEntry",
    "LeaderboardQuery",
    "LeaderboardScope",
    "PaymentAnalyticsSnapshot",
    "PaymentEventCounts",
    "PaymentTotals",
    "SupportEvent",
    "TimeBucket",
    "TipTheme",
    "TipTier",
    "TipTierSet",
]
