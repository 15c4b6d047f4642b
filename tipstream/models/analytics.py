"""Data models for payment analytics snapshots and leaderboards."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

LeaderboardScope = Literal["per-stream", "all-time"]


@dataclass(frozen=True)
class PaymentEventCounts:
    """Event counts per support kind."""

    total_events: int = 0
    web_monetization_events: int = 0
    tip_events: int = 0
    redemption_events: int = 0


@dataclass(frozen=True)
class PaymentTotals:
    """Summed amounts and supporter count for a window."""

    total_amount_minor: int
    currency: str
    unique_supporters: int


@dataclass(frozen=True)
class TimeBucket:
    """Rollup for ``[start, end)``."""

    start: datetime
    end: datetime
    total_amount_minor: int
    event_count: int


@dataclass(frozen=True)
class PaymentAnalyticsSnapshot:
    """Aggregated payment analytics for one timeframe."""

    timeframe: str
    counts: PaymentEventCounts
    totals: PaymentTotals
    stream_id: str | None = None
    creator_id: str | None = None
    buckets: tuple[TimeBucket, ...] | None = None


@dataclass(frozen=True)
class LeaderboardQuery:
    scope: LeaderboardScope = "per-stream"
    stream_id: str | None = None
    creator_id: str | None = None
    currency: str | None = None
    limit: int = 10


@dataclass(frozen=True)
class LeaderboardEntry:
    stream_id: str
    viewer_external_id: str
    total_amount_minor: int
    currency: str
    total_duration_seconds: int | None = None
    rank: int | None = None
