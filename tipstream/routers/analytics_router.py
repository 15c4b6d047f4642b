"""Payment analytics API routes"""

import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tipstream.models.analytics import (
    LeaderboardEntry,
    LeaderboardQuery,
    LeaderboardScope,
    PaymentAnalyticsSnapshot,
)
from tipstream.models.events import SupportEvent, to_iso
from tipstream.services import compute_leaderboard, compute_payment_analytics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


# ============================================
# Request / Response Models
# ============================================


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SupportEventIn(CamelModel):
    occurred_at: str | None = None
    kind: str
    amount_minor: int | None = None
    currency: str | None = None
    viewer_external_id: str | None = None
    id: str | None = None
    stream_id: str | None = None
    duration_seconds: int | None = None
    metadata: dict[str, Any] | None = None

    def to_event(self) -> SupportEvent:
        return SupportEvent(**self.model_dump())


class PaymentAnalyticsRequest(CamelModel):
    events: list[SupportEventIn] = Field(default_factory=list)
    # Unknown values fall back to the all_time window
    timeframe: str = "all_time"
    stream_id: str | None = None
    creator_id: str | None = None
    now: datetime | None = None


class PaymentEventCountsOut(CamelModel):
    total_events: int
    web_monetization_events: int
    tip_events: int
    redemption_events: int


class PaymentTotalsOut(CamelModel):
    total_amount_minor: int
    currency: str
    unique_supporters: int


class TimeBucketOut(CamelModel):
    start: str
    end: str
    total_amount_minor: int
    event_count: int


class PaymentAnalyticsResponse(CamelModel):
    stream_id: str | None = None
    creator_id: str | None = None
    timeframe: str
    counts: PaymentEventCountsOut
    totals: PaymentTotalsOut
    buckets: list[TimeBucketOut] | None = None

    @classmethod
    def from_snapshot(cls, snapshot: PaymentAnalyticsSnapshot) -> "PaymentAnalyticsResponse":
        buckets = None
        if snapshot.buckets:
            buckets = [
                TimeBucketOut(
                    start=to_iso(bucket.start),
                    end=to_iso(bucket.end),
                    total_amount_minor=bucket.total_amount_minor,
                    event_count=bucket.event_count,
                )
                for bucket in snapshot.buckets
            ]

        return cls(
            stream_id=snapshot.stream_id,
            creator_id=snapshot.creator_id,
            timeframe=snapshot.timeframe,
            counts=PaymentEventCountsOut(
                total_events=snapshot.counts.total_events,
                web_monetization_events=snapshot.counts.web_monetization_events,
                tip_events=snapshot.counts.tip_events,
                redemption_events=snapshot.counts.redemption_events,
            ),
            totals=PaymentTotalsOut(
                total_amount_minor=snapshot.totals.total_amount_minor,
                currency=snapshot.totals.currency,
                unique_supporters=snapshot.totals.unique_supporters,
            ),
            buckets=buckets,
        )


class LeaderboardRequest(CamelModel):
    events: list[SupportEventIn] = Field(default_factory=list)
    scope: LeaderboardScope = "per-stream"
    stream_id: str | None = None
    creator_id: str | None = None
    currency: str | None = None
    limit: int = Field(default=10, ge=1, le=100)


class LeaderboardEntryOut(CamelModel):
    stream_id: str
    viewer_external_id: str
    total_amount_minor: int
    currency: str
    total_duration_seconds: int | None = None
    rank: int | None = None

    @classmethod
    def from_entry(cls, entry: LeaderboardEntry) -> "LeaderboardEntryOut":
        return cls(
            stream_id=entry.stream_id,
            viewer_external_id=entry.viewer_external_id,
            total_amount_minor=entry.total_amount_minor,
            currency=entry.currency,
            total_duration_seconds=entry.total_duration_seconds,
            rank=entry.rank,
        )


class LeaderboardResponse(CamelModel):
    entries: list[LeaderboardEntryOut]


# ============================================
# Endpoints
# ============================================


@router.post(
    "/payments", response_model=PaymentAnalyticsResponse, response_model_exclude_none=True
)
async def get_payment_analytics(body: PaymentAnalyticsRequest) -> PaymentAnalyticsResponse:
    """
    Aggregate support events into a payment analytics snapshot

    Args:
        timeframe: last_24h, last_7d, last_30d or all_time
        now: Reference time (default: current time)
    """
    try:
        snapshot = compute_payment_analytics(
            [event.to_event() for event in body.events],
            body.timeframe,
            stream_id=body.stream_id,
            creator_id=body.creator_id,
            now=body.now,
        )

        logger.info(
            f"Payment analytics requested (stream={body.stream_id}, timeframe={body.timeframe}, "
            f"events={len(body.events)})"
        )
        return PaymentAnalyticsResponse.from_snapshot(snapshot)

    except Exception as e:
        logger.exception(f"Failed to compute payment analytics: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute analytics") from None


@router.post("/leaderboard", response_model=LeaderboardResponse, response_model_exclude_none=True)
async def get_leaderboard(body: LeaderboardRequest) -> LeaderboardResponse:
    """
    Rank supporters by total amount

    Args:
        scope: per-stream or all-time
        limit: Maximum number of entries to return (default: 10)
    """
    try:
        query = LeaderboardQuery(
            scope=body.scope,
            stream_id=body.stream_id,
            creator_id=body.creator_id,
            currency=body.currency,
            limit=body.limit,
        )
        entries = compute_leaderboard([event.to_event() for event in body.events], query)

        logger.info(f"Leaderboard requested (scope={body.scope}, stream={body.stream_id})")
        return LeaderboardResponse(entries=[LeaderboardEntryOut.from_entry(e) for e in entries])

    except Exception as e:
        logger.exception(f"Failed to compute leaderboard: {e}")
        raise HTTPException(status_code=500, detail="Failed to compute leaderboard") from None
