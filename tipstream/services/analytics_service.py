"""Payment analytics over in-memory support events.

Everything here is a pure function of its arguments: callers fetch the
events (already scoped to a stream or creator if they want that) and pass
a reference ``now`` when they need deterministic output.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from tipstream.models.analytics import (
    LeaderboardEntry,
    LeaderboardQuery,
    PaymentAnalyticsSnapshot,
    PaymentEventCounts,
    PaymentTotals,
    TimeBucket,
)
from tipstream.models.events import SupportEvent, parse_occurred_at

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DEFAULT_CURRENCY = "USD"

HOUR = timedelta(hours=1)
DAY = timedelta(days=1)

# timeframe -> (lookback, bucket size); a lookback of None means "since epoch"
TIMEFRAME_WINDOWS: dict[str, tuple[timedelta | None, timedelta]] = {
    "last_24h": (timedelta(hours=24), HOUR),
    "last_7d": (timedelta(days=7), DAY),
    "last_30d": (timedelta(days=30), DAY),
    "all_time": (None, DAY),
}


def resolve_window(timeframe: str, now: datetime) -> tuple[datetime, timedelta]:
    """Return ``(window_start, bucket_size)`` for a timeframe.

    Unknown timeframes use the ``all_time`` policy.
    """
    lookback, bucket_size = TIMEFRAME_WINDOWS.get(timeframe, TIMEFRAME_WINDOWS["all_time"])
    if lookback is None:
        return EPOCH, bucket_size
    return now - lookback, bucket_size


def infer_currency(events: Iterable[SupportEvent]) -> str | None:
    """First non-empty currency in event order."""
    for event in events:
        if event.currency:
            return event.currency
    return None


def _utc_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def compute_payment_analytics(
    events: Iterable[SupportEvent],
    timeframe: str,
    stream_id: str | None = None,
    creator_id: str | None = None,
    now: datetime | None = None,
) -> PaymentAnalyticsSnapshot:
    """Aggregate support events into a payment analytics snapshot.

    Events outside ``[window_start, now]`` or with unparseable timestamps are
    dropped. Unknown kinds count toward ``total_events`` only. The input is
    never mutated and nothing is raised for malformed events.
    """
    now = _utc_now(now)
    window_start, bucket_size = resolve_window(timeframe, now)

    in_window: list[tuple[SupportEvent, datetime]] = []
    for event in events:
        occurred = parse_occurred_at(event.occurred_at)
        if occurred is not None and window_start <= occurred <= now:
            in_window.append((event, occurred))

    total_events = 0
    web_monetization_events = 0
    tip_events = 0
    redemption_events = 0
    total_amount_minor = 0
    supporters: set[str] = set()
    # bucket index -> [amount, count]
    buckets: dict[int, list[int]] = {}

    for event, occurred in in_window:
        total_events += 1
        if event.kind == "web-monetization":
            web_monetization_events += 1
        elif event.kind == "tip":
            tip_events += 1
        elif event.kind == "redemption":
            redemption_events += 1

        amount = event.amount_minor if event.amount_minor is not None else 0
        total_amount_minor += amount

        if event.viewer_external_id:
            supporters.add(event.viewer_external_id)

        if bucket_size > timedelta(0):
            index = (occurred - window_start) // bucket_size
            bucket = buckets.setdefault(index, [0, 0])
            bucket[0] += amount
            bucket[1] += 1

    rollups = tuple(
        TimeBucket(
            start=window_start + index * bucket_size,
            end=window_start + (index + 1) * bucket_size,
            total_amount_minor=amount,
            event_count=count,
        )
        for index, (amount, count) in sorted(buckets.items())
    )

    logger.debug(
        f"Payment analytics ({timeframe}): {total_events} events in window, "
        f"{len(rollups)} buckets"
    )

    return PaymentAnalyticsSnapshot(
        timeframe=timeframe,
        stream_id=stream_id,
        creator_id=creator_id,
        counts=PaymentEventCounts(
            total_events=total_events,
            web_monetization_events=web_monetization_events,
            tip_events=tip_events,
            redemption_events=redemption_events,
        ),
        totals=PaymentTotals(
            total_amount_minor=total_amount_minor,
            currency=infer_currency(event for event, _ in in_window) or DEFAULT_CURRENCY,
            unique_supporters=len(supporters),
        ),
        buckets=rollups or None,
    )


@dataclass
class _SupporterTotals:
    """Running totals for one leaderboard row."""

    amount_minor: int = 0
    duration_seconds: int | None = None
    currency: str | None = None


def compute_leaderboard(
    events: Iterable[SupportEvent], query: LeaderboardQuery
) -> list[LeaderboardEntry]:
    """Rank supporters by total amount given.

    ``per-stream`` groups by (stream, supporter) and, when ``query.stream_id``
    is set, only looks at that stream. ``all-time`` groups by supporter across
    streams. Ties break on supported duration, then supporter id.
    """
    totals: dict[tuple[str, str], _SupporterTotals] = {}

    for event in events:
        if not event.viewer_external_id:
            continue
        if query.currency and event.currency != query.currency:
            continue

        if query.scope == "all-time":
            stream_key = "all"
        else:
            if query.stream_id and event.stream_id != query.stream_id:
                continue
            stream_key = event.stream_id or query.stream_id or ""

        row = totals.setdefault((stream_key, event.viewer_external_id), _SupporterTotals())
        if event.amount_minor is not None:
            row.amount_minor += event.amount_minor
        if event.duration_seconds is not None:
            row.duration_seconds = (row.duration_seconds or 0) + event.duration_seconds
        if row.currency is None and event.currency:
            row.currency = event.currency

    ranked = sorted(
        totals.items(),
        key=lambda item: (-item[1].amount_minor, -(item[1].duration_seconds or 0), item[0][1]),
    )

    return [
        LeaderboardEntry(
            stream_id=stream_key,
            viewer_external_id=viewer_id,
            total_amount_minor=row.amount_minor,
            currency=row.currency or query.currency or DEFAULT_CURRENCY,
            total_duration_seconds=row.duration_seconds,
            rank=position,
        )
        for position, ((stream_key, viewer_id), row) in enumerate(
            ranked[: max(query.limit, 0)], start=1
        )
    ]
