"""Support event records fed into analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any


@dataclass(frozen=True)
class SupportEvent:
    """A single viewer support event (tip, redemption or web-monetization payment).

    ``occurred_at`` is kept as supplied; it is only parsed when aggregated so
    that malformed timestamps can be skipped instead of rejected. ``kind`` is
    normally web-monetization, tip or redemption; other values are tolerated.
    """

    occurred_at: str | datetime | None
    kind: str
    amount_minor: int | None = None
    currency: str | None = None
    viewer_external_id: str | None = None
    id: str | None = None
    stream_id: str | None = None
    duration_seconds: int | None = None
    metadata: dict[str, Any] | None = field(default=None, compare=False)


def parse_occurred_at(value: str | datetime | None) -> datetime | None:
    """Parse an event timestamp into an aware UTC datetime.

    Accepts ISO-8601 and RFC 2822 (``Mon, 01 Jan 2024 12:00:00 GMT``) strings.
    Returns None for anything else, including instants that cannot be
    represented in UTC. Naive values are read as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError):
                return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # offset pushes the instant past datetime.min/max; outside every window
        return None


def to_iso(value: datetime) -> str:
    """Render a datetime as a UTC ISO string with millisecond precision."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
