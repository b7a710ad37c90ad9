"""
Pure aggregation over click events.

No I/O: every query path fetches records, pools their events and hands
them to these functions, so per-alias, per-topic and overall numbers are
computed the same way.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Set

from linkstat_app.schemas.analytics import DateBucket, FieldGroup
from linkstat_app.schemas.records import UNKNOWN, AnalyticsEvent, UrlRecord


def bucket_by_recent_days(
    events: Iterable[AnalyticsEvent],
    n: int = 7,
    today: Optional[date] = None,
) -> List[DateBucket]:
    """
    Count events per calendar day for the ``n`` days ending ``today``.

    Buckets are oldest first and always ``n`` long; empty days count 0.
    An event belongs to a day when its timestamp starts with that day's
    ``YYYY-MM-DD``, without any timezone conversion.
    """
    if n < 1:
        raise ValueError("n must be at least 1")
    if today is None:
        today = datetime.now(timezone.utc).date()

    days = [(today - timedelta(days=offset)).isoformat() for offset in range(n - 1, -1, -1)]
    counts: Dict[str, int] = dict.fromkeys(days, 0)

    for event in events:
        day = event.timestamp[:10]
        if day in counts:
            counts[day] += 1

    return [DateBucket(date=day, count=counts[day]) for day in days]


def group_by_field(events: Iterable[AnalyticsEvent], field: str) -> List[FieldGroup]:
    """
    Group events by ``field`` (e.g. ``"os"``, ``"device"``).

    Missing or empty values fall into ``"Unknown"``. Groups are sorted by
    clicks, highest first, then by value.
    """
    clicks: Dict[str, int] = defaultdict(int)
    users: Dict[str, Set[str]] = defaultdict(set)

    for event in events:
        value = getattr(event, field, None) or UNKNOWN
        clicks[value] += 1
        users[value].add(event.ip)

    groups = [
        FieldGroup(value=value, unique_clicks=count, unique_users=len(users[value]))
        for value, count in clicks.items()
    ]
    groups.sort(key=lambda group: (-group.unique_clicks, group.value))
    return groups


def unique_user_count(events: Iterable[AnalyticsEvent]) -> int:
    return len({event.ip for event in events})


def pool_events(records: Sequence[UrlRecord]) -> List[AnalyticsEvent]:
    """All click events of ``records``, record by record, each in its own order"""
    pooled: List[AnalyticsEvent] = []
    for record in records:
        pooled.extend(record.click_events)
    return pooled
