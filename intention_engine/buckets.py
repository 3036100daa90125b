"""Per-domain daily and hourly event counters."""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Callable, Iterable, Optional, TypeVar, Union

from intention_engine.schema import (
    INTENTION_SUBMITTED,
    OVERLAY_SHOWN,
    DailyDomainCounts,
    EventRecord,
    HourlyDomainCounts,
)

logger = logging.getLogger(__name__)

_COUNTED_TYPES = (OVERLAY_SHOWN, INTENTION_SUBMITTED)

Bucket = TypeVar("Bucket", DailyDomainCounts, HourlyDomainCounts)


def _to_local(timestamp_ms, tz: Optional[tzinfo]) -> Optional[datetime]:
    # tz=None converts with the process's local timezone.
    if isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=tz)
    except (OverflowError, OSError, ValueError):
        return None


def local_date_key(timestamp_ms: Union[int, float], tz: Optional[tzinfo] = None) -> Optional[str]:
    """Return the ``YYYY-MM-DD`` key of the local calendar day, or None if unusable."""

    moment = _to_local(timestamp_ms, tz)
    if moment is None:
        return None
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"


def local_hour_key(timestamp_ms: Union[int, float], tz: Optional[tzinfo] = None) -> Optional[str]:
    """Return the ``YYYY-MM-DD HH:00`` key of the local calendar hour, or None if unusable."""

    moment = _to_local(timestamp_ms, tz)
    if moment is None:
        return None
    return f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} {moment.hour:02d}:00"


def canonical_order(events: Iterable[EventRecord]) -> list[EventRecord]:
    """Sort events by ascending timestamp, keeping supplied order for ties.

    Events with a non-numeric timestamp go last, in their original order.
    """

    def sort_key(event: EventRecord):
        stamp = event.timestamp
        if isinstance(stamp, bool) or not isinstance(stamp, (int, float)):
            return (1, 0)
        return (0, stamp)

    return sorted(events, key=sort_key)


def _apply(bucket: Bucket, event_type: str) -> None:
    if event_type == OVERLAY_SHOWN:
        bucket.overlay_shown += 1
        bucket.no_intention += 1
    else:
        bucket.intention_submitted += 1
        bucket.no_intention = max(0, bucket.no_intention - 1)


def _aggregate(
    events: Iterable[EventRecord],
    key_fn: Callable[[Union[int, float], Optional[tzinfo]], Optional[str]],
    factory: Callable[[str], Bucket],
    tz: Optional[tzinfo],
) -> dict[str, list[Bucket]]:
    by_domain: dict[str, dict[str, Bucket]] = {}
    skipped = 0

    for event in canonical_order(events):
        if event.type not in _COUNTED_TYPES:
            continue
        if not isinstance(event.domain, str) or not event.domain:
            skipped += 1
            continue
        key = key_fn(event.timestamp, tz)
        if key is None:
            skipped += 1
            continue

        buckets = by_domain.setdefault(event.domain, {})
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = factory(key)
        _apply(bucket, event.type)

    if skipped:
        logger.debug("Skipped %d events with malformed domain or timestamp", skipped)

    return {domain: [buckets[key] for key in sorted(buckets)] for domain, buckets in by_domain.items()}


def aggregate_daily_counts(
    events: Iterable[EventRecord], tz: Optional[tzinfo] = None
) -> dict[str, list[DailyDomainCounts]]:
    """Count overlay and intention events per domain and local calendar day."""

    return _aggregate(events, local_date_key, DailyDomainCounts, tz)


def aggregate_hourly_counts(
    events: Iterable[EventRecord], tz: Optional[tzinfo] = None
) -> dict[str, list[HourlyDomainCounts]]:
    """Count overlay and intention events per domain and local calendar hour."""

    return _aggregate(events, local_hour_key, HourlyDomainCounts, tz)
