"""Zero-filled time series and rates for the insights view."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from intention_engine.schema import DailyDomainCounts, EventRecord, HourlyDomainCounts

_MS_PER_DAY = 86_400_000

RANGE_OPTIONS = {
    "24h": "Last 24 hours",
    "7d": "Last 7 days",
    "30d": "Last 30 days",
    "3m": "Last 3 months",
    "6m": "Last 6 months",
    "12m": "Last 12 months",
    "all": "All time",
}

_RANGE_DAYS = {"7d": 7, "30d": 30, "3m": 90, "6m": 180, "12m": 365}
DEFAULT_RANGE_DAYS = 30

METRICS = ("opens", "intentions", "no_intention_rate")


@dataclass(frozen=True)
class SeriesPoint:
    key: str
    overlay_shown: int
    intention_submitted: int


@dataclass(frozen=True)
class DomainRate:
    domain: str
    rate: int
    overlay_shown: int
    no_intention: int


def _now(now: Optional[datetime], tz: Optional[tzinfo]) -> datetime:
    if now is None:
        return datetime.now(tz)
    if tz is not None and now.tzinfo is not None:
        return now.astimezone(tz)
    return now


def is_hourly_range(range_id: str) -> bool:
    return range_id == "24h"


def range_days(range_id: str, events: Sequence[EventRecord] = (), now: Optional[datetime] = None) -> int:
    """Number of days covered by a range option.

    ``all`` spans back to the earliest event (at least one day); unknown
    options and empty logs fall back to 30 days.
    """

    if range_id in _RANGE_DAYS:
        return _RANGE_DAYS[range_id]
    if range_id != "all":
        return DEFAULT_RANGE_DAYS

    stamps = [
        event.timestamp
        for event in events
        if isinstance(event.timestamp, (int, float)) and not isinstance(event.timestamp, bool)
    ]
    if not stamps:
        return DEFAULT_RANGE_DAYS
    now_ms = (now or datetime.now()).timestamp() * 1000.0
    return max(1, math.ceil((now_ms - min(stamps)) / _MS_PER_DAY))


def build_date_keys(days: int, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> list[str]:
    """Consecutive ``YYYY-MM-DD`` keys, oldest first, ending with today."""

    today = _now(now, tz).date()
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def build_hour_keys(hours: int, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> list[str]:
    """Consecutive ``YYYY-MM-DD HH:00`` keys, oldest first, ending with the current hour."""

    current = _now(now, tz).replace(minute=0, second=0, microsecond=0)
    keys = []
    for offset in range(hours - 1, -1, -1):
        moment = current - timedelta(hours=offset)
        keys.append(f"{moment:%Y-%m-%d} {moment.hour:02d}:00")
    return keys


def _sum_series(
    keys: list[str],
    by_domain: dict[str, list[Union[DailyDomainCounts, HourlyDomainCounts]]],
    domains: Iterable[str],
    key_attr: str,
) -> list[SeriesPoint]:
    index = {key: row for row, key in enumerate(keys)}
    totals = np.zeros((len(keys), 2), dtype=np.int64)
    for domain in domains:
        for bucket in by_domain.get(domain, []):
            row = index.get(getattr(bucket, key_attr))
            if row is None:
                continue
            totals[row] += (bucket.overlay_shown, bucket.intention_submitted)
    return [
        SeriesPoint(key=key, overlay_shown=int(shown), intention_submitted=int(submitted))
        for key, (shown, submitted) in zip(keys, totals)
    ]


def build_series(
    daily_by_domain: dict[str, list[DailyDomainCounts]],
    domains: Iterable[str],
    days: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> list[SeriesPoint]:
    """Daily totals over the selected domains, zero-filled for the whole range."""

    return _sum_series(build_date_keys(days, now, tz), daily_by_domain, domains, "date")


def build_hourly_series(
    hourly_by_domain: dict[str, list[HourlyDomainCounts]],
    domains: Iterable[str],
    hours: int = 24,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> list[SeriesPoint]:
    """Hourly totals over the selected domains, zero-filled for the whole range."""

    return _sum_series(build_hour_keys(hours, now, tz), hourly_by_domain, domains, "hour")


def metric_values(series: Sequence[SeriesPoint], metric: str) -> np.ndarray:
    """Project a series onto one chart metric."""

    if metric not in METRICS:
        raise ValueError(f"unknown metric '{metric}'")
    shown = np.array([point.overlay_shown for point in series], dtype=float)
    submitted = np.array([point.intention_submitted for point in series], dtype=float)
    if metric == "opens":
        return shown
    if metric == "intentions":
        return submitted
    rates = np.zeros_like(shown)
    np.divide((shown - submitted) * 100.0, shown, out=rates, where=shown > 0)
    return rates


def no_intention_rates(
    daily_by_domain: dict[str, list[DailyDomainCounts]],
    domains: Iterable[str],
    days: int,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> list[DomainRate]:
    """Share of overlays without a submitted intention, per domain, over the range."""

    keys = set(build_date_keys(days, now, tz))
    rates = []
    for domain in domains:
        in_range = [day for day in daily_by_domain.get(domain, []) if day.date in keys]
        shown = sum(day.overlay_shown for day in in_range)
        submitted = sum(day.intention_submitted for day in in_range)
        no_intention = max(0, shown - submitted)
        rate = int(math.floor(no_intention / shown * 100 + 0.5)) if shown > 0 else 0
        rates.append(DomainRate(domain=domain, rate=rate, overlay_shown=shown, no_intention=no_intention))
    return rates
