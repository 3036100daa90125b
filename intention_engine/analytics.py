"""Public analytics entry points and JSON report builder."""

from __future__ import annotations

from dataclasses import asdict
from typing import Optional, Sequence, TypeVar

from intention_engine.buckets import aggregate_daily_counts, aggregate_hourly_counts
from intention_engine.config import EngineSettings
from intention_engine.lemmatizers import Lemmatizer
from intention_engine.ranking import aggregate_top_intentions
from intention_engine.schema import EventRecord

__all__ = [
    "aggregate_daily_counts",
    "aggregate_hourly_counts",
    "aggregate_top_intentions",
    "build_report",
    "counts_for",
]

T = TypeVar("T")


def counts_for(result: dict[str, list[T]], domain: str) -> list[T]:
    """Read one domain from an aggregation result; unknown domains have no data."""

    return list(result.get(domain, []))


def build_report(
    events: Sequence[EventRecord],
    settings: Optional[EngineSettings] = None,
    lemmatizer: Optional[Lemmatizer] = None,
) -> dict:
    """Run every aggregation and return a JSON-serialisable report."""

    settings = settings or EngineSettings()
    daily = aggregate_daily_counts(events, tz=settings.tz)
    hourly = aggregate_hourly_counts(events, tz=settings.tz)
    top = aggregate_top_intentions(
        events,
        limit=settings.top_limit,
        from_timestamp=settings.from_timestamp,
        lemmatizer=lemmatizer,
        threshold=settings.similarity_threshold,
    )

    return {
        "n_events": len(events),
        "domains": sorted(set(daily) | set(top)),
        "daily": {domain: [asdict(day) for day in days] for domain, days in sorted(daily.items())},
        "hourly": {domain: [asdict(hour) for hour in hours] for domain, hours in sorted(hourly.items())},
        "top_intentions": {domain: [item.to_dict() for item in items] for domain, items in sorted(top.items())},
    }
