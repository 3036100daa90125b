"""Demo script for intention-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from intention_engine.adapters.json_adapter import parse
from intention_engine.analytics import aggregate_daily_counts, aggregate_top_intentions
from intention_engine.insights import no_intention_rates, range_days


def main() -> None:
    events = parse(str(Path(__file__).with_name("sample_events.json")))
    daily = aggregate_daily_counts(events)
    top = aggregate_top_intentions(events, limit=3)

    for domain in sorted(daily):
        print(domain)
        for day in daily[domain]:
            print("  ", day)
        for item in top.get(domain, []):
            variants = ", ".join(f"{v.text!r} x{v.count}" for v in item.variants)
            print(f"   top: {item.text!r} ({item.count}) <- {variants}")

    days = range_days("all", events)
    for rate in no_intention_rates(daily, sorted(daily), days):
        print(f"{rate.domain}: {rate.rate}% of overlays closed without an intention")


if __name__ == "__main__":
    main()
