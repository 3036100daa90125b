"""Build an intention analytics report from a CSV/JSON event log."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from intention_engine.adapters import csv_adapter, json_adapter
from intention_engine.analytics import build_report
from intention_engine.config import EngineSettings, parse_tz

logger = logging.getLogger("intention_engine.report")


def _load_events(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _parse_since(value: str) -> int:
    text = value.strip()
    if text.isdigit():
        return int(text)
    try:
        return int(datetime.fromisoformat(text).timestamp() * 1000)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid --since value '{value}'") from exc


def _settings_from_args(args: argparse.Namespace) -> EngineSettings:
    settings = EngineSettings.from_env()
    overrides = {}
    if args.limit is not None:
        overrides["top_limit"] = args.limit
    if args.threshold is not None:
        overrides["similarity_threshold"] = args.threshold
    if args.since is not None:
        overrides["from_timestamp"] = args.since
    if args.tz is not None:
        overrides["tz"] = parse_tz(args.tz)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level.upper()
    return replace(settings, **overrides)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Aggregate intention-gate events into a report")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON events file")
    parser.add_argument("--limit", type=int, help="Top intentions per domain (default 5)")
    parser.add_argument("--threshold", type=float, help="Similarity threshold for merging intentions")
    parser.add_argument("--since", type=_parse_since, help="Only rank intentions from this ISO date or epoch ms")
    parser.add_argument("--tz", choices=["local", "utc"], help="Timezone used for day/hour buckets")
    parser.add_argument("--log-level", help="Logging level (default WARNING)")
    parser.add_argument("--out", help="Also write the report to this path")
    args = parser.parse_args(argv)

    try:
        settings = _settings_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        events = _load_events(Path(args.data))
    except (OSError, ValueError) as exc:
        logger.error("Could not load events from %s: %s", args.data, exc)
        return 1

    logger.info("Loaded %d events from %s", len(events), args.data)
    report = build_report(events, settings)
    text = json.dumps(report, indent=2, ensure_ascii=False)
    print(text)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logger.info("Saved report to %s", out_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
