"""CSV adapter for browsing event logs."""

from __future__ import annotations

import csv
from datetime import datetime

from intention_engine.domains import normalize_hostname
from intention_engine.schema import EVENT_TYPES, EventRecord

_REQUIRED_FIELDS = ("type", "domain", "timestamp")


def _parse_timestamp(raw: str, row_number: int) -> int:
    text = raw.strip()
    try:
        if text.lstrip("-").isdigit():
            return int(text)
        return int(datetime.fromisoformat(text).timestamp() * 1000)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: malformed timestamp") from exc


def _optional_int(row: dict, column: str, row_number: int):
    raw = row.get(column)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Row {row_number}: invalid {column}") from exc


def _parse_row(row: dict, row_number: int) -> EventRecord:
    missing = [field for field in _REQUIRED_FIELDS if not (row.get(field) or "").strip()]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    event_type = row["type"].strip()
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Row {row_number}: invalid type '{event_type}'")

    domain = normalize_hostname(row["domain"])
    if domain is None:
        raise ValueError(f"Row {row_number}: invalid domain '{row['domain']}'")

    intention = row.get("intention")

    return EventRecord(
        type=event_type,
        domain=domain,
        timestamp=_parse_timestamp(row["timestamp"], row_number),
        intention=intention if intention else None,
        tab_id=_optional_int(row, "tab_id", row_number),
        minutes=_optional_int(row, "minutes", row_number),
    )


def parse(file_path: str) -> list[EventRecord]:
    """Parse a CSV event log into event records."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        events: list[EventRecord] = []
        for row_number, row in enumerate(reader, start=2):
            events.append(_parse_row(row, row_number))
        return events
