"""JSON adapter for browsing event logs."""

from __future__ import annotations

import json
from datetime import datetime

from intention_engine.domains import normalize_hostname
from intention_engine.schema import EVENT_TYPES, EventRecord

_REQUIRED_FIELDS = ("type", "domain", "timestamp")


def _parse_timestamp(raw, index: int) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"Item {index}: malformed timestamp")
    if isinstance(raw, (int, float)):
        return int(raw)
    try:
        text = str(raw).strip()
        if text.lstrip("-").isdigit():
            return int(text)
        # ISO strings without an offset are read as local time.
        return int(datetime.fromisoformat(text).timestamp() * 1000)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Item {index}: malformed timestamp") from exc


def _optional_int(item: dict, keys: tuple[str, ...], index: int):
    for key in keys:
        raw = item.get(key)
        if raw is None or raw == "":
            continue
        try:
            return int(raw)
        except Exception as exc:  # noqa: BLE001
            raise ValueError(f"Item {index}: invalid {key}") from exc
    return None


def _parse_item(item: dict, index: int) -> EventRecord:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    missing = [field for field in _REQUIRED_FIELDS if item.get(field) in (None, "")]
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    event_type = str(item["type"]).strip()
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Item {index}: invalid type '{event_type}'")

    domain = normalize_hostname(str(item["domain"]))
    if domain is None:
        raise ValueError(f"Item {index}: invalid domain '{item['domain']}'")

    intention = item.get("intention")

    return EventRecord(
        type=event_type,
        domain=domain,
        timestamp=_parse_timestamp(item["timestamp"], index),
        intention=str(intention) if intention is not None else None,
        tab_id=_optional_int(item, ("tabId", "tab_id"), index),
        minutes=_optional_int(item, ("minutes",), index),
    )


def parse(file_path: str) -> list[EventRecord]:
    """Parse a JSON event log into event records."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict) and "events" in payload:
        payload = payload["events"]
    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
