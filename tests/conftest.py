from datetime import datetime, timezone

import pytest


class DictLemmatizer:
    """Deterministic lemmatizer backed by per-part-of-speech lookup tables."""

    def __init__(self, verbs=None, nouns=None, adjectives=None):
        self.tables = {"verb": verbs or {}, "noun": nouns or {}, "adjective": adjectives or {}}

    def lemmatize_as(self, part_of_speech, token):
        return self.tables.get(part_of_speech, {}).get(token)


@pytest.fixture
def lemmatizer():
    return DictLemmatizer(
        verbs={"checking": "check", "checked": "check", "reading": "read", "watching": "watch", "buying": "buy"},
        nouns={"emails": "email", "groceries": "grocery", "tutorials": "tutorial", "news": "news"},
        adjectives={"better": "good"},
    )


def ms(iso: str) -> int:
    """Epoch milliseconds for a naive ISO string interpreted as UTC."""

    return int(datetime.fromisoformat(iso).replace(tzinfo=timezone.utc).timestamp() * 1000)
