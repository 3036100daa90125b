"""Top-N intention ranking per domain."""

from __future__ import annotations

import logging
import re
from collections import Counter, defaultdict
from typing import Iterable, Optional

from intention_engine.clustering import DEFAULT_THRESHOLD, IntentionCluster, cluster_intentions
from intention_engine.lemmatizers import Lemmatizer
from intention_engine.normalizer import clean_text
from intention_engine.schema import INTENTION_SUBMITTED, EventRecord, IntentionVariant, TopIntention

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5

_WHITESPACE = re.compile(r"\s+")


def light_normalize(text: str) -> str:
    """Lowercase and collapse whitespace, keeping punctuation."""

    return _WHITESPACE.sub(" ", text.lower()).strip()


def count_intentions(
    events: Iterable[EventRecord], from_timestamp: Optional[int] = None
) -> dict[str, Counter]:
    """Count submitted intention texts per domain, optionally from a cutoff on."""

    counts: dict[str, Counter] = defaultdict(Counter)
    for event in events:
        if event.type != INTENTION_SUBMITTED or not isinstance(event.intention, str):
            continue
        if not isinstance(event.domain, str) or not event.domain:
            continue
        if from_timestamp is not None:
            if not isinstance(event.timestamp, (int, float)) or event.timestamp < from_timestamp:
                continue
        text = light_normalize(event.intention)
        if not clean_text(text):
            continue
        counts[event.domain][text] += 1
    return dict(counts)


def rank_clusters(clusters: Iterable[IntentionCluster], limit: int = DEFAULT_LIMIT) -> list[TopIntention]:
    """Sort clusters by total and representative, truncate, and emit sorted variants."""

    if limit <= 0:
        return []
    ranked = sorted(clusters, key=lambda cluster: (-cluster.total, cluster.representative))[:limit]
    return [
        TopIntention(
            text=cluster.representative,
            count=cluster.total,
            variants=[
                IntentionVariant(text=text, count=count)
                for text, count in sorted(cluster.variants.items(), key=lambda item: (-item[1], item[0]))
            ],
        )
        for cluster in ranked
    ]


def aggregate_top_intentions(
    events: Iterable[EventRecord],
    limit: int = DEFAULT_LIMIT,
    from_timestamp: Optional[int] = None,
    lemmatizer: Optional[Lemmatizer] = None,
    threshold: float = DEFAULT_THRESHOLD,
) -> dict[str, list[TopIntention]]:
    """Cluster near-duplicate intentions per domain and return the top ``limit`` of each."""

    result: dict[str, list[TopIntention]] = {}
    for domain, counter in count_intentions(events, from_timestamp).items():
        clusters = cluster_intentions(counter.items(), lemmatizer=lemmatizer, threshold=threshold)
        logger.debug("Domain %s: %d distinct intentions in %d clusters", domain, len(counter), len(clusters))
        result[domain] = rank_clusters(clusters, limit)
    return result
