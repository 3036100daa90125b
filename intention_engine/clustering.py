"""Greedy clustering of near-duplicate intention texts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from intention_engine.lemmatizers import Lemmatizer, default_lemmatizer
from intention_engine.normalizer import normalize_for_similarity

DEFAULT_THRESHOLD = 0.4


@dataclass
class IntentionCluster:
    """Near-duplicate intentions of one domain, labelled by a representative."""

    representative: str
    rep_count: int
    rep_tokens: frozenset[str]
    total: int
    variants: dict[str, int] = field(default_factory=dict)

    def add(self, text: str, count: int, tokens: frozenset[str]) -> None:
        self.total += count
        self.variants[text] = self.variants.get(text, 0) + count
        if is_better_representative(text, count, self.representative, self.rep_count):
            self.representative = text
            self.rep_count = count
            self.rep_tokens = tokens


def similarity_score(tokens_a: Iterable[str], tokens_b: Iterable[str]) -> float:
    """Score token sets: 1.0 when one contains the other, else their Jaccard index."""

    set_a = frozenset(tokens_a)
    set_b = frozenset(tokens_b)
    if not set_a or not set_b:
        return 0.0
    intersection = len(set_a & set_b)
    if intersection == 0:
        return 0.0
    if set_a <= set_b or set_b <= set_a:
        return 1.0
    return intersection / len(set_a | set_b)


def is_better_representative(candidate: str, candidate_count: int, current: str, current_count: int) -> bool:
    """Longer text wins, then higher count, then the lexicographically smaller text."""

    if len(candidate) != len(current):
        return len(candidate) > len(current)
    if candidate_count != current_count:
        return candidate_count > current_count
    return candidate < current


def canonical_sort(items: Iterable[tuple[str, int]]) -> list[tuple[str, int]]:
    """Order (text, count) pairs by count descending, then text ascending."""

    return sorted(items, key=lambda item: (-item[1], item[0]))


def _best_match(tokens: frozenset[str], clusters: list[IntentionCluster]) -> tuple[int, float]:
    best_index = -1
    best_score = 0.0
    for index, cluster in enumerate(clusters):
        score = similarity_score(tokens, cluster.rep_tokens)
        if score > best_score:
            best_index, best_score = index, score
    return best_index, best_score


def cluster_intentions(
    items: Iterable[tuple[str, int]],
    lemmatizer: Optional[Lemmatizer] = None,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[IntentionCluster]:
    """Assign each distinct text to the most similar existing cluster or a new one.

    Items are processed in canonical order so that the greedy assignment is
    reproducible regardless of how the caller built its collection.
    """

    lemmatizer = lemmatizer if lemmatizer is not None else default_lemmatizer()
    clusters: list[IntentionCluster] = []

    for text, count in canonical_sort(items):
        tokens = frozenset(normalize_for_similarity(text, lemmatizer))
        index, score = _best_match(tokens, clusters)
        if index >= 0 and score >= threshold:
            clusters[index].add(text, count, tokens)
        else:
            clusters.append(
                IntentionCluster(
                    representative=text,
                    rep_count=count,
                    rep_tokens=tokens,
                    total=count,
                    variants={text: count},
                )
            )

    return clusters
