import itertools

import pytest

from intention_engine.clustering import (
    canonical_sort,
    cluster_intentions,
    is_better_representative,
    similarity_score,
)


def test_similarity_score_branches():
    assert similarity_score([], ["email"]) == 0.0
    assert similarity_score(["read", "news"], ["buy", "grocery"]) == 0.0
    assert similarity_score(["email"], ["check", "my", "email"]) == 1.0
    assert similarity_score(["check", "email"], ["check", "email"]) == 1.0
    assert similarity_score(["a", "b", "c"], ["b", "c", "d"]) == pytest.approx(0.5)
    assert similarity_score(["a", "b", "c"], ["c", "d", "e"]) == pytest.approx(0.2)


def test_similarity_uses_token_sets():
    assert similarity_score(["x", "x", "x"], ["x", "y"]) == 1.0


def test_representative_tie_breaks():
    assert is_better_representative("checking my email", 1, "check email", 9)
    assert not is_better_representative("short", 9, "longer text", 1)
    assert is_better_representative("abc", 3, "xyz", 2)
    assert is_better_representative("abc", 2, "xyz", 2)
    assert not is_better_representative("xyz", 2, "abc", 2)


def test_canonical_sort():
    items = [("b", 1), ("a", 1), ("c", 5)]
    assert canonical_sort(items) == [("c", 5), ("a", 1), ("b", 1)]


def test_check_email_variants_merge(lemmatizer):
    clusters = cluster_intentions([("checking my email", 2), ("check email", 5)], lemmatizer=lemmatizer)
    assert len(clusters) == 1
    cluster = clusters[0]
    assert cluster.total == 7
    assert cluster.representative == "checking my email"
    assert cluster.rep_count == 2
    assert cluster.rep_tokens == frozenset({"check", "my", "email"})
    assert cluster.variants == {"check email": 5, "checking my email": 2}


def test_unrelated_intentions_stay_apart(lemmatizer):
    clusters = cluster_intentions([("read news", 1), ("buy groceries", 1)], lemmatizer=lemmatizer)
    assert sorted(c.representative for c in clusters) == ["buy groceries", "read news"]
    assert all(c.total == 1 for c in clusters)


def test_empty_token_texts_form_singletons(lemmatizer):
    clusters = cluster_intentions([("i want to", 3), ("to the", 2), ("email", 1)], lemmatizer=lemmatizer)
    assert [c.representative for c in clusters] == ["i want to", "to the", "email"]


def test_below_threshold_starts_new_cluster(lemmatizer):
    items = [("alpha beta gamma", 2), ("gamma delta epsilon", 1)]
    assert len(cluster_intentions(items, lemmatizer=lemmatizer)) == 2
    assert len(cluster_intentions(items, lemmatizer=lemmatizer, threshold=0.2)) == 1


def test_first_best_cluster_wins_ties(lemmatizer):
    items = [("alpha beta", 5), ("gamma delta", 4), ("alpha gamma", 1)]
    clusters = cluster_intentions(items, lemmatizer=lemmatizer, threshold=0.3)
    assert [c.representative for c in clusters] == ["alpha gamma", "gamma delta"]
    assert clusters[0].total == 6
    assert clusters[0].variants == {"alpha beta": 5, "alpha gamma": 1}


def test_partition_and_totals_are_order_independent(lemmatizer):
    items = [
        ("check email", 5),
        ("checking my email", 2),
        ("email", 2),
        ("read news", 3),
        ("reading the news today", 1),
        ("buy groceries", 1),
    ]
    expected = None
    for permutation in itertools.permutations(items):
        clusters = cluster_intentions(list(permutation), lemmatizer=lemmatizer)
        variants = [text for cluster in clusters for text in cluster.variants]
        assert sorted(variants) == sorted(text for text, _ in items)
        assert sum(c.total for c in clusters) == sum(count for _, count in items)

        snapshot = [(c.representative, c.total, c.variants) for c in clusters]
        if expected is None:
            expected = snapshot
        assert snapshot == expected
