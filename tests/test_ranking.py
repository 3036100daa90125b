from datetime import timezone

from intention_engine.analytics import aggregate_daily_counts
from intention_engine.clustering import IntentionCluster
from intention_engine.ranking import aggregate_top_intentions, count_intentions, light_normalize, rank_clusters
from intention_engine.schema import EventRecord, IntentionVariant, TopIntention

from conftest import ms


def submitted(domain, text, iso="2025-01-01T09:00:00"):
    return EventRecord(type="intention_submitted", domain=domain, timestamp=ms(iso), intention=text)


def test_light_normalize_keeps_punctuation():
    assert light_normalize("  Check   EMAIL!\t") == "check email!"


def test_count_intentions_dedupes_and_filters():
    events = [
        submitted("gmail.com", "Check email"),
        submitted("gmail.com", "check   email "),
        submitted("gmail.com", "?!"),
        submitted("gmail.com", "   "),
        EventRecord(type="overlay_shown", domain="gmail.com", timestamp=ms("2025-01-01T09:00:00"), intention="x"),
        EventRecord(type="intention_submitted", domain="gmail.com", timestamp=ms("2025-01-01T09:00:00")),
    ]
    assert count_intentions(events) == {"gmail.com": {"check email": 2}}


def test_top_intentions_merge_near_duplicates(lemmatizer):
    events = [submitted("gmail.com", "check email") for _ in range(5)]
    events += [submitted("gmail.com", "Checking my email") for _ in range(2)]
    result = aggregate_top_intentions(events, lemmatizer=lemmatizer)
    assert result == {
        "gmail.com": [
            TopIntention(
                text="checking my email",
                count=7,
                variants=[IntentionVariant("check email", 5), IntentionVariant("checking my email", 2)],
            )
        ]
    }


def test_default_lemmatizer_merges_check_email_variants():
    events = [submitted("gmail.com", "check email") for _ in range(5)]
    events += [submitted("gmail.com", "checking my email") for _ in range(2)]
    result = aggregate_top_intentions(events)["gmail.com"]
    assert len(result) == 1
    assert result[0].text == "checking my email"
    assert result[0].count == 7


def test_unrelated_intentions_rank_by_total_then_text(lemmatizer):
    events = [submitted("a.com", "read news"), submitted("a.com", "buy groceries"), submitted("a.com", "buy groceries")]
    result = aggregate_top_intentions(events, lemmatizer=lemmatizer)["a.com"]
    assert [(item.text, item.count) for item in result] == [("buy groceries", 2), ("read news", 1)]


def test_limit_truncates(lemmatizer):
    texts = ["alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta"]
    events = [submitted("a.com", text) for text in texts]
    assert len(aggregate_top_intentions(events, lemmatizer=lemmatizer)["a.com"]) == 5
    assert [i.text for i in aggregate_top_intentions(events, limit=2, lemmatizer=lemmatizer)["a.com"]] == [
        "alpha",
        "beta",
    ]
    assert aggregate_top_intentions(events, limit=0, lemmatizer=lemmatizer) == {"a.com": []}


def test_from_timestamp_only_affects_ranking(lemmatizer):
    events = [
        submitted("a.com", "old habit", "2025-01-01T09:00:00"),
        submitted("a.com", "new plan", "2025-01-03T09:00:00"),
        submitted("b.com", "only old", "2025-01-01T09:00:00"),
    ]
    cutoff = ms("2025-01-02T00:00:00")
    top = aggregate_top_intentions(events, from_timestamp=cutoff, lemmatizer=lemmatizer)
    assert list(top) == ["a.com"]
    assert [item.text for item in top["a.com"]] == ["new plan"]

    daily = aggregate_daily_counts(events, tz=timezone.utc)
    assert sum(day.intention_submitted for day in daily["a.com"]) == 2
    assert sum(day.intention_submitted for day in daily["b.com"]) == 1


def test_cutoff_is_inclusive(lemmatizer):
    event = submitted("a.com", "exact", "2025-01-02T00:00:00")
    top = aggregate_top_intentions([event], from_timestamp=event.timestamp, lemmatizer=lemmatizer)
    assert top["a.com"][0].text == "exact"


def test_rank_clusters_sorts_variants():
    cluster = IntentionCluster(
        representative="b",
        rep_count=1,
        rep_tokens=frozenset({"b"}),
        total=4,
        variants={"b": 1, "c": 2, "a": 1},
    )
    other = IntentionCluster(representative="a", rep_count=4, rep_tokens=frozenset({"a"}), total=4, variants={"a": 4})
    ranked = rank_clusters([cluster, other], limit=5)
    assert [item.text for item in ranked] == ["a", "b"]
    assert [(v.text, v.count) for v in ranked[1].variants] == [("c", 2), ("a", 1), ("b", 1)]


def test_output_never_exceeds_limit_or_cluster_count(lemmatizer):
    events = [submitted("a.com", "read news"), submitted("a.com", "reading news")]
    result = aggregate_top_intentions(events, limit=5, lemmatizer=lemmatizer)["a.com"]
    assert len(result) == 1
    assert result[0].count == 2
