from intention_engine.domains import matches_target_domain, normalize_domain, normalize_hostname


def test_normalize_domain_accepts_urls_and_bare_hosts():
    assert normalize_domain("https://www.YouTube.com/watch?v=1").value == "www.youtube.com"
    assert normalize_domain("  reddit.com ").value == "reddit.com"
    assert normalize_domain("http://localhost:8080").value == "localhost"


def test_normalize_domain_errors():
    assert normalize_domain("").error == "Enter a domain to add."
    assert normalize_domain("intranet").error == "Use a valid domain like youtube.com."
    assert normalize_domain("bad_host.com").value is None
    assert normalize_hostname("http://[::1") is None


def test_matches_target_domain():
    targets = ["youtube.com", "not a domain", "https://news.ycombinator.com/"]
    assert matches_target_domain("youtube.com", targets)
    assert matches_target_domain("m.youtube.com", targets)
    assert matches_target_domain("news.ycombinator.com", targets)
    assert not matches_target_domain("notyoutube.com", targets)
    assert not matches_target_domain("", targets)
