import json

from microblog.health import HealthReport


def test_write_keeps_previous_fetch_fields(tmp_path):
    report = HealthReport("fetcher", health_dir=tmp_path)
    report.write(posts_count=4, last_fetch="2024-01-01T00:00:00Z")

    report.record_error("fetch failed: timeout")
    report.record_error("fetch failed: timeout")
    report.record_error("  ")
    report.write()

    payload = json.loads((tmp_path / "fetcher.json").read_text(encoding="utf-8"))
    assert payload["posts_count"] == 4
    assert payload["last_fetch"] == "2024-01-01T00:00:00Z"
    assert payload["errors"] == ["fetch failed: timeout"]
    assert payload["last_attempt"].endswith("Z")
    assert report.has_errors


def test_clear_resets_errors(tmp_path):
    report = HealthReport("fetcher", health_dir=tmp_path)
    report.record_error("a")
    report.record_error("b")
    report.clear()
    assert not report.has_errors


def test_errors_are_capped(tmp_path):
    report = HealthReport("fetcher", health_dir=tmp_path)
    for n in range(30):
        report.record_error(f"error {n}")
    assert len(report.errors) == 20
    assert report.errors[-1] == "error 19"


def test_first_failure_has_no_last_fetch(tmp_path):
    report = HealthReport("fetcher", health_dir=tmp_path)
    report.record_error("offline")
    payload = json.loads(report.write().read_text(encoding="utf-8"))
    assert payload["last_fetch"] is None
    assert payload["posts_count"] == 0
