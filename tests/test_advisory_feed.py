"""Tests for advisory feed fetching and aggregation."""

import pytest
import requests
from tenacity import wait_none

from security_advisories.ingestion import (
    AdvisoryFeedError,
    aggregate_advisory_payload,
    fetch_advisory_feed,
    load_advisories,
)
from security_advisories.ingestion import advisory_feed

PAYLOAD = b"\n".join(
    [
        b'{"package": "acme/lib", "affected": [">=1.0,<2.0", "<0.5"]}',
        b'{"package": "acme/lib", "affected": ">=1.5,<2.5"}',
        b"not json",
        b'{"package": "", "affected": "<1.0"}',
        b"",
        b'{"package": "other/pkg", "affected": ["*", "*"]}',
        b"[1, 2]",
    ]
)


class FakeResponse:
    def __init__(self, status_code=200, content=b""):
        self.status_code = status_code
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


@pytest.fixture
def no_retry_wait(monkeypatch):
    monkeypatch.setattr(advisory_feed._download.retry, "wait", wait_none())


class TestAggregate:
    def test_groups_constraints_by_package(self):
        aggregation = aggregate_advisory_payload(PAYLOAD)

        assert aggregation.packages == {
            "acme/lib": ["<0.5", ">=1.0,<2.0", ">=1.5,<2.5"],
            "other/pkg": ["*"],
        }
        assert aggregation.package_count == 2
        assert aggregation.constraint_count == 4

    def test_counts_and_skips_bad_records(self):
        aggregation = aggregate_advisory_payload(PAYLOAD)

        assert aggregation.total_records == 6
        assert aggregation.skipped_records[0].startswith("line 3: invalid JSON")
        assert aggregation.skipped_records[1:] == (
            "line 4: missing package or affected versions",
            "line 7: record is not an object",
        )

    def test_non_string_entries_are_skipped_not_coerced(self):
        payload = b'{"package": "acme/lib", "affected": [null, 1.0, "<2.0"]}'

        aggregation = aggregate_advisory_payload(payload)

        assert aggregation.packages == {"acme/lib": ["<2.0"]}
        assert aggregation.skipped_records == (
            "line 1: non-string affected entry None",
            "line 1: non-string affected entry 1.0",
        )

    def test_record_with_only_non_string_entries_is_skipped(self):
        payload = b'{"package": "a/b", "affected": [2]}\n{"package": "c/d", "affected": "<1"}'

        aggregation = aggregate_advisory_payload(payload)

        assert set(aggregation.packages) == {"c/d"}
        assert "line 1: no affected constraints" in aggregation.skipped_records

    def test_or_grouped_constraint_is_kept_verbatim(self):
        aggregation = aggregate_advisory_payload(
            b'{"package": "a/pkg", "affected": "<1.0 || >=2.0"}'
        )

        assert aggregation.packages == {"a/pkg": ["<1.0 || >=2.0"]}

    def test_no_valid_records_raises(self):
        with pytest.raises(AdvisoryFeedError, match="no valid package entries"):
            aggregate_advisory_payload(b'not json\n{"package": "x/y"}\n')


class TestFetch:
    def test_returns_content(self, monkeypatch):
        monkeypatch.setattr(
            advisory_feed.requests, "get", lambda url, **kw: FakeResponse(content=b"payload")
        )

        assert fetch_advisory_feed("https://example.test/feed.jsonl") == b"payload"

    def test_http_error_status_raises_without_retry(self, monkeypatch):
        calls = []

        def _get(url, **kw):
            calls.append(url)
            return FakeResponse(status_code=503)

        monkeypatch.setattr(advisory_feed.requests, "get", _get)

        with pytest.raises(AdvisoryFeedError, match="503"):
            fetch_advisory_feed("https://example.test/feed.jsonl")
        assert len(calls) == 1

    def test_connection_errors_are_retried(self, monkeypatch, no_retry_wait):
        outcomes = [requests.ConnectionError("reset"), requests.Timeout("slow")]

        def _get(url, **kw):
            if outcomes:
                raise outcomes.pop(0)
            return FakeResponse(content=b"third time")

        monkeypatch.setattr(advisory_feed.requests, "get", _get)

        assert fetch_advisory_feed("https://example.test/feed.jsonl") == b"third time"

    def test_persistent_connection_error_is_wrapped(self, monkeypatch, no_retry_wait):
        def _get(url, **kw):
            raise requests.ConnectionError("boom")

        monkeypatch.setattr(advisory_feed.requests, "get", _get)

        with pytest.raises(AdvisoryFeedError, match="Failed to fetch advisory feed"):
            fetch_advisory_feed("https://example.test/feed.jsonl")


class TestLoadAdvisories:
    def test_load_from_file(self, tmp_path):
        feed = tmp_path / "feed.jsonl"
        feed.write_bytes(PAYLOAD)

        aggregation = load_advisories(str(feed))

        assert set(aggregation.packages) == {"acme/lib", "other/pkg"}

    def test_load_from_url(self, monkeypatch):
        seen = []

        def _get(url, **kw):
            seen.append(url)
            return FakeResponse(content=PAYLOAD)

        monkeypatch.setattr(advisory_feed.requests, "get", _get)

        aggregation = load_advisories("https://example.test/feed.jsonl")

        assert seen == ["https://example.test/feed.jsonl"]
        assert aggregation.package_count == 2

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(AdvisoryFeedError, match="Failed to read advisory file"):
            load_advisories(str(tmp_path / "missing.jsonl"))
