"""Advisory feed ingestion helpers.

The feed is JSON Lines, one advisory per line::

    {"package": "vendor/name", "affected": [">=1.0,<1.2", "<0.9"]}

``affected`` may also be a single string. Bad lines are recorded as skipped
rather than failing the whole feed.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

USER_AGENT = "security-advisories-builder"

logger = logging.getLogger(__name__)


class AdvisoryFeedError(RuntimeError):
    """Raised when the advisory feed cannot be fetched or parsed."""


@dataclass(frozen=True, slots=True)
class AdvisoryFeedAggregation:
    """Constraint strings per package, plus bookkeeping about the source lines."""

    packages: dict[str, list[str]]
    total_records: int
    skipped_records: tuple[str, ...]

    @property
    def package_count(self) -> int:
        return len(self.packages)

    @property
    def constraint_count(self) -> int:
        return sum(len(constraints) for constraints in self.packages.values())


@retry(
    reraise=True,
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    stop=stop_after_attempt(3),
    wait=wait_fixed(2),
    before_sleep=before_sleep_log(logger, logging.WARNING),
)
def _download(url: str) -> bytes:
    response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=30)
    response.raise_for_status()
    return response.content


def fetch_advisory_feed(url: str) -> bytes:
    """Download the feed; transient connection failures are retried."""
    try:
        return _download(url)
    except requests.RequestException as exc:
        raise AdvisoryFeedError(f"Failed to fetch advisory feed {url}: {exc}") from exc


def _parse_record(record: Any, skip: list[str]) -> tuple[str, list[str]] | None:
    """Return (package, constraints) for a usable record; otherwise note why in ``skip``."""
    if not isinstance(record, dict):
        skip.append("record is not an object")
        return None

    package = record.get("package")
    affected = record.get("affected")
    if isinstance(affected, str):
        affected = [affected]

    if not isinstance(package, str) or not package.strip() or not isinstance(affected, list):
        skip.append("missing package or affected versions")
        return None

    constraints = []
    for entry in affected:
        if not isinstance(entry, str):
            skip.append(f"non-string affected entry {entry!r}")
        elif entry.strip():
            constraints.append(entry.strip())

    if not constraints:
        skip.append("no affected constraints")
        return None
    return package.strip(), constraints


def aggregate_advisory_payload(payload: bytes) -> AdvisoryFeedAggregation:
    """Group the feed's affected constraints by package, de-duplicated and sorted."""
    packages: dict[str, set[str]] = defaultdict(set)
    skipped: list[str] = []
    total = 0

    text = payload.decode("utf-8", errors="replace")
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        total += 1

        reasons: list[str] = []
        try:
            parsed = _parse_record(json.loads(line), reasons)
        except json.JSONDecodeError as exc:
            parsed = None
            reasons.append(f"invalid JSON ({exc.msg})")

        skipped.extend(f"line {line_number}: {reason}" for reason in reasons)
        if parsed is not None:
            package, constraints = parsed
            packages[package].update(constraints)

    for reason in skipped:
        logger.warning("Skipped advisory data: %s", reason)

    if not packages:
        raise AdvisoryFeedError("Advisory feed returned no valid package entries")

    return AdvisoryFeedAggregation(
        packages={name: sorted(packages[name]) for name in sorted(packages)},
        total_records=total,
        skipped_records=tuple(skipped),
    )


def load_advisories(source: str) -> AdvisoryFeedAggregation:
    """Load advisories from an http(s) URL or a local JSONL file."""
    if source.startswith(("http://", "https://")):
        payload = fetch_advisory_feed(source)
    else:
        try:
            payload = Path(source).read_bytes()
        except OSError as exc:
            raise AdvisoryFeedError(f"Failed to read advisory file: {exc}") from exc

    aggregation = aggregate_advisory_payload(payload)
    logger.info(
        "Loaded %d constraints for %d packages from %s",
        aggregation.constraint_count,
        aggregation.package_count,
        source,
    )
    return aggregation
