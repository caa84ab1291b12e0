"""Utilities for fetching and aggregating advisory feeds."""

from .advisory_feed import (
    AdvisoryFeedAggregation,
    AdvisoryFeedError,
    aggregate_advisory_payload,
    fetch_advisory_feed,
    load_advisories,
)

__all__ = [
    "AdvisoryFeedAggregation",
    "AdvisoryFeedError",
    "aggregate_advisory_payload",
    "fetch_advisory_feed",
    "load_advisories",
]
