"""Core conflict-building entrypoints.

Turns a mapping of package -> affected-version constraints into the
``conflict`` section of a metapackage manifest, merging overlapping ranges so
every package lists as few constraints as possible.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .reduction import reduce_constraint_strings

CONSTRAINT_SEPARATOR = "|"
# a range unbounded on both sides matches every version
ALL_VERSIONS = "*"

logger = logging.getLogger(__name__)


def build_conflicts(mapping: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """Return package -> reduced constraints joined by ``|``, sorted by package."""
    conflicts: dict[str, str] = {}
    before = 0
    after = 0

    for name in sorted(mapping):
        raw = list(mapping[name])
        if not raw:
            continue
        reduced = reduce_constraint_strings(raw)
        before += len(raw)
        after += len(reduced)
        conflicts[name] = CONSTRAINT_SEPARATOR.join(
            c.get_constraint_string() or ALL_VERSIONS for c in reduced
        )

    logger.info(
        "Reduced %d constraints to %d across %d packages", before, after, len(conflicts)
    )
    return conflicts


def build_conflict_document(
    mapping: Mapping[str, Iterable[str]],
    name: str,
) -> dict[str, Any]:
    """Wrap reduced conflicts into a metapackage manifest."""

    return {
        "name": name,
        "type": "metapackage",
        "description": (
            "Prevents installation of composer packages with known security vulnerabilities"
        ),
        "license": "MIT",
        "conflict": build_conflicts(mapping),
    }


def write_conflict_document(document: Mapping[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=4) + "\n", encoding="utf-8")
    logger.info("Wrote conflict document to %s", path)
