"""Reduce a package's affected-version constraints to a minimal list."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from itertools import combinations

from .models import VersionConstraint

logger = logging.getLogger(__name__)


def _merge_first_pair(
    constraints: list[VersionConstraint],
) -> list[VersionConstraint] | None:
    """Merge the first mergeable pair, or return None when no pair merges."""
    for i, j in combinations(range(len(constraints)), 2):
        left, right = constraints[i], constraints[j]
        if not left.can_merge_with(right):
            continue

        merged = left.merge_with(right)
        logger.debug("Merged %s and %s into %s", left, right, merged)
        rest = [c for index, c in enumerate(constraints) if index not in (i, j)]
        return [*rest, merged]
    return None


def reduce_constraints(constraints: Iterable[VersionConstraint]) -> list[VersionConstraint]:
    """Merge constraints pairwise until no pair is mergeable.

    Opaque constraints never merge, so they pass through untouched; repeated
    strings are collapsed. The result is ordered by constraint string.
    """
    pending = list(constraints)
    while True:
        reduced = _merge_first_pair(pending)
        if reduced is None:
            break
        pending = reduced

    unique = {constraint.get_constraint_string(): constraint for constraint in pending}
    return [unique[key] for key in sorted(unique)]


def reduce_constraint_strings(constraints: Iterable[str]) -> list[VersionConstraint]:
    return reduce_constraints(VersionConstraint.from_string(c) for c in constraints)
