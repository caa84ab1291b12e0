"""Version constraint ranges and the merge algebra used to consolidate advisories.

Only three shapes are understood:
- closed ranges, e.g. ">=1.2.3,<4.5.6"
- left-open ranges, e.g. "<4.5.6"
- right-open ranges, e.g. ">=1.2.3"

Anything else (wildcards, carets, tildes, "||" groups) is kept as an opaque
constraint string that can be emitted verbatim but never compared or merged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

from .boundary import Boundary, InvalidBoundaryError
from .version import Version

_V = r"(?:\d+\.)*\d+"

CLOSED_RANGE_MATCHER = re.compile(rf"^>(=?)\s*({_V})\s*,\s*<(=?)\s*({_V})$", re.ASCII)
LEFT_OPEN_RANGE_MATCHER = re.compile(rf"^<(=?)\s*({_V})$", re.ASCII)
RIGHT_OPEN_RANGE_MATCHER = re.compile(rf"^>(=?)\s*({_V})$", re.ASCII)


class ConstraintMergeError(RuntimeError):
    """Raised when two constraints that neither contain nor overlap are merged."""


class VersionConstraint:
    """Common behaviour for structured and opaque constraints.

    Use :meth:`from_string` to build instances; the concrete variants are
    :class:`RangeConstraint` and :class:`OpaqueConstraint`.
    """

    lower_boundary: Boundary | None
    upper_boundary: Boundary | None

    @staticmethod
    def from_string(constraint: str) -> VersionConstraint:
        """Parse a constraint string into a range, or keep it opaque.

        Raises:
            ValueError: If a recognised range carries a malformed boundary.
        """
        if CLOSED_RANGE_MATCHER.match(constraint):
            left, right = constraint.split(",")
            return RangeConstraint(
                lower_boundary=Boundary.from_string(left),
                upper_boundary=Boundary.from_string(right),
            )

        if LEFT_OPEN_RANGE_MATCHER.match(constraint):
            return RangeConstraint(upper_boundary=Boundary.from_string(constraint))

        if RIGHT_OPEN_RANGE_MATCHER.match(constraint):
            return RangeConstraint(lower_boundary=Boundary.from_string(constraint))

        return OpaqueConstraint(constraint_string=constraint)

    def is_simple_range_string(self) -> bool:
        raise NotImplementedError

    def get_constraint_string(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.get_constraint_string()

    def get_lower_bound(self) -> Version | None:
        return self.lower_boundary.get_version() if self.lower_boundary else None

    def get_upper_bound(self) -> Version | None:
        return self.upper_boundary.get_version() if self.upper_boundary else None

    def is_lower_bound_included(self) -> bool:
        return self.lower_boundary.limit_included() if self.lower_boundary else False

    def is_upper_bound_included(self) -> bool:
        return self.upper_boundary.limit_included() if self.upper_boundary else False

    def can_merge_with(self, other: VersionConstraint) -> bool:
        return (
            self.contains(other)
            or other.contains(self)
            or self.overlaps_with(other)
            or other.overlaps_with(self)
        )

    def merge_with(self, other: VersionConstraint) -> VersionConstraint:
        """Return the single range covering both constraints.

        Raises:
            ConstraintMergeError: If the two constraints cannot be merged.
        """
        if self.contains(other):
            return self

        if other.contains(self):
            return other

        if self.overlaps_with(other):
            return self._merge_with_overlapping(other)

        if other.overlaps_with(self):
            return other._merge_with_overlapping(self)

        raise ConstraintMergeError(
            f'Cannot merge {type(self).__name__} "{self.get_constraint_string()}" '
            f'with {type(other).__name__} "{other.get_constraint_string()}"'
        )

    def contains(self, other: VersionConstraint) -> bool:
        # opaque constraints are too complex to compare
        return False

    def overlaps_with(self, other: VersionConstraint) -> bool:
        # asymmetric; can_merge_with and merge_with try both orderings
        if not self.is_simple_range_string() and other.is_simple_range_string():
            return False

        if self.contains(other) or other.contains(self):
            return False

        return self._strictly_contains_other_bound(
            other.lower_boundary
        ) != self._strictly_contains_other_bound(other.upper_boundary)

    def _strictly_contains_other_bound(self, boundary: Boundary | None) -> bool:
        return False

    def _merge_with_overlapping(self, other: VersionConstraint) -> RangeConstraint:
        if not self.overlaps_with(other):
            raise ConstraintMergeError(
                f'{type(self).__name__} "{self.get_constraint_string()}" does not overlap '
                f'with {type(other).__name__} "{other.get_constraint_string()}"'
            )

        if self._strictly_contains_other_bound(other.lower_boundary):
            return RangeConstraint(
                lower_boundary=self.lower_boundary,
                upper_boundary=other.upper_boundary,
            )

        return RangeConstraint(
            lower_boundary=other.lower_boundary,
            upper_boundary=self.upper_boundary,
        )


@dataclass(frozen=True)
class RangeConstraint(VersionConstraint):
    """A structured range; a missing boundary means that side is unbounded."""

    lower_boundary: Boundary | None = None
    upper_boundary: Boundary | None = None

    def __post_init__(self) -> None:
        if self.lower_boundary is not None and not self.lower_boundary.is_lower():
            raise InvalidBoundaryError(
                f"Lower boundary must use '>' or '>=': '{self.lower_boundary}'"
            )
        if self.upper_boundary is not None and self.upper_boundary.is_lower():
            raise InvalidBoundaryError(
                f"Upper boundary must use '<' or '<=': '{self.upper_boundary}'"
            )

    def is_simple_range_string(self) -> bool:
        return True

    def get_constraint_string(self) -> str:
        boundaries = (self.lower_boundary, self.upper_boundary)
        return ",".join(b.get_boundary_string() for b in boundaries if b is not None)

    def contains(self, other: VersionConstraint) -> bool:
        return (
            isinstance(other, RangeConstraint)
            and self._contains_lower_bound(other.lower_boundary)
            and self._contains_upper_bound(other.upper_boundary)
        )

    def _contains_lower_bound(self, other_lower: Boundary | None) -> bool:
        if self.lower_boundary is None:
            return True

        if other_lower is None:
            return False

        own = self.lower_boundary
        if own.limit_included() == other_lower.limit_included() or own.limit_included():
            return other_lower.get_version().is_greater_or_equal_than(own.get_version())

        return other_lower.get_version().is_greater_than(own.get_version())

    def _contains_upper_bound(self, other_upper: Boundary | None) -> bool:
        if self.upper_boundary is None:
            return True

        if other_upper is None:
            return False

        own = self.upper_boundary
        if own.limit_included() == other_upper.limit_included() or own.limit_included():
            return own.get_version().is_greater_or_equal_than(other_upper.get_version())

        return own.get_version().is_greater_than(other_upper.get_version())

    def _strictly_contains_other_bound(self, boundary: Boundary | None) -> bool:
        if boundary is None:
            return False

        version = boundary.get_version()
        lower, upper = self.lower_boundary, self.upper_boundary

        above_lower = lower is None or version.is_greater_than(lower.get_version())
        below_upper = upper is None or upper.get_version().is_greater_than(version)

        return above_lower and below_upper


@dataclass(frozen=True)
class OpaqueConstraint(VersionConstraint):
    """A constraint too complex to reason about, kept verbatim."""

    constraint_string: str

    lower_boundary: ClassVar[None] = None
    upper_boundary: ClassVar[None] = None

    def is_simple_range_string(self) -> bool:
        return False

    def get_constraint_string(self) -> str:
        return self.constraint_string
