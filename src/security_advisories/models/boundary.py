"""Single-sided version boundary such as ``>=1.2.3`` or ``<4.5.6``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .version import Version

_BOUNDARY_PATTERN = re.compile(r"^\s*([<>])(=?)\s*((?:\d+\.)*\d+)\s*$", re.ASCII)
_VALID_COMPARATORS = {">", ">=", "<", "<="}


class InvalidBoundaryError(ValueError):
    """Raised when a boundary token has a malformed comparator or version."""


@dataclass(frozen=True)
class Boundary:
    """A version limit paired with its comparator."""

    version: Version
    comparator: str

    def __post_init__(self) -> None:
        if self.comparator not in _VALID_COMPARATORS:
            raise InvalidBoundaryError(f"Invalid comparator: '{self.comparator}'")

    @classmethod
    def from_string(cls, boundary: str) -> Boundary:
        match = _BOUNDARY_PATTERN.fullmatch(boundary)
        if match is None:
            raise InvalidBoundaryError(f"Invalid boundary string: '{boundary}'")
        comparator = match.group(1) + match.group(2)
        return cls(version=Version.from_string(match.group(3)), comparator=comparator)

    def get_version(self) -> Version:
        return self.version

    def limit_included(self) -> bool:
        return self.comparator.endswith("=")

    def is_lower(self) -> bool:
        return self.comparator.startswith(">")

    def get_boundary_string(self) -> str:
        return f"{self.comparator}{self.version}"

    def __str__(self) -> str:
        return self.get_boundary_string()
