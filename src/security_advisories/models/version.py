"""Dotted numeric version model built atop packaging.version."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from packaging.version import Version as _PackagingVersion

_VERSION_PATTERN = re.compile(r"^(?:\d+\.)*\d+$", re.ASCII)


class InvalidVersionError(ValueError):
    """Raised when a string is not a dotted numeric version."""


@dataclass(frozen=True, eq=False)
class Version:
    """Immutable dotted numeric version such as ``1.2.3``.

    Missing trailing components compare as zero, so ``1.0`` equals ``1.0.0``.
    """

    components: tuple[int, ...]
    _key: _PackagingVersion = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.components:
            raise InvalidVersionError("Version must have at least one component")
        if any(part < 0 for part in self.components):
            raise InvalidVersionError("Version components must be non-negative")
        object.__setattr__(self, "_key", _PackagingVersion(str(self)))

    @classmethod
    def from_string(cls, version: str) -> Version:
        if not _VERSION_PATTERN.fullmatch(version):
            raise InvalidVersionError(f"Invalid version string: '{version}'")
        return cls(components=tuple(int(part) for part in version.split(".")))

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.components)

    def is_greater_than(self, other: Version) -> bool:
        return self._key > other._key

    def is_greater_or_equal_than(self, other: Version) -> bool:
        return self._key >= other._key

    def __lt__(self, other: Version) -> bool:
        return self._key < other._key

    def __le__(self, other: Version) -> bool:
        return self._key <= other._key

    def __gt__(self, other: Version) -> bool:
        return self._key > other._key

    def __ge__(self, other: Version) -> bool:
        return self._key >= other._key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key == other._key

    def __hash__(self) -> int:
        return hash(self._key)
