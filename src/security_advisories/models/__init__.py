"""Data models for the version-range algebra."""

from __future__ import annotations

from .boundary import Boundary, InvalidBoundaryError
from .version import InvalidVersionError, Version
from .version_constraint import (
    ConstraintMergeError,
    OpaqueConstraint,
    RangeConstraint,
    VersionConstraint,
)

__all__ = [
    "Boundary",
    "ConstraintMergeError",
    "InvalidBoundaryError",
    "InvalidVersionError",
    "OpaqueConstraint",
    "RangeConstraint",
    "Version",
    "VersionConstraint",
]
