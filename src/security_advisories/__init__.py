"""security-advisories core package.

This package provides the version-range algebra used to consolidate affected
version constraints, plus the pipeline that turns an advisory feed into a
metapackage conflict document.
"""

__all__ = [
    "core",
    "models",
    "reduction",
]
