"""Semantic versions and version-range constraints.

All public names are re-exported here so that callers can write
``from chartdeps.core.semver import Version, Constraint``.
"""

from chartdeps.core.semver.constraints import Constraint
from chartdeps.core.semver.version import Version, is_strict_version

__all__ = [
    "Constraint",
    "Version",
    "is_strict_version",
]
