"""Dependency status resolution.

Classifies each declared dependency of a chart as satisfied by a packaged
archive (``ok``), satisfied by an unpacked subchart (``unpacked``), or
unresolved with a reason drawn from a fixed vocabulary. The pass is
read-only: nothing is installed, fetched or written.

All public names are re-exported here so that imports like
``from chartdeps.core.status import SharedDependencyLister`` work.
"""

from chartdeps.core.status.archives import (
    archive_pattern,
    disambiguate,
    locate_archives,
    make_candidate,
)
from chartdeps.core.status.classifier import (
    classify_dependency,
    resolve_archive,
    resolve_subchart,
    status_for,
)
from chartdeps.core.status.lister import SharedDependencyLister
from chartdeps.core.status.models import (
    ArchiveCandidate,
    ArchiveResolution,
    DependencyReport,
    DependencyStatus,
    DirectoryResolution,
    ReportNotice,
    Resolution,
    StatusResult,
    Unresolved,
)

__all__ = [
    "ArchiveCandidate",
    "ArchiveResolution",
    "DependencyReport",
    "DependencyStatus",
    "DirectoryResolution",
    "ReportNotice",
    "Resolution",
    "SharedDependencyLister",
    "StatusResult",
    "Unresolved",
    "archive_pattern",
    "classify_dependency",
    "disambiguate",
    "locate_archives",
    "make_candidate",
    "resolve_archive",
    "resolve_subchart",
    "status_for",
]
