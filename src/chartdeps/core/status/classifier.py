"""Status Classifier --- one closed status value per declared dependency.

Decision procedure, evaluated independently for every dependency:

1. **Archives.** Locate ``charts/<name>-*.tgz`` and disambiguate.

   - A pattern failure gives ``bad pattern``; several versioned archives
     give ``too many matches``. Either ends the procedure.
   - A single authoritative archive gives ``ok``. No range check is made
     against the declared version: archive matches have always been
     reported this way and consumers rely on it.

2. **Subcharts.** Otherwise look for a loaded subchart whose name equals
   the dependency name exactly (``first-chart`` never matches
   ``first-chart-second-chart``).

   - None found: ``missing``.
   - Concrete version byte-for-byte equal to the declared constraint:
     ``unpacked``, whether or not the constraint is valid range syntax.
   - Otherwise the constraint is parsed as a range and the concrete
     version as a version. A parse failure on either side gives
     ``invalid version``; a version outside the range gives
     ``wrong version``; a version inside it gives ``unpacked``.

The subchart tree is only read, never modified.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chartdeps.core.chart.models import Chart, DependencyDeclaration
from chartdeps.core.semver import Constraint
from chartdeps.core.status.archives import disambiguate, locate_archives
from chartdeps.core.status.models import (
    ArchiveResolution,
    DependencyStatus,
    DirectoryResolution,
    Resolution,
    StatusResult,
    Unresolved,
)
from chartdeps.exceptions import PatternError, VersionError

logger = logging.getLogger(__name__)


def resolve_archive(chart_path: Path, dep: DependencyDeclaration) -> Resolution | None:
    """Try to resolve *dep* through packaged archives.

    Returns:
        A conclusive resolution, or None to fall through to subcharts.
    """
    try:
        candidates = locate_archives(chart_path, dep.name)
    except PatternError as exc:
        return Unresolved(DependencyStatus.BAD_PATTERN, str(exc))
    return disambiguate(candidates)


def resolve_subchart(dep: DependencyDeclaration, parent: Chart) -> Resolution:
    """Resolve *dep* against the unpacked subcharts of *parent*."""
    sub = parent.find_subchart(dep.name)
    if sub is None:
        return Unresolved(DependencyStatus.MISSING)

    if sub.version == dep.version:
        return DirectoryResolution(sub.name, sub.version)

    try:
        satisfied = Constraint.parse(dep.version).satisfies(sub.version)
    except VersionError as exc:
        return Unresolved(DependencyStatus.INVALID_VERSION, str(exc))

    if not satisfied:
        return Unresolved(
            DependencyStatus.WRONG_VERSION,
            f"{sub.version} does not satisfy {dep.version!r}",
        )
    return DirectoryResolution(sub.name, sub.version)


def status_for(resolution: Resolution) -> DependencyStatus:
    """Map a resolution variant to its status."""
    if isinstance(resolution, ArchiveResolution):
        return DependencyStatus.OK
    if isinstance(resolution, DirectoryResolution):
        return DependencyStatus.UNPACKED
    return resolution.status


def _detail_for(resolution: Resolution) -> str | None:
    if isinstance(resolution, ArchiveResolution):
        return str(resolution.candidate.path)
    if isinstance(resolution, DirectoryResolution):
        return f"{resolution.name}-{resolution.version}"
    return resolution.detail


def classify_dependency(
    chart_path: str | Path,
    dep: DependencyDeclaration,
    parent: Chart,
) -> StatusResult:
    """Classify one dependency of the chart at *chart_path*.

    Args:
        chart_path: Chart directory (or archive file) on disk.
        dep: The dependency declaration to classify.
        parent: The loaded chart whose subcharts may satisfy *dep*.

    Returns:
        A ``StatusResult`` holding exactly one ``DependencyStatus``.
    """
    resolution = resolve_archive(Path(chart_path), dep)
    if resolution is None:
        resolution = resolve_subchart(dep, parent)

    status = status_for(resolution)
    logger.debug("Dependency %s (%r): %s", dep.name, dep.version, status)
    return StatusResult(dependency=dep, status=status, detail=_detail_for(resolution))
