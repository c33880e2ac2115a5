"""Archive Locator and Version Disambiguator.

A dependency ``<name>`` may be satisfied by a packaged archive
``charts/<name>-<version>.tgz`` inside the chart directory. Locating by
name prefix alone is ambiguous: ``first-chart-*.tgz`` also matches
``first-chart-second-chart-0.1.0.tgz``. The disambiguator therefore looks
at the remainder of each file name and keeps only candidates whose version
token is a strict semantic version.

Decision table for ``disambiguate``:

=====================  ===================  ============================
candidates             strictly versioned   outcome
=====================  ===================  ============================
0                      -                    None (fall through)
1                      any                  that archive
>1                     exactly 1            the versioned archive
>1                     more than 1          ``too many matches``
>1                     0                    None (fall through)
=====================  ===================  ============================

A sole candidate is accepted on its name alone, without a version check;
existing reports depend on that behaviour.
"""

from __future__ import annotations

import glob
import logging
import os
from pathlib import Path

from chartdeps.core.chart.loader import ARCHIVE_EXTENSION, CHARTS_DIR
from chartdeps.core.semver import Version, is_strict_version
from chartdeps.core.status.models import (
    ArchiveCandidate,
    ArchiveResolution,
    DependencyStatus,
    Unresolved,
)
from chartdeps.exceptions import PatternError

logger = logging.getLogger(__name__)


def archive_pattern(chart_path: Path, name: str) -> str:
    """Build the glob pattern matching archives of dependency *name*.

    Raises:
        PatternError: If *name* cannot form a single file-name component.
    """
    if "\x00" in name or "/" in name or (os.sep in name) or name in (".", ".."):
        raise PatternError(f"Dependency name {name!r} cannot form an archive pattern")
    charts_dir = glob.escape(str(Path(chart_path) / CHARTS_DIR))
    return os.path.join(charts_dir, f"{glob.escape(name)}-*{ARCHIVE_EXTENSION}")


def make_candidate(path: Path, name: str) -> ArchiveCandidate:
    """Split an archive file name into its name and version tokens."""
    token = path.name[len(name) + 1:]
    if token.endswith(ARCHIVE_EXTENSION):
        token = token[: -len(ARCHIVE_EXTENSION)]
    parsed = Version.parse_strict(token) if is_strict_version(token) else None
    return ArchiveCandidate(path=path, name_token=name, version_token=token, parsed_version=parsed)


def locate_archives(chart_path: Path, name: str) -> list[ArchiveCandidate]:
    """Find archive candidates for dependency *name*, sorted by path.

    A chart given as an archive file has no ``charts/`` directory on disk
    and yields no candidates.

    Raises:
        PatternError: If the search pattern cannot be built or evaluated.
    """
    pattern = archive_pattern(chart_path, name)
    try:
        matches = sorted(glob.glob(pattern))
    except (ValueError, OSError) as exc:
        logger.warning("Archive search failed for %s: %s", pattern, exc)
        raise PatternError(f"Cannot search for {pattern}: {exc}") from exc

    candidates = [make_candidate(Path(m), name) for m in matches if os.path.isfile(m)]
    logger.debug("Archive candidates for %s: %s", name, [c.path.name for c in candidates])
    return candidates


def disambiguate(
    candidates: list[ArchiveCandidate],
) -> ArchiveResolution | Unresolved | None:
    """Reduce archive candidates to one archive, an ambiguity, or nothing.

    Returns:
        ``ArchiveResolution`` for a single authoritative archive,
        ``Unresolved(TOO_MANY_MATCHES)`` when several candidates carry a
        valid version, or None when the archives are inconclusive and the
        caller should look for an unpacked subchart instead.
    """
    if not candidates:
        return None
    if len(candidates) == 1:
        return ArchiveResolution(candidates[0])

    versioned = [c for c in candidates if c.has_version]
    if len(versioned) == 1:
        return ArchiveResolution(versioned[0])
    if len(versioned) > 1:
        names = ", ".join(c.path.name for c in versioned)
        return Unresolved(
            DependencyStatus.TOO_MANY_MATCHES,
            f"{len(versioned)} versioned archives match: {names}",
        )
    return None
