"""Data models for dependency status resolution.

The status vocabulary is an external contract: downstream consumers match
on the literal strings, so ``DependencyStatus`` is a closed enumeration
whose values are the one and only rendering of each outcome.

Resolution itself is modelled as a small tagged union::

    Resolution = ArchiveResolution | DirectoryResolution | Unresolved

so that the archive path and the subchart path can be tested in isolation
and the classifier only has to map a variant to a status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

from chartdeps.core.chart.models import DependencyDeclaration
from chartdeps.core.semver import Version

# ---------------------------------------------------------------------------
# DependencyStatus: the closed classification set
# ---------------------------------------------------------------------------


class DependencyStatus(str, Enum):
    """Outcome of resolving one declared dependency.

    ``OK`` means a packaged archive was found, ``UNPACKED`` an unpacked
    subchart satisfying the declared version; every other member names the
    reason the dependency could not be resolved.
    """

    OK = "ok"
    UNPACKED = "unpacked"
    MISSING = "missing"
    WRONG_VERSION = "wrong version"
    INVALID_VERSION = "invalid version"
    TOO_MANY_MATCHES = "too many matches"
    BAD_PATTERN = "bad pattern"

    def __str__(self) -> str:
        return self.value


class ReportNotice(str, Enum):
    """Package-level informational outcome of a listing.

    Distinct from a per-dependency ``MISSING``: a notice means there was
    nothing to classify at all.
    """

    NO_DEPENDENCIES = "no dependencies"
    NO_SHARED_DEPENDENCIES = "no shared dependencies"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# ArchiveCandidate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArchiveCandidate:
    """A ``<name>-<version>.tgz`` file matched for one dependency.

    Attributes:
        path: Location of the archive.
        name_token: The dependency name the file was matched against.
        version_token: File name with the ``<name>-`` prefix and the
            archive extension removed.
        parsed_version: Strict parse of ``version_token``, or None when
            the token is not a semantic version.
    """

    path: Path
    name_token: str
    version_token: str
    parsed_version: Version | None = None

    @property
    def has_version(self) -> bool:
        return self.parsed_version is not None


# ---------------------------------------------------------------------------
# Resolution variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ArchiveResolution:
    """The dependency is provided by a single authoritative archive."""

    candidate: ArchiveCandidate


@dataclass(frozen=True)
class DirectoryResolution:
    """The dependency is provided by an unpacked subchart."""

    name: str
    version: str


@dataclass(frozen=True)
class Unresolved:
    """The dependency could not be resolved; ``status`` says why."""

    status: DependencyStatus
    detail: str | None = None


Resolution = Union[ArchiveResolution, DirectoryResolution, Unresolved]


# ---------------------------------------------------------------------------
# StatusResult and DependencyReport
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatusResult:
    """The classification of one declared dependency.

    Attributes:
        dependency: The declaration that was classified.
        status: Exactly one member of the closed status set.
        detail: Optional human-readable explanation (archive path, parse
            error, matching archives).
    """

    dependency: DependencyDeclaration
    status: DependencyStatus
    detail: str | None = None

    @property
    def name(self) -> str:
        return self.dependency.name

    @property
    def version(self) -> str:
        return self.dependency.version

    @property
    def repository(self) -> str | None:
        return self.dependency.repository

    @property
    def namespace(self) -> str | None:
        return self.dependency.namespace

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "repository": self.repository or "",
            "namespace": self.namespace or "",
            "status": self.status.value,
        }


@dataclass
class DependencyReport:
    """Ordered status results for one chart.

    ``results`` follows declaration order. When ``notice`` is set there
    was nothing to classify and ``results`` is empty.
    """

    chart_path: str
    chart_name: str
    results: list[StatusResult] = field(default_factory=list)
    notice: ReportNotice | None = None
