"""Chart data models: DependencyDeclaration, ChartMetadata and Chart.

These are pure data holders with no loading logic, so the status resolver
and the CLI can import them without pulling in YAML or tarfile handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# DependencyDeclaration: one declared requirement of a chart
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyDeclaration:
    """A dependency declared by a chart.

    Immutable once loaded. The name is never empty: the loader and the
    annotation parser reject entries without one.

    Attributes:
        name: Name of the required chart (e.g., "mariadb").
        version: Semantic-version range the dependency must satisfy.
            The empty string accepts any version.
        repository: Where the dependency is fetched from, if declared.
        namespace: Target namespace, carried only by shared dependencies.
    """

    name: str
    version: str = ""
    repository: str | None = None
    namespace: str | None = None


# ---------------------------------------------------------------------------
# ChartMetadata: the parsed contents of Chart.yaml
# ---------------------------------------------------------------------------


@dataclass
class ChartMetadata:
    """The fields of ``Chart.yaml`` that chartdeps reads.

    Attributes:
        name: Chart name.
        version: Concrete chart version, as written.
        api_version: Chart API version ("v1" or "v2").
        description: One-line description.
        app_version: Version of the packaged application.
        annotations: Free-form annotations. Scalar values are kept as
            strings; any other YAML value is kept as parsed so that the
            consumer can report it.
        dependencies: Dependencies declared in the ``dependencies`` list,
            in declaration order.
    """

    name: str
    version: str
    api_version: str = "v2"
    description: str = ""
    app_version: str = ""
    annotations: dict[str, Any] = field(default_factory=dict)
    dependencies: list[DependencyDeclaration] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Chart: metadata plus the loaded subchart tree
# ---------------------------------------------------------------------------


@dataclass
class Chart:
    """A loaded chart and its subcharts.

    ``dependencies`` holds the subcharts found under ``charts/``, whether
    unpacked directories or ``.tgz`` archives, sorted by their location
    so that traversal order does not depend on the filesystem.
    """

    metadata: ChartMetadata
    path: str = ""
    dependencies: list[Chart] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def version(self) -> str:
        return self.metadata.version

    def find_subchart(self, name: str) -> Chart | None:
        """Return the first direct subchart whose name is exactly *name*."""
        for sub in self.dependencies:
            if sub.name == name:
                return sub
        return None
