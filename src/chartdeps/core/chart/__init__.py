"""Chart metadata, subchart trees and the shared-dependency annotation.

The package is split into focused submodules:

- ``models``: Data classes (``DependencyDeclaration``, ``ChartMetadata``,
  ``Chart``).
- ``loader``: Loading charts from directories and ``.tgz`` archives.
- ``annotations``: Parsing the shared-dependency annotation.

All public names are re-exported here so that imports like
``from chartdeps.core.chart import load_chart`` work.
"""

from chartdeps.core.chart.annotations import (
    SHARED_DEPENDENCIES_ANNOTATION,
    parse_shared_dependencies,
    shared_dependencies,
)
from chartdeps.core.chart.loader import (
    ARCHIVE_EXTENSION,
    CHART_FILE,
    CHARTS_DIR,
    load_archive,
    load_archive_bytes,
    load_chart,
    load_directory,
    load_files,
)
from chartdeps.core.chart.models import Chart, ChartMetadata, DependencyDeclaration

__all__ = [
    "ARCHIVE_EXTENSION",
    "CHART_FILE",
    "CHARTS_DIR",
    "SHARED_DEPENDENCIES_ANNOTATION",
    "Chart",
    "ChartMetadata",
    "DependencyDeclaration",
    "load_archive",
    "load_archive_bytes",
    "load_chart",
    "load_directory",
    "load_files",
    "parse_shared_dependencies",
    "shared_dependencies",
]
