"""Shared-Dependency Lister --- ordered status reports for a chart.

The lister loads a chart once, collects its dependency declarations from
one of two channels, and classifies each in declaration order:

- ``list_dependencies`` reads the regular ``dependencies`` list of
  ``Chart.yaml``.
- ``list_shared_dependencies`` reads the shared-dependency annotation.

A chart that cannot be loaded, or whose annotation is malformed, raises
and produces no report. A chart with nothing to list produces a report
with a package-level ``ReportNotice`` and no rows.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from chartdeps.core.chart import Chart, DependencyDeclaration, load_chart, shared_dependencies
from chartdeps.core.status.classifier import classify_dependency
from chartdeps.core.status.models import DependencyReport, ReportNotice, StatusResult

logger = logging.getLogger(__name__)


class SharedDependencyLister:
    """Builds dependency status reports for charts on disk.

    Args:
        loader: Callable loading a chart from a path. Defaults to
            ``load_chart``; tests may substitute a stub.
    """

    def __init__(self, loader: Callable[[Path], Chart] = load_chart) -> None:
        self._loader = loader

    def list_dependencies(self, chart_path: str | Path) -> DependencyReport:
        """Report the status of every regular ``Chart.yaml`` dependency.

        Raises:
            ChartLoadError: If the chart cannot be loaded.
        """
        path = Path(chart_path)
        chart = self._loader(path)
        deps = chart.metadata.dependencies
        if not deps:
            logger.info("No dependencies in %s", path)
            return DependencyReport(str(path), chart.name, notice=ReportNotice.NO_DEPENDENCIES)
        return DependencyReport(str(path), chart.name, self.classify_all(path, deps, chart))

    def list_shared_dependencies(self, chart_path: str | Path) -> DependencyReport:
        """Report the status of every dependency in the shared annotation.

        Raises:
            ChartLoadError: If the chart cannot be loaded.
            AnnotationError: If the annotation is present but malformed.
        """
        path = Path(chart_path)
        chart = self._loader(path)
        deps = shared_dependencies(chart)
        if deps is None:
            logger.info("No shared dependencies in %s", path)
            return DependencyReport(
                str(path), chart.name, notice=ReportNotice.NO_SHARED_DEPENDENCIES
            )
        return DependencyReport(str(path), chart.name, self.classify_all(path, deps, chart))

    @staticmethod
    def classify_all(
        chart_path: Path,
        deps: list[DependencyDeclaration],
        parent: Chart,
    ) -> list[StatusResult]:
        """Classify *deps* in order; one result per declaration."""
        return [classify_dependency(chart_path, dep, parent) for dep in deps]
