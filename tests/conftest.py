"""Shared fixtures for chartdeps tests.

``ChartBuilder`` writes charts to a temporary directory: unpacked chart
directories, ``charts/`` subcharts, and real ``.tgz`` archives built in
memory with ``tarfile``.
"""

from __future__ import annotations

import io
import pathlib
import tarfile
from typing import Any

import pytest
import yaml


def chart_yaml(
    name: str,
    version: str,
    dependencies: list[dict[str, Any]] | None = None,
    annotations: dict[str, Any] | None = None,
) -> str:
    """Render a minimal Chart.yaml document."""
    data: dict[str, Any] = {"apiVersion": "v2", "name": name, "version": version}
    if dependencies is not None:
        data["dependencies"] = dependencies
    if annotations is not None:
        data["annotations"] = annotations
    return yaml.safe_dump(data, sort_keys=False)


def archive_bytes(
    name: str,
    version: str,
    extra_files: dict[str, bytes] | None = None,
) -> bytes:
    """Build a gzip tar archive holding a chart under ``<name>/``."""
    files = {"Chart.yaml": chart_yaml(name, version).encode()}
    files.update(extra_files or {})
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for rel, content in files.items():
            info = tarfile.TarInfo(f"{name}/{rel}")
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


class ChartBuilder:
    """Writes chart fixtures below a root directory."""

    def __init__(self, root: pathlib.Path) -> None:
        self.root = root

    def chart(
        self,
        name: str = "parent",
        version: str = "1.0.0",
        dependencies: list[dict[str, Any]] | None = None,
        annotations: dict[str, Any] | None = None,
        directory: pathlib.Path | None = None,
    ) -> pathlib.Path:
        """Write an unpacked chart directory and return its path."""
        target = directory or self.root / name
        target.mkdir(parents=True, exist_ok=True)
        (target / "Chart.yaml").write_text(
            chart_yaml(name, version, dependencies, annotations)
        )
        return target

    def subchart(self, parent: pathlib.Path, name: str, version: str) -> pathlib.Path:
        """Write an unpacked subchart under ``<parent>/charts/<name>``."""
        return self.chart(name, version, directory=parent / "charts" / name)

    def archive(
        self,
        parent: pathlib.Path,
        name: str,
        version: str,
        filename: str | None = None,
    ) -> pathlib.Path:
        """Write a packaged subchart under ``<parent>/charts/``."""
        charts = parent / "charts"
        charts.mkdir(parents=True, exist_ok=True)
        path = charts / (filename or f"{name}-{version}.tgz")
        path.write_bytes(archive_bytes(name, version))
        return path

    def packaged(
        self,
        name: str,
        version: str,
        dependencies: list[dict[str, Any]] | None = None,
        annotations: dict[str, Any] | None = None,
        subcharts: dict[str, str] | None = None,
    ) -> pathlib.Path:
        """Write a packaged chart whose ``charts/`` holds unpacked subcharts."""
        extra = {
            f"charts/{sub}/Chart.yaml": chart_yaml(sub, sub_version).encode()
            for sub, sub_version in (subcharts or {}).items()
        }
        extra["Chart.yaml"] = chart_yaml(name, version, dependencies, annotations).encode()
        path = self.root / f"{name}-{version}.tgz"
        path.write_bytes(archive_bytes(name, version, extra))
        return path


@pytest.fixture
def builder(tmp_path: pathlib.Path) -> ChartBuilder:
    """Create a ChartBuilder rooted in a temporary directory."""
    return ChartBuilder(tmp_path)
