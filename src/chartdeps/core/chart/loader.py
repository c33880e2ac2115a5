"""Chart loader --- directories and gzip tar archives.

Both on-disk forms are first flattened into a mapping of chart-relative
POSIX paths to file contents, then handed to ``load_files``:

- A **directory** is walked recursively; every regular file is read.
- An **archive** (``.tgz``) must hold exactly one top-level directory;
  that prefix is stripped from every member name.

``load_files`` parses ``Chart.yaml`` and recursively loads every subchart
found under ``charts/``: each ``charts/<dir>/`` group becomes a subchart,
and each ``charts/*.tgz`` file is loaded as a nested archive. Any failure
raises ``ChartLoadError``; there is no partially loaded chart.
"""

from __future__ import annotations

import io
import logging
import tarfile
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from chartdeps.core.chart.models import Chart, ChartMetadata, DependencyDeclaration
from chartdeps.exceptions import ChartLoadError

logger = logging.getLogger(__name__)

CHART_FILE = "Chart.yaml"
CHARTS_DIR = "charts"
ARCHIVE_EXTENSION = ".tgz"

_NUMERIC_TAGS = ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float")


class _ChartYamlLoader(yaml.SafeLoader):
    """Safe loader that keeps numeric scalars as their source text.

    Unquoted versions such as ``1.10`` load as the string ``"1.10"``.
    """


_ChartYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _NUMERIC_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def load_chart(path: str | Path) -> Chart:
    """Load a chart from a directory or a ``.tgz`` archive.

    Args:
        path: Chart directory or archive file.

    Returns:
        The loaded ``Chart`` with its subchart tree.

    Raises:
        ChartLoadError: If the path does not exist or the chart is invalid.
    """
    target = Path(path)
    if target.is_dir():
        return load_directory(target)
    if target.is_file():
        return load_archive(target)
    raise ChartLoadError(f"Chart path does not exist: {target}")


def load_directory(path: Path) -> Chart:
    """Load an unpacked chart directory."""
    files: dict[str, bytes] = {}
    try:
        for item in sorted(path.rglob("*")):
            if item.is_file():
                files[item.relative_to(path).as_posix()] = item.read_bytes()
    except OSError as exc:
        raise ChartLoadError(f"Cannot read chart directory {path}: {exc}") from exc
    return load_files(files, origin=str(path))


def load_archive(path: Path) -> Chart:
    """Load a chart packaged as a gzip tar archive."""
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ChartLoadError(f"Cannot read chart archive {path}: {exc}") from exc
    return load_archive_bytes(data, origin=str(path))


def load_archive_bytes(data: bytes, origin: str = "") -> Chart:
    """Load a chart from the bytes of a gzip tar archive.

    Raises:
        ChartLoadError: If the archive is corrupt or holds more than one
            top-level directory.
    """
    files: dict[str, bytes] = {}
    top: str | None = None
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tar:
            for member in tar.getmembers():
                if not member.isfile():
                    continue
                parts = PurePosixPath(member.name).parts
                if len(parts) < 2:
                    raise ChartLoadError(
                        f"Archive {origin} holds a file outside a chart directory: {member.name}"
                    )
                if top is None:
                    top = parts[0]
                elif parts[0] != top:
                    raise ChartLoadError(
                        f"Archive {origin} holds more than one chart: {top}, {parts[0]}"
                    )
                handle = tar.extractfile(member)
                if handle is None:  # pragma: no cover
                    continue
                files[PurePosixPath(*parts[1:]).as_posix()] = handle.read()
    except (tarfile.TarError, EOFError, OSError) as exc:
        raise ChartLoadError(f"Corrupt chart archive {origin}: {exc}") from exc
    return load_files(files, origin=origin)


# ---------------------------------------------------------------------------
# Flattened loading
# ---------------------------------------------------------------------------


def load_files(files: dict[str, bytes], origin: str = "") -> Chart:
    """Build a chart from a mapping of chart-relative paths to contents.

    Args:
        files: Mapping of POSIX paths (e.g. ``"charts/db/Chart.yaml"``)
            to file contents.
        origin: Human-readable location used in error messages and
            recorded as ``Chart.path``.
    """
    if CHART_FILE not in files:
        raise ChartLoadError(f"{CHART_FILE} file is missing in {origin or 'chart'}")

    metadata = parse_metadata(files[CHART_FILE], origin)
    chart = Chart(metadata=metadata, path=origin)

    groups: dict[str, dict[str, bytes]] = {}
    archives: dict[str, bytes] = {}
    prefix = CHARTS_DIR + "/"
    for name, content in files.items():
        if not name.startswith(prefix):
            continue
        rest = name[len(prefix):]
        if "/" in rest:
            subdir, inner = rest.split("/", 1)
            groups.setdefault(subdir, {})[inner] = content
        elif rest.endswith(ARCHIVE_EXTENSION):
            archives[rest] = content

    subcharts: list[tuple[str, Chart]] = []
    for subdir, subfiles in groups.items():
        sub_origin = f"{origin}/{CHARTS_DIR}/{subdir}"
        subcharts.append((subdir, load_files(subfiles, origin=sub_origin)))
    for filename, content in archives.items():
        sub_origin = f"{origin}/{CHARTS_DIR}/{filename}"
        subcharts.append((filename, load_archive_bytes(content, origin=sub_origin)))

    chart.dependencies = [sub for _, sub in sorted(subcharts, key=lambda pair: pair[0])]
    logger.debug(
        "Loaded chart %s-%s from %s with %d subchart(s)",
        chart.name, chart.version, origin, len(chart.dependencies),
    )
    return chart


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_metadata(raw: bytes, origin: str = "") -> ChartMetadata:
    """Parse the contents of ``Chart.yaml``.

    Raises:
        ChartLoadError: On invalid YAML, a non-mapping document, a missing
            name or version, or a dependency entry without a name.
    """
    try:
        data = yaml.load(raw, Loader=_ChartYamlLoader)
    except yaml.YAMLError as exc:
        raise ChartLoadError(f"Invalid {CHART_FILE} in {origin}: {exc}") from exc

    if not isinstance(data, dict):
        raise ChartLoadError(f"{CHART_FILE} in {origin} is not a mapping")

    name = _as_text(data.get("name")).strip()
    if not name:
        raise ChartLoadError(f"{CHART_FILE} in {origin}: chart.metadata.name is required")
    version = _as_text(data.get("version")).strip()
    if not version:
        raise ChartLoadError(f"{CHART_FILE} in {origin}: chart.metadata.version is required")

    annotations_raw = data.get("annotations") or {}
    if not isinstance(annotations_raw, dict):
        raise ChartLoadError(f"{CHART_FILE} in {origin}: annotations must be a mapping")
    annotations: dict[str, Any] = {}
    for key, value in annotations_raw.items():
        if isinstance(value, (dict, list)):
            annotations[str(key)] = value
        else:
            annotations[str(key)] = _as_text(value)

    return ChartMetadata(
        name=name,
        version=version,
        api_version=_as_text(data.get("apiVersion")) or "v2",
        description=_as_text(data.get("description")),
        app_version=_as_text(data.get("appVersion")),
        annotations=annotations,
        dependencies=_parse_dependencies(data.get("dependencies"), origin),
    )


def _parse_dependencies(raw: Any, origin: str) -> list[DependencyDeclaration]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ChartLoadError(f"{CHART_FILE} in {origin}: dependencies must be a list")

    deps: list[DependencyDeclaration] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ChartLoadError(
                f"{CHART_FILE} in {origin}: dependency #{index + 1} is not a mapping"
            )
        name = _as_text(entry.get("name")).strip()
        if not name:
            raise ChartLoadError(
                f"{CHART_FILE} in {origin}: dependency #{index + 1} has no name"
            )
        repository = entry.get("repository")
        deps.append(DependencyDeclaration(
            name=name,
            version=_as_text(entry.get("version")),
            repository=_as_text(repository) if repository is not None else None,
        ))
    return deps
