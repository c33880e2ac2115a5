"""Shared-dependency annotation parsing.

Charts may list *shared* dependencies (charts expected to be installed once
and shared between releases) in a metadata annotation rather than in the
regular ``dependencies`` list::

    annotations:
      hypper.cattle.io/shared-dependencies: |
        - name: mariadb
          version: ">=9.0.0 <10.0.0"
          repository: https://charts.example.com
          namespace: databases

The annotation value is a YAML string holding a list of mappings. Only the
keys ``name``, ``version``, ``repository`` and ``namespace`` are accepted,
with string values; ``name`` is required. Revisions of this annotation
have been written with other casings and shapes, so anything else is
rejected with ``AnnotationError`` instead of being coerced.
"""

from __future__ import annotations

from typing import Any

import yaml

from chartdeps.core.chart.models import Chart, DependencyDeclaration
from chartdeps.exceptions import AnnotationError

SHARED_DEPENDENCIES_ANNOTATION = "hypper.cattle.io/shared-dependencies"

_ALLOWED_KEYS = frozenset({"name", "version", "repository", "namespace"})


def shared_dependencies(chart: Chart) -> list[DependencyDeclaration] | None:
    """Return the shared dependencies declared by *chart*.

    Returns:
        The declarations in annotation order, or None when the chart has
        no shared-dependency annotation at all.

    Raises:
        AnnotationError: If the annotation is present but malformed.
    """
    annotations = chart.metadata.annotations
    if SHARED_DEPENDENCIES_ANNOTATION not in annotations:
        return None
    return parse_shared_dependencies(
        annotations[SHARED_DEPENDENCIES_ANNOTATION], source=chart.path or chart.name
    )


def parse_shared_dependencies(raw: Any, source: str = "") -> list[DependencyDeclaration]:
    """Parse the raw annotation value into dependency declarations.

    Args:
        raw: The annotation value as stored in the chart metadata.
        source: Chart location used in error messages.

    Raises:
        AnnotationError: On non-string values, invalid YAML, a document
            that is not a list, or any entry that is not a mapping with a
            non-empty string ``name`` and only known string-valued keys.
    """
    where = f" for chart {source}" if source else ""
    if not isinstance(raw, str):
        raise AnnotationError(
            f"{SHARED_DEPENDENCIES_ANNOTATION} must be a YAML string{where}, "
            f"got {type(raw).__name__}"
        )
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise AnnotationError(
            f"{SHARED_DEPENDENCIES_ANNOTATION} is not valid YAML{where}: {exc}"
        ) from exc

    if not isinstance(data, list):
        raise AnnotationError(
            f"{SHARED_DEPENDENCIES_ANNOTATION} must hold a list of dependencies{where}"
        )

    deps: list[DependencyDeclaration] = []
    for index, entry in enumerate(data, start=1):
        if not isinstance(entry, dict):
            raise AnnotationError(f"Shared dependency #{index}{where} is not a mapping")
        unknown = sorted(str(k) for k in entry if k not in _ALLOWED_KEYS)
        if unknown:
            raise AnnotationError(
                f"Shared dependency #{index}{where} has unknown key(s): {', '.join(unknown)}"
            )
        for key, value in entry.items():
            if value is not None and not isinstance(value, str):
                raise AnnotationError(
                    f"Shared dependency #{index}{where}: {key} must be a string"
                )
        name = (entry.get("name") or "").strip()
        if not name:
            raise AnnotationError(f"Shared dependency #{index}{where} has no name")
        deps.append(DependencyDeclaration(
            name=name,
            version=entry.get("version") or "",
            repository=entry.get("repository"),
            namespace=entry.get("namespace"),
        ))
    return deps
