"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from chartdeps.core.chart import SHARED_DEPENDENCIES_ANNOTATION


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def chart_with_deps(builder) -> Path:
    """A chart with one packaged, one unpacked and one missing dependency."""
    chart = builder.chart("web", "1.0.0", dependencies=[
        {"name": "mariadb", "version": "11.x", "repository": "https://charts.example.com"},
        {"name": "redis", "version": ">=17.0.0 <18.0.0"},
        {"name": "memcached", "version": "6.0.0"},
    ])
    builder.archive(chart, "mariadb", "11.0.2")
    builder.subchart(chart, "redis", "17.3.0")
    return chart


@pytest.fixture
def chart_with_shared_deps(builder) -> Path:
    """A chart declaring shared dependencies in its annotation."""
    chart = builder.chart("web", "1.0.0", annotations={
        SHARED_DEPENDENCIES_ANNOTATION: (
            "- name: mariadb\n"
            "  version: 11.x\n"
            "  namespace: databases\n"
            "- name: redis\n"
            "  version: 17.3.0\n"
        ),
    })
    builder.archive(chart, "mariadb", "11.0.2")
    return chart
