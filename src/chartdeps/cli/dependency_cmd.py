"""``chartdeps dependency list <chart>``: Status of regular chart dependencies.

Loads the chart (directory or ``.tgz``), then classifies every entry of
the ``dependencies`` list in ``Chart.yaml`` against the archives in
``charts/`` and the unpacked subcharts.

Exit Codes:
    0 - Report printed (including "no dependencies").
    1 - The chart could not be loaded.
"""

from __future__ import annotations

import sys

import click

from chartdeps.cli.output import OUTPUT_FORMATS, print_report
from chartdeps.cli.settings import get_settings
from chartdeps.core.status import SharedDependencyLister
from chartdeps.exceptions import ChartDepsError


@click.group("dependency")
def dependency_group() -> None:
    """Inspect a chart's dependencies."""


@dependency_group.command("list")
@click.argument("chart", type=click.Path())
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="table",
    help="Output format (default: table).",
)
@click.pass_context
def dependency_list_command(ctx: click.Context, chart: str, output_format: str) -> None:
    """List the dependencies of CHART and whether each is satisfied.

    CHART is a chart directory or a packaged ``.tgz`` chart.
    """
    settings = get_settings(ctx)
    try:
        report = SharedDependencyLister().list_dependencies(chart)
    except ChartDepsError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    print_report(report, settings, output_format)
