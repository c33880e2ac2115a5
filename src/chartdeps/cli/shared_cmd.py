"""``chartdeps shared-dependency list <chart>``: Status of shared dependencies.

Shared dependencies are declared in the
``hypper.cattle.io/shared-dependencies`` annotation of ``Chart.yaml``
rather than in its ``dependencies`` list. Each is classified exactly like
a regular dependency.

Exit Codes:
    0 - Report printed (including "no shared dependencies").
    1 - The chart could not be loaded or its annotation is malformed.
"""

from __future__ import annotations

import sys

import click

from chartdeps.cli.output import OUTPUT_FORMATS, print_report
from chartdeps.cli.settings import get_settings
from chartdeps.core.status import SharedDependencyLister
from chartdeps.exceptions import AnnotationError, ChartDepsError


@click.group("shared-dependency")
def shared_dependency_group() -> None:
    """Inspect a chart's shared dependencies."""


@shared_dependency_group.command("list")
@click.argument("chart", type=click.Path())
@click.option(
    "--output", "-o", "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default="table",
    help="Output format (default: table).",
)
@click.pass_context
def shared_list_command(ctx: click.Context, chart: str, output_format: str) -> None:
    """List the shared dependencies of CHART and whether each is satisfied.

    CHART is a chart directory or a packaged ``.tgz`` chart.
    """
    settings = get_settings(ctx)
    try:
        report = SharedDependencyLister().list_shared_dependencies(chart)
    except AnnotationError as exc:
        click.echo(f"Error: Chart.yaml metadata is malformed for chart {chart}: {exc}", err=True)
        sys.exit(1)
    except ChartDepsError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    print_report(report, settings, output_format, shared=True)
