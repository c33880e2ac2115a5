"""Report rendering for the chartdeps CLI.

Renders a ``DependencyReport`` as a rich table, JSON or YAML. Structured
formats always emit a list (empty when the report only carries a notice)
so that consumers never have to special-case ``null``.

Status Color Mapping:
    ok, unpacked = green; missing = bold red; wrong version,
    invalid version = yellow; too many matches, bad pattern = magenta
"""

from __future__ import annotations

import json
from typing import Any

import click
import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from chartdeps.cli.settings import Settings
from chartdeps.core.status import DependencyReport, DependencyStatus

OUTPUT_FORMATS = ("table", "json", "yaml")

_STATUS_STYLES: dict[DependencyStatus, str] = {
    DependencyStatus.OK: "green",
    DependencyStatus.UNPACKED: "green",
    DependencyStatus.MISSING: "bold red",
    DependencyStatus.WRONG_VERSION: "yellow",
    DependencyStatus.INVALID_VERSION: "yellow",
    DependencyStatus.TOO_MANY_MATCHES: "magenta",
    DependencyStatus.BAD_PATTERN: "magenta",
}


def status_style(status: DependencyStatus) -> str:
    """Return the Rich style string for a dependency status."""
    return _STATUS_STYLES.get(status, "white")


def report_rows(
    report: DependencyReport,
    settings: Settings,
    shared: bool = False,
) -> list[dict[str, Any]]:
    """Convert a report to JSON/YAML-serializable rows, in report order.

    Shared dependencies without a namespace of their own are shown in the
    namespace from *settings*; regular dependencies carry no namespace.
    """
    rows: list[dict[str, Any]] = []
    for result in report.results:
        row = result.as_dict()
        if shared:
            row["namespace"] = result.namespace or settings.namespace
        else:
            del row["namespace"]
        rows.append(row)
    return rows


def print_notice(report: DependencyReport, settings: Settings) -> None:
    """Print the report's package-level notice as a warning on stderr."""
    if report.notice is None:
        return
    console = settings.console(stderr=True)
    console.print(
        f"{settings.emoji(':warning:')}[bold yellow]WARNING:[/bold yellow] "
        f"{escape(report.notice.value)} in {escape(report.chart_path)}",
        soft_wrap=True,
    )


def print_table(report: DependencyReport, settings: Settings, shared: bool = False) -> None:
    """Print the report as a rich table on stdout."""
    console = settings.console()
    title = "Shared Dependencies" if shared else "Dependencies"
    table = Table(title=f"{title} of {report.chart_name}", show_header=True, header_style="bold")
    table.add_column("NAME", style="bold")
    table.add_column("VERSION")
    if shared:
        table.add_column("NAMESPACE")
    table.add_column("REPOSITORY", style="dim")
    table.add_column("STATUS")

    for row, result in zip(report_rows(report, settings, shared), report.results):
        cells: list[str | Text] = [row["name"], row["version"]]
        if shared:
            cells.append(row["namespace"])
        cells.append(row["repository"])
        cells.append(Text(row["status"], style=status_style(result.status)))
        table.add_row(*cells)
    console.print(table)


def print_report(
    report: DependencyReport,
    settings: Settings,
    output_format: str = "table",
    shared: bool = False,
) -> None:
    """Render *report* in the requested format.

    Args:
        report: The report to render.
        settings: Invocation settings (namespace, colors, emojis).
        output_format: One of ``table``, ``json`` or ``yaml``.
        shared: Whether the report lists shared dependencies.
    """
    print_notice(report, settings)
    if output_format == "json":
        click.echo(json.dumps(report_rows(report, settings, shared), indent=2))
    elif output_format == "yaml":
        click.echo(yaml.safe_dump(report_rows(report, settings, shared), sort_keys=False), nl=False)
    elif report.notice is None:
        print_table(report, settings, shared)
