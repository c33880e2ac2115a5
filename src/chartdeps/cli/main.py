"""chartdeps CLI: Dependency status reports for charts.

Entry point for the ``chartdeps`` command-line tool. Global options are
gathered into a ``Settings`` value passed down through the click context.

Commands:
    dependency list         - Status of regular ``Chart.yaml`` dependencies.
    shared-dependency list  - Status of shared dependencies.

Usage::

    chartdeps dependency list ./mychart
    chartdeps shared-dependency list ./mychart -o json
    chartdeps --no-colors -n apps shared-dependency list ./mychart-1.0.0.tgz
"""

from __future__ import annotations

import click

from chartdeps import __version__
from chartdeps.cli.dependency_cmd import dependency_group
from chartdeps.cli.settings import DEFAULT_NAMESPACE, Settings, configure_logging
from chartdeps.cli.shared_cmd import shared_dependency_group


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--namespace", "-n",
    envvar="CHARTDEPS_NAMESPACE",
    default=DEFAULT_NAMESPACE,
    show_default=True,
    help="Namespace scope for this request.",
)
@click.option("--debug", is_flag=True, envvar="CHARTDEPS_DEBUG", help="Enable verbose output.")
@click.option("--no-colors", is_flag=True, envvar="CHARTDEPS_NO_COLORS", help="Disable colors.")
@click.option("--no-emojis", is_flag=True, envvar="CHARTDEPS_NO_EMOJIS", help="Disable emojis.")
@click.pass_context
def cli(
    ctx: click.Context,
    namespace: str,
    debug: bool,
    no_colors: bool,
    no_emojis: bool,
) -> None:
    """chartdeps: Dependency and shared-dependency status for charts.

    Reports, for every dependency a chart declares, whether it is packaged
    under charts/, unpacked there, or why it cannot be resolved.
    """
    settings = Settings(
        namespace=namespace,
        debug=debug,
        no_colors=no_colors,
        no_emojis=no_emojis,
    )
    ctx.obj = settings
    configure_logging(settings)


cli.add_command(dependency_group)
cli.add_command(shared_dependency_group)
