"""Per-invocation CLI settings.

Global options are collected once by the root ``chartdeps`` group into a
frozen ``Settings`` value stored on the click context object, and passed
explicitly to everything that renders output. There is no module-level
mutable configuration.

Each option can also be set through the environment:

=====================  ===========================
option                 environment variable
=====================  ===========================
``--namespace``        ``CHARTDEPS_NAMESPACE``
``--debug``            ``CHARTDEPS_DEBUG``
``--no-colors``        ``CHARTDEPS_NO_COLORS``
``--no-emojis``        ``CHARTDEPS_NO_EMOJIS``
=====================  ===========================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import click
from rich.console import Console
from rich.logging import RichHandler

DEFAULT_NAMESPACE = "default"


@dataclass(frozen=True)
class Settings:
    """Options shared by every chartdeps command.

    Attributes:
        namespace: Namespace shown for shared dependencies that do not
            declare their own.
        debug: Emit debug logging on stderr.
        no_colors: Disable colored output.
        no_emojis: Drop emojis from notices.
    """

    namespace: str = DEFAULT_NAMESPACE
    debug: bool = False
    no_colors: bool = False
    no_emojis: bool = False

    def console(self, stderr: bool = False) -> Console:
        """Build a rich console honoring the color and emoji toggles."""
        return Console(stderr=stderr, no_color=self.no_colors, emoji=not self.no_emojis)

    def emoji(self, code: str) -> str:
        """Return ``code`` followed by a space, or nothing when emojis are off."""
        return "" if self.no_emojis else f"{code} "


def configure_logging(settings: Settings) -> None:
    """Attach a stderr handler to the ``chartdeps`` logger."""
    logger = logging.getLogger("chartdeps")
    logger.handlers.clear()
    handler = RichHandler(
        console=settings.console(stderr=True),
        show_time=False,
        show_path=settings.debug,
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if settings.debug else logging.WARNING)


def get_settings(ctx: click.Context) -> Settings:
    """Fetch the settings stored by the root group, or defaults."""
    obj = ctx.find_object(Settings)
    return obj if obj is not None else Settings()
