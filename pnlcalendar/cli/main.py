"""Main CLI entry point for pnlcalendar.

This module provides the main click group and lazy loading
of the command modules to keep startup fast.
"""

import logging

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their
    commands is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "pnlcalendar.cli.journal",
    "add": "pnlcalendar.cli.journal",
    "delete": "pnlcalendar.cli.journal",
    "month": "pnlcalendar.cli.journal",
    "goal": "pnlcalendar.cli.goals",
    "chart": "pnlcalendar.cli.chart",
    "event": "pnlcalendar.cli.events",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(level: str | int) -> None:
    """Route log records through rich on stderr.

    Accepts a level name ("INFO") or number (20); anything else falls
    back to WARNING.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    if isinstance(level, int) and not isinstance(level, bool):
        level = logging.getLevelName(level)
    level = str(level).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "WARNING"

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="pnlcalendar")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """pnlcalendar - a calendar journal for daily trading P&L.

    Record each day's profit or loss, track a monthly goal, annotate
    days with events and chart your cumulative performance.

    \b
    Quick Start:
      pnlcal add 2025-11-03 250 --trades 4   # Record a day
      pnlcal goal set 1000                   # Set this month's goal
      pnlcal month                           # View the calendar
      pnlcal chart --range 30d               # Cumulative P&L
    """
    from pnlcalendar.cli.common import get_config

    ctx.ensure_object(dict)
    config = get_config()
    ctx.obj["config"] = config

    level = "DEBUG" if verbose else config.get("logging", {}).get("level", "WARNING")
    configure_logging(level)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
