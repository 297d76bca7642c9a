"""action-listener CLI entry point: Click group with subcommands."""

import logging

import click

from action_listener import __version__


@click.group()
@click.version_option(version=__version__, prog_name="action-listener")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Logging level for store and middleware output",
)
def cli(log_level: str) -> None:
    """Action listener - replay actions through a store with runtime listeners."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from action_listener.cli.replay import replay  # noqa: E402

cli.add_command(replay)
