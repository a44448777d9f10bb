"""Main CLI application."""

import logging
from typing import List

import click
import typer
from dotenv import load_dotenv
from typer.core import TyperCommand

# Load .env file if it exists
load_dotenv()

from ..commands import Command, Session, build_registry
from ..config import Config
from ..db import PostgresGateway
from ..exceptions import GatorError
from ..log import configure_logging

logger = logging.getLogger("gator")

app = typer.Typer(
    name="gator",
    help="Gator - command-line RSS aggregator",
    add_completion=False,
)


class PassthroughCommand(TyperCommand):
    """Command that hands its arguments over untouched.

    Click drops ``--`` while parsing, so the raw list is kept in
    ``ctx.meta`` before parsing starts.
    """

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        ctx.meta["raw_args"] = list(args)
        return super().parse_args(ctx, args)


@app.command(
    cls=PassthroughCommand,
    add_help_option=False,
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
def main(ctx: typer.Context) -> None:
    """Run one gator command: gator <command> [args...]

    Commands: login, register, reset, users, agg, addfeed, feeds,
    follow, following, unfollow.
    """
    configure_logging()

    raw_args = ctx.meta.get("raw_args", [])
    if not raw_args:
        logger.error("No command provided")
        raise typer.Exit(1)

    command = Command.from_argv(raw_args[0], raw_args[1:])
    config = Config()

    try:
        gateway = PostgresGateway(config.db_url)
    except GatorError as e:
        logger.error("Error reading config: %s", e)
        raise typer.Exit(1)

    try:
        build_registry().run(Session(config, gateway), command)
    except GatorError as e:
        logger.error("Error running command: %s", e)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        raise typer.Exit(1)
    finally:
        gateway.close()


if __name__ == "__main__":
    app()
