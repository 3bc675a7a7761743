"""Main CLI entry point for social-service management commands."""

import click

from social_service import __version__
from social_service.cli.commands import database, server
from social_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="social-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Social Service CLI - run the GraphQL server and manage its database.

    \b
    Commands:
      serve      Run the server with uvicorn
      db         Create, seed and inspect the database

    \b
    Quick Start:
      social-service db init    # Create tables and seed tiers
      social-service serve      # Serve GraphQL at /graphql
    """
    ctx.ensure_object(dict)


cli.add_command(server.serve)
cli.add_command(database.db)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
