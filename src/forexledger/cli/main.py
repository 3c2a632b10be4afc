"""Main CLI entry point."""

import logging

import click
from forexledger.database.factories import create_sqlite_database

# Import and register all commands at module level
from forexledger.cli.commands import book, entry, rate

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FOREXLEDGER_DB_PATH environment variable)",
    envvar="FOREXLEDGER_DB_PATH",
)
@click.option(
    "--user",
    default="local",
    show_default=True,
    help="User id recorded as creator of books and entries",
    envvar="FOREXLEDGER_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FOREXLEDGER_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str, log_level: str):
    """Forexledger - foreign-currency book keeping.

    Track balances of foreign-currency books, transfers between them and the
    TWD profit of what you hold.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user"] = user
        ctx.call_on_close(db.disconnect)


# Register all commands
book.register_commands(cli)
entry.register_commands(cli)
rate.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
