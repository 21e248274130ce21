"""Main CLI entry point."""

import click

from ecolage.log import DEFAULT_LEVEL, LOG_LEVEL_ENV, init_logging
from ecolage.store.factories import DB_PATH_ENV, create_sqlite_store

# Import and register all commands at module level
from ecolage.cli.commands import collection, payroll, tuition

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=DEFAULT_LEVEL,
    show_default=True,
    envvar=LOG_LEVEL_ENV,
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Ecolage - School administration toolkit.

    Compute Malagasy payroll (CNAPS, OSTIE, IRSA), manage per-class tuition
    amounts and edit the school's document collections.
    """
    ctx.ensure_object(dict)
    init_logging(log_level)

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None and "store" not in ctx.obj:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
payroll.register_commands(cli)
tuition.register_commands(cli)
collection.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
