"""CLI error handling helpers."""

import click

from ecolage.domain.errors import DomainError
from ecolage.domain.money import round_half_up
from ecolage.utils.amount_parser import parse_amount
from ecolage.utils.date_parser import parse_date


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def warn_offline(message: str) -> None:
    """Render a degraded (offline) state without failing the command."""
    click.echo(f"Warning: {message}", err=True)


def parse_amount_or_exit(ctx: click.Context, value: str | None, label: str) -> int | None:
    """Parse an ariary amount argument, exiting with an error if it is invalid."""
    if value is None:
        return None
    try:
        amount = parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
    return round_half_up(amount)


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str):
    """Parse a date argument, exiting with an error if it is invalid."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)
