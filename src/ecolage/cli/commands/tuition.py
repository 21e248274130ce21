"""Tuition (écolage) commands."""

from dataclasses import replace
from datetime import date

import click

from ecolage.cli.error_handling import (
    handle_domain_error,
    parse_amount_or_exit,
    parse_date_or_exit,
)
from ecolage.domain import collections
from ecolage.domain.entities import TuitionSettings
from ecolage.domain.errors import DomainError
from ecolage.domain.tuition import TuitionService
from ecolage.utils.date_parser import school_year_for


@click.group()
def tuition_group():
    """Manage per-class tuition amounts."""
    pass


@tuition_group.command("suggest")
@click.argument("class_name", metavar="CLASS")
@click.option("--level", default="", help="Class level (e.g. 'Maternelle')")
@click.pass_context
def suggest(ctx, class_name: str, level: str):
    """Suggest the tuition amounts to charge for a class.

    Examples:
        ecolage tuition suggest GSA
        ecolage tuition suggest "11B" --level Primaire
    """
    service = TuitionService(ctx.obj["store"])
    try:
        amount = service.get_suggested_amount(class_name, level)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Classe: {class_name} ({amount.source.value})")
    click.echo(f"Mensualité: {amount.monthly_amount:,} MGA")
    click.echo(f"Annuel (10 mois): {amount.annual_amount:,} MGA")
    click.echo(f"Droit d'inscription: {amount.registration_fee:,} MGA")
    click.echo(f"Frais d'examen: {amount.exam_fee:,} MGA")


@tuition_group.command("set")
@click.argument("class_name", metavar="CLASS")
@click.argument("level")
@click.argument("monthly")
@click.option("--registration-fee", help="Registration fee")
@click.option("--exam-fee", help="Exam fee")
@click.option("--notes", help="Notes")
@click.option(
    "--effective-date",
    help="Date the amount applies from (YYYY-MM-DD or relative like 'today')",
)
@click.pass_context
def set_amount(
    ctx,
    class_name: str,
    level: str,
    monthly: str,
    registration_fee: str | None,
    exam_fee: str | None,
    notes: str | None,
    effective_date: str | None,
):
    """Configure the tuition amount of a class.

    Examples:
        ecolage tuition set GSA Maternelle 155000
        ecolage tuition set 7 Primaire "200 000 Ar" --exam-fee 30000
    """
    service = TuitionService(ctx.obj["store"])
    monthly_amount = parse_amount_or_exit(ctx, monthly, "monthly amount")
    registration = parse_amount_or_exit(ctx, registration_fee, "registration fee")
    exam = parse_amount_or_exit(ctx, exam_fee, "exam fee")
    start = parse_date_or_exit(ctx, effective_date, "effective date")

    try:
        doc_id = service.set_class_amount(
            class_name=class_name,
            level=level,
            monthly_amount=monthly_amount,
            registration_fee=registration,
            exam_fee=exam,
            effective_date=start,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Set tuition for '{class_name}' to {monthly_amount:,} MGA/month (ID: {doc_id})")


@tuition_group.command("list")
@click.pass_context
def list_amounts(ctx):
    """List configured tuition amounts."""
    service = TuitionService(ctx.obj["store"])
    try:
        amounts = service.get_all_class_amounts()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not amounts:
        click.echo("No tuition amounts configured. Run 'tuition init-defaults' to create them.")
        return

    click.echo("\nTuition amounts:")
    click.echo("-" * 72)
    for amount in sorted(amounts, key=lambda a: (a.level, a.class_name)):
        status = "" if amount.is_active else "  (inactive)"
        click.echo(
            f"{amount.class_name:10s} | {amount.level:12s} | "
            f"{amount.monthly_amount:>9,} /mois | {amount.annual_amount:>10,} /an{status}"
        )


@tuition_group.command("init-defaults")
@click.pass_context
def init_defaults(ctx):
    """Store the default amounts for every class of the classes collection."""
    store = ctx.obj["store"]
    service = TuitionService(store)
    try:
        classes = [doc.data for doc in store.collection(collections.CLASSES).get_all()]
        written = service.initialize_default_amounts(classes)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not written:
        click.echo("No classes found.")
        return
    click.echo(f"Initialized default tuition for {len(written)} class(es)")


@tuition_group.command("deactivate")
@click.argument("class_name", metavar="CLASS")
@click.pass_context
def deactivate(ctx, class_name: str):
    """Deactivate the configured amount of a class."""
    service = TuitionService(ctx.obj["store"])
    try:
        service.deactivate_class_amount(class_name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deactivated tuition for '{class_name}'")


@tuition_group.command("settings")
@click.option("--monthly", help="Default monthly amount")
@click.option("--registration-fee", help="Default registration fee")
@click.option("--exam-fee", help="Default exam fee")
@click.option("--academic-year", help="Academic year (e.g. 2025-2026)")
@click.pass_context
def settings(
    ctx,
    monthly: str | None,
    registration_fee: str | None,
    exam_fee: str | None,
    academic_year: str | None,
):
    """Show or change the school-wide tuition settings.

    Without options the current settings are shown. Any option saves the
    settings, starting from the built-in defaults when none were saved yet.
    """
    service = TuitionService(ctx.obj["store"])
    changes = {
        "default_monthly_amount": parse_amount_or_exit(ctx, monthly, "monthly amount"),
        "default_registration_fee": parse_amount_or_exit(ctx, registration_fee, "registration fee"),
        "default_exam_fee": parse_amount_or_exit(ctx, exam_fee, "exam fee"),
        "academic_year": academic_year,
    }
    changes = {key: value for key, value in changes.items() if value is not None}

    try:
        current = service.get_settings()
        if changes:
            base = current or TuitionSettings(
                default_monthly_amount=service.defaults.default_monthly_amount,
                default_registration_fee=service.defaults.registration_fee,
                default_exam_fee=service.defaults.exam_fee,
                academic_year=school_year_for(date.today()),
            )
            current = replace(base, **changes)
            service.update_settings(current)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if current is None:
        click.echo("No tuition settings saved.")
        return
    schedule = current.payment_schedule
    click.echo(f"Année scolaire: {current.academic_year}")
    click.echo(f"Mensualité par défaut: {current.default_monthly_amount:,} MGA")
    click.echo(f"Droit d'inscription par défaut: {current.default_registration_fee:,} MGA")
    click.echo(f"Frais d'examen par défaut: {current.default_exam_fee:,} MGA")
    click.echo(
        f"Échéancier: mois {schedule.start_month} à {schedule.end_month}, "
        f"{schedule.total_months} mensualités"
    )


def register_commands(cli):
    """Register tuition commands with main CLI."""
    cli.add_command(tuition_group, name="tuition")
