"""Payroll commands."""

import click

from ecolage.cli.error_handling import handle_domain_error, parse_amount_or_exit
from ecolage.domain import collections
from ecolage.domain.documents import employee_from_document
from ecolage.domain.errors import DomainError
from ecolage.domain.irsa import compute_irsa, format_irsa_calculation
from ecolage.domain.payroll import allowances_from_mapping, calculate_bulk_payroll, compute_salary
from ecolage.domain.rules import DEFAULT_IRSA_SCHEDULE
from ecolage.utils.amount_words import amount_to_words


def _line(label: str, amount: int) -> str:
    return f"{label:<28s}{amount:>14,} MGA"


@click.group()
def payroll_group():
    """Compute salaries, contributions and IRSA."""
    pass


@payroll_group.command("salary")
@click.argument("base")
@click.option("--transport", help="Transport allowance")
@click.option("--housing", help="Housing allowance")
@click.option("--meal", help="Meal allowance")
@click.option("--performance", help="Performance bonus")
@click.option("--other", help="Other allowances")
@click.option("--detail", is_flag=True, help="Show the per-bracket IRSA detail")
@click.pass_context
def salary(ctx, base: str, detail: bool, **allowance_options: str | None):
    """Compute the gross-to-net breakdown of a monthly salary.

    Examples:
        ecolage payroll salary 800000
        ecolage payroll salary "1 200 000" --transport 50000 --meal 30000
    """
    base_amount = parse_amount_or_exit(ctx, base, "base salary")
    values = {
        name: parse_amount_or_exit(ctx, value, f"{name} allowance")
        for name, value in allowance_options.items()
        if value is not None
    }
    try:
        calculation = compute_salary(base_amount, allowances_from_mapping(values))
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(_line("Salaire de base", calculation.base_salary))
    click.echo(_line("Indemnités", calculation.allowances.total))
    click.echo(_line("Salaire brut", calculation.gross_salary))
    click.echo(_line("CNAPS (1%)", calculation.cnaps))
    click.echo(_line("OSTIE (1%)", calculation.ostie))
    click.echo(_line("Cotisations salariales", calculation.total_employee_contributions))
    click.echo(_line("Revenu imposable", calculation.taxable_income))
    click.echo(_line("IRSA", calculation.irsa))
    click.echo(_line("Total retenues", calculation.total_deductions))
    click.echo(_line("Salaire net", calculation.net_salary))
    click.echo(f"{'Taux effectif IRSA':<28s}{calculation.effective_tax_rate * 100:>13.2f} %")
    click.echo(_line("Charges patronales", calculation.total_employer_contributions))
    click.echo(_line("Coût employeur", calculation.employer_cost))

    if detail:
        click.echo("")
        click.echo(format_irsa_calculation(calculation.irsa_detail))


@payroll_group.command("irsa")
@click.argument("taxable")
@click.pass_context
def irsa(ctx, taxable: str):
    """Compute IRSA on a taxable income, bracket by bracket."""
    amount = parse_amount_or_exit(ctx, taxable, "taxable income")
    click.echo(format_irsa_calculation(compute_irsa(amount)))


@payroll_group.command("bareme")
def bareme():
    """Show the IRSA bracket schedule."""
    click.echo("Barème IRSA:")
    for bracket in DEFAULT_IRSA_SCHEDULE.brackets:
        ceiling = "∞" if bracket.ceiling is None else f"{bracket.ceiling:,}"
        click.echo(f"  {bracket.floor:>9,} - {ceiling:>9s} MGA  {bracket.label}")
    if DEFAULT_IRSA_SCHEDULE.minimum_tax:
        click.echo(f"Minimum de perception: {DEFAULT_IRSA_SCHEDULE.minimum_tax:,} MGA")


@payroll_group.command("words")
@click.argument("amount")
@click.pass_context
def words(ctx, amount: str):
    """Spell out an amount as printed on receipts."""
    click.echo(amount_to_words(parse_amount_or_exit(ctx, amount, "amount")))


@payroll_group.command("bulk")
@click.option("--all", "include_inactive", is_flag=True, help="Include inactive employees")
@click.pass_context
def bulk(ctx, include_inactive: bool):
    """Compute a draft payroll for the employees collection."""
    store = ctx.obj["store"]
    try:
        documents = store.collection(collections.EMPLOYEES).get_all()
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    employees = [employee_from_document(doc) for doc in documents]
    if not include_inactive:
        employees = [employee for employee in employees if employee.status == "active"]
    if not employees:
        click.echo("No employees found.")
        return

    summaries = calculate_bulk_payroll(employees)
    click.echo(f"{'Employé':<28s}{'Brut':>12s}{'Retenues':>12s}{'Net':>12s}  Statut")
    click.echo("-" * 74)
    for summary in summaries:
        calc = summary.calculation
        click.echo(
            f"{summary.employee_name[:27]:<28s}{calc.gross_salary:>12,}"
            f"{calc.total_deductions:>12,}{calc.net_salary:>12,}  {summary.status.value}"
        )
    click.echo("-" * 74)
    total_net = sum(summary.calculation.net_salary for summary in summaries)
    total_cost = sum(summary.calculation.employer_cost for summary in summaries)
    click.echo(f"Total net: {total_net:,} MGA")
    click.echo(f"Coût employeur total: {total_cost:,} MGA")


def register_commands(cli):
    """Register payroll commands with main CLI."""
    cli.add_command(payroll_group, name="payroll")
