"""Salary calculation: gross, social contributions, IRSA and net."""

from dataclasses import fields
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ecolage.domain.entities import (
    Allowances,
    Employee,
    PayrollStatus,
    PayrollSummary,
    SalaryCalculation,
)
from ecolage.domain.errors import ValidationError, unknown_allowances
from ecolage.domain.irsa import compute_irsa
from ecolage.domain.money import round_half_up, to_amount
from ecolage.domain.rules import DEFAULT_PAYROLL_RULES, PayrollRules

ALLOWANCE_CATEGORIES = tuple(f.name for f in fields(Allowances))


def allowances_from_mapping(values: Optional[Mapping[str, Any]]) -> Allowances:
    """Build Allowances from a mapping of category name to amount.

    Missing categories default to 0 and amounts are coerced with
    ``to_amount``.

    Raises:
        ValidationError: If the mapping names a category outside the known set
    """
    values = values or {}
    unknown = sorted(set(values) - set(ALLOWANCE_CATEGORIES))
    if unknown:
        raise ValidationError(unknown_allowances(unknown))
    return Allowances(**{name: to_amount(values.get(name)) for name in ALLOWANCE_CATEGORIES})


def contribution(gross: int, rate: Decimal) -> int:
    """Return a contribution on gross salary, rounded to the ariary."""
    return round_half_up(Decimal(gross) * rate)


def compute_salary(
    base: Any,
    allowances: Optional[Allowances] = None,
    rules: PayrollRules = DEFAULT_PAYROLL_RULES,
) -> SalaryCalculation:
    """Compute the full gross-to-net breakdown of a salary.

    Inputs are coerced, never rejected: a missing or negative base or
    allowance counts as 0.

    Args:
        base: Base salary
        allowances: Optional allowances (all zero when omitted)
        rules: Contribution rates and IRSA schedule

    Returns:
        SalaryCalculation
    """
    base_salary = to_amount(base)
    allowances = allowances or Allowances()
    # Clamp whatever the caller put in the record
    allowances = Allowances(
        **{name: to_amount(getattr(allowances, name)) for name in ALLOWANCE_CATEGORIES}
    )

    gross = base_salary + allowances.total
    cnaps = contribution(gross, rules.cnaps.employee_rate)
    ostie = contribution(gross, rules.ostie.employee_rate)
    taxable_income = gross - cnaps - ostie

    irsa_detail = compute_irsa(taxable_income, rules.irsa)
    irsa = irsa_detail.total
    total_deductions = cnaps + ostie + irsa

    cnaps_employer = contribution(gross, rules.cnaps.employer_rate)
    ostie_employer = contribution(gross, rules.ostie.employer_rate)

    return SalaryCalculation(
        base_salary=base_salary,
        allowances=allowances,
        gross_salary=gross,
        cnaps=cnaps,
        ostie=ostie,
        taxable_income=taxable_income,
        irsa=irsa,
        irsa_detail=irsa_detail,
        total_deductions=total_deductions,
        net_salary=gross - total_deductions,
        effective_tax_rate=irsa / taxable_income if taxable_income > 0 else 0.0,
        cnaps_employer=cnaps_employer,
        ostie_employer=ostie_employer,
        employer_cost=gross + cnaps_employer + ostie_employer,
    )


def calculate_bulk_payroll(
    employees: Iterable[Employee],
    rules: PayrollRules = DEFAULT_PAYROLL_RULES,
) -> list[PayrollSummary]:
    """Compute a draft payroll line for every employee."""
    return [
        PayrollSummary(
            employee_id=employee.id,
            employee_name=employee.full_name,
            position=employee.position,
            department=employee.department,
            calculation=compute_salary(employee.salary, rules=rules),
            status=PayrollStatus.DRAFT,
        )
        for employee in employees
    ]
