"""IRSA (Impôt sur les Revenus Salariaux et Assimilés) calculation."""

from decimal import Decimal
from typing import Any

from ecolage.domain.entities import IRSABracketLine, IRSACalculation
from ecolage.domain.money import round_half_up, to_amount
from ecolage.domain.rules import DEFAULT_IRSA_SCHEDULE, IRSASchedule


def compute_irsa(taxable_income: Any, schedule: IRSASchedule = DEFAULT_IRSA_SCHEDULE) -> IRSACalculation:
    """Compute progressive income tax on a taxable income.

    Each bracket taxes only the slice of income inside it. The tax of every
    slice is rounded to the ariary before the slices are summed. Any income
    above the exemption threshold owes at least ``schedule.minimum_tax``, so
    with the default schedule every income from 350,001 to just below 390,000
    pays the 2,000 minimum rather than its bracket sum (360,000 owes 2,000,
    not 500).

    Args:
        taxable_income: Salary after CNAPS and OSTIE deductions
        schedule: Bracket schedule to apply

    Returns:
        IRSACalculation with one line per bracket reached
    """
    income = to_amount(taxable_income)
    if income == 0:
        return IRSACalculation(taxable_income=0, lines=(), total=0, effective_rate=0.0)

    lines = []
    total = 0
    for bracket in schedule.brackets:
        if income <= bracket.floor:
            break
        upper = income if bracket.ceiling is None else min(income, bracket.ceiling)
        taxed_amount = upper - bracket.floor
        tax = round_half_up(Decimal(taxed_amount) * bracket.rate)
        lines.append(
            IRSABracketLine(
                floor=bracket.floor,
                ceiling=bracket.ceiling,
                rate=bracket.rate,
                taxed_amount=taxed_amount,
                tax=tax,
            )
        )
        total += tax

    minimum_applied = False
    if income > schedule.exemption_threshold and total < schedule.minimum_tax:
        total = schedule.minimum_tax
        minimum_applied = True

    return IRSACalculation(
        taxable_income=income,
        lines=tuple(lines),
        total=total,
        effective_rate=total / income,
        minimum_applied=minimum_applied,
    )


def is_subject_to_irsa(taxable_income: Any, schedule: IRSASchedule = DEFAULT_IRSA_SCHEDULE) -> bool:
    """Return True if the income exceeds the exemption threshold."""
    return to_amount(taxable_income) > schedule.exemption_threshold


def format_irsa_calculation(calculation: IRSACalculation) -> str:
    """Render the per-bracket detail of an IRSA calculation."""
    out = ["Calcul IRSA détaillé:", f"Salaire imposable: {calculation.taxable_income:,} MGA", ""]

    for index, line in enumerate(calculation.lines, start=1):
        ceiling = "∞" if line.ceiling is None else f"{line.ceiling:,}"
        out.append(f"Tranche {index}: {line.floor:,} - {ceiling} MGA ({(line.rate * 100).normalize():f}%)")
        out.append(f"  Montant dans la tranche: {line.taxed_amount:,} MGA")
        out.append(f"  Impôt: {line.tax:,} MGA")
        out.append("")

    if calculation.minimum_applied:
        out.append(f"Minimum de perception appliqué: {calculation.total:,} MGA")
    out.append(f"IRSA Total: {calculation.total:,} MGA")
    out.append(f"Taux effectif: {calculation.effective_rate * 100:.2f}%")
    return "\n".join(out)
