"""Immutable jurisdiction rules for payroll and tuition.

The calculation functions never read module state: they receive one of these
rule objects as an argument, so swapping tax brackets or contribution rates
means building a new rule object, not editing the calculation code.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional

from ecolage.domain.errors import ValidationError

# Ten-month school year (September to June)
SCHOOL_YEAR_MONTHS = 10


@dataclass(frozen=True)
class TaxBracket:
    """One marginal IRSA band.

    ``floor`` is the amount already taxed by lower bands; the band covers
    income in ``(floor, ceiling]``. ``ceiling`` is None for the open top band.
    """

    floor: int
    ceiling: Optional[int]
    rate: Decimal
    label: str


@dataclass(frozen=True)
class IRSASchedule:
    """Progressive income tax schedule."""

    brackets: tuple[TaxBracket, ...]
    minimum_tax: int = 0

    def __post_init__(self):
        if not self.brackets:
            raise ValidationError("An IRSA schedule needs at least one bracket")
        expected_floor = 0
        for index, bracket in enumerate(self.brackets):
            if bracket.floor != expected_floor:
                raise ValidationError(
                    f"Bracket {index + 1} starts at {bracket.floor}, expected {expected_floor}"
                )
            if bracket.rate < 0:
                raise ValidationError(f"Bracket {index + 1} has a negative rate")
            if bracket.ceiling is None:
                if index != len(self.brackets) - 1:
                    raise ValidationError("Only the last bracket may be open-ended")
                break
            if bracket.ceiling <= bracket.floor:
                raise ValidationError(f"Bracket {index + 1} ceiling must exceed its floor")
            expected_floor = bracket.ceiling
        if self.minimum_tax < 0:
            raise ValidationError("Minimum tax cannot be negative")

    @property
    def exemption_threshold(self) -> int:
        """Highest taxable income that owes no tax."""
        threshold = 0
        for bracket in self.brackets:
            if bracket.rate != 0 or bracket.ceiling is None:
                break
            threshold = bracket.ceiling
        return threshold


@dataclass(frozen=True)
class ContributionScheme:
    """A social contribution scheme with employee and employer rates."""

    name: str
    employee_rate: Decimal
    employer_rate: Decimal


@dataclass(frozen=True)
class PayrollRules:
    """Everything the salary calculation depends on."""

    cnaps: ContributionScheme
    ostie: ContributionScheme
    irsa: IRSASchedule


@dataclass(frozen=True)
class TuitionDefaults:
    """Fallback tuition amounts when a class has no configured amount."""

    monthly_amounts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    default_monthly_amount: int = 150000
    registration_fee: int = 50000
    exam_fee: int = 25000

    def __post_init__(self):
        if not isinstance(self.monthly_amounts, MappingProxyType):
            object.__setattr__(
                self, "monthly_amounts", MappingProxyType(dict(self.monthly_amounts))
            )

    def monthly_amount_for(self, class_name: str) -> int:
        """Return the default monthly amount for a class name."""
        return self.monthly_amounts.get(class_name, self.default_monthly_amount)


# Barème IRSA Madagascar 2024
DEFAULT_IRSA_SCHEDULE = IRSASchedule(
    brackets=(
        TaxBracket(floor=0, ceiling=350000, rate=Decimal("0"), label="Exonéré"),
        TaxBracket(floor=350000, ceiling=400000, rate=Decimal("0.05"), label="5%"),
        TaxBracket(floor=400000, ceiling=500000, rate=Decimal("0.10"), label="10%"),
        TaxBracket(floor=500000, ceiling=600000, rate=Decimal("0.15"), label="15%"),
        TaxBracket(floor=600000, ceiling=None, rate=Decimal("0.20"), label="20%"),
    ),
    minimum_tax=2000,
)

CNAPS = ContributionScheme(name="CNAPS", employee_rate=Decimal("0.01"), employer_rate=Decimal("0.13"))
OSTIE = ContributionScheme(name="OSTIE", employee_rate=Decimal("0.01"), employer_rate=Decimal("0.05"))

DEFAULT_PAYROLL_RULES = PayrollRules(cnaps=CNAPS, ostie=OSTIE, irsa=DEFAULT_IRSA_SCHEDULE)

DEFAULT_TUITION = TuitionDefaults(
    monthly_amounts={
        # Maternelle
        "TPSA": 120000,
        "TPSB": 120000,
        "PSA": 130000,
        "PSB": 130000,
        "PSC": 130000,
        "MS_A": 140000,
        "MSB": 140000,
        "GSA": 150000,
        "GSB": 150000,
        "GSC": 150000,
        # Primaire
        "11_A": 160000,
        "11B": 160000,
        "10_A": 170000,
        "10_B": 170000,
        "9A": 180000,
        "9_B": 180000,
        "8": 190000,
        "7": 200000,
        # Spécialisé
        "CS": 110000,
        "GARDERIE": 100000,
    },
)
