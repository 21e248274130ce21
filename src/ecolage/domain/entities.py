"""Domain model entities for ecolage.

These are pure data classes representing business concepts, independent of
how the document store lays them out. Calculation results are derived values:
they are rebuilt from their inputs and never written back to the store.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from ecolage.domain.rules import SCHOOL_YEAR_MONTHS


@dataclass(frozen=True)
class Document:
    """A record held by a store collection.

    ``id`` is assigned by the store on insert and never changes.
    """

    id: str
    data: Mapping[str, Any]

    def as_dict(self) -> dict[str, Any]:
        """Return the document fields with the identifier merged in."""
        return {"id": self.id, **self.data}


class TuitionSource(str, Enum):
    """Where a suggested tuition amount came from."""

    CONFIGURED = "configured"
    DEFAULT = "default"


class PayrollStatus(str, Enum):
    """Lifecycle of a payroll run entry."""

    DRAFT = "draft"


@dataclass(frozen=True)
class ClassTuitionAmount:
    """Tuition configured for one class."""

    id: str
    class_name: str
    level: str
    monthly_amount: int
    registration_fee: Optional[int]
    exam_fee: Optional[int]
    is_active: bool
    effective_date: Optional[date]
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def annual_amount(self) -> int:
        return self.monthly_amount * SCHOOL_YEAR_MONTHS


@dataclass(frozen=True)
class SuggestedAmount:
    """Tuition amounts proposed for a payment, tagged with their provenance."""

    monthly_amount: int
    registration_fee: int
    exam_fee: int
    source: TuitionSource

    @property
    def annual_amount(self) -> int:
        return self.monthly_amount * SCHOOL_YEAR_MONTHS


@dataclass(frozen=True)
class PaymentSchedule:
    """Months of the school year during which tuition is collected."""

    start_month: int = 9
    end_month: int = 6
    total_months: int = SCHOOL_YEAR_MONTHS


@dataclass(frozen=True)
class TuitionSettings:
    """School-wide tuition settings."""

    default_monthly_amount: int
    default_registration_fee: int
    default_exam_fee: int
    academic_year: str
    payment_schedule: PaymentSchedule = field(default_factory=PaymentSchedule)
    is_active: bool = True
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class Employee:
    """Payroll view of a staff member."""

    id: str
    first_name: str
    last_name: str
    position: str
    department: str
    salary: int
    status: str = "active"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Allowances:
    """Salary allowances; the categories form a closed set."""

    transport: int = 0
    housing: int = 0
    meal: int = 0
    performance: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.transport + self.housing + self.meal + self.performance + self.other


@dataclass(frozen=True)
class IRSABracketLine:
    """Tax owed on the slice of income falling inside one bracket."""

    floor: int
    ceiling: Optional[int]
    rate: Decimal
    taxed_amount: int
    tax: int


@dataclass(frozen=True)
class IRSACalculation:
    """Detailed progressive income tax computation."""

    taxable_income: int
    lines: tuple[IRSABracketLine, ...]
    total: int
    effective_rate: float
    minimum_applied: bool = False


@dataclass(frozen=True)
class SalaryCalculation:
    """Gross-to-net salary breakdown.

    ``net_salary == gross_salary - cnaps - ostie - irsa`` and
    ``taxable_income == gross_salary - cnaps - ostie`` always hold.
    Employer-side amounts are informational and never touch the net.
    """

    base_salary: int
    allowances: Allowances
    gross_salary: int
    cnaps: int
    ostie: int
    taxable_income: int
    irsa: int
    irsa_detail: IRSACalculation
    total_deductions: int
    net_salary: int
    effective_tax_rate: float
    cnaps_employer: int
    ostie_employer: int
    employer_cost: int

    @property
    def total_employee_contributions(self) -> int:
        return self.cnaps + self.ostie

    @property
    def total_employer_contributions(self) -> int:
        return self.cnaps_employer + self.ostie_employer


@dataclass(frozen=True)
class PayrollSummary:
    """One employee's line in a payroll run."""

    employee_id: str
    employee_name: str
    position: str
    department: str
    calculation: SalaryCalculation
    status: PayrollStatus = PayrollStatus.DRAFT
