"""Conversion between stored documents and domain entities.

Documents are flat JSON objects. This module owns the field names used in the
store, so the domain entities stay independent of the storage layout.
"""

from datetime import date, datetime
from typing import Any, Mapping, Optional

from ecolage.domain import entities as domain
from ecolage.domain.money import to_amount
from ecolage.domain.rules import SCHOOL_YEAR_MONTHS


def _optional_amount(value: Any) -> Optional[int]:
    return None if value is None else to_amount(value)


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def class_tuition_from_document(document: domain.Document) -> domain.ClassTuitionAmount:
    """Convert a tuition document to a ClassTuitionAmount entity."""
    data = document.data
    return domain.ClassTuitionAmount(
        id=document.id,
        class_name=str(data.get("class_name", "")),
        level=str(data.get("level", "")),
        monthly_amount=to_amount(data.get("monthly_amount")),
        registration_fee=_optional_amount(data.get("registration_fee")),
        exam_fee=_optional_amount(data.get("exam_fee")),
        is_active=bool(data.get("is_active", True)),
        effective_date=_parse_date(data.get("effective_date")),
        notes=data.get("notes"),
        created_at=_parse_datetime(data.get("created_at")),
        updated_at=_parse_datetime(data.get("updated_at")),
    )


def class_tuition_to_data(
    class_name: str,
    level: str,
    monthly_amount: int,
    registration_fee: Optional[int],
    exam_fee: Optional[int],
    is_active: bool,
    effective_date: Optional[date],
    notes: Optional[str],
    updated_at: datetime,
) -> dict[str, Any]:
    """Build the stored fields of a tuition document.

    Fees and notes left as None are omitted, so merging the result into an
    existing document keeps their previous values.
    """
    data = {
        "class_name": class_name,
        "level": level,
        "monthly_amount": monthly_amount,
        "annual_amount": monthly_amount * SCHOOL_YEAR_MONTHS,
        "is_active": is_active,
        "effective_date": effective_date.isoformat() if effective_date else None,
        "updated_at": updated_at.isoformat(),
    }
    optional = {"registration_fee": registration_fee, "exam_fee": exam_fee, "notes": notes}
    data.update({key: value for key, value in optional.items() if value is not None})
    return data


def tuition_settings_from_document(document: domain.Document) -> domain.TuitionSettings:
    """Convert the settings document to a TuitionSettings entity."""
    data = document.data
    schedule = data.get("payment_schedule") or {}
    defaults = domain.PaymentSchedule()
    return domain.TuitionSettings(
        default_monthly_amount=to_amount(data.get("default_monthly_amount")),
        default_registration_fee=to_amount(data.get("default_registration_fee")),
        default_exam_fee=to_amount(data.get("default_exam_fee")),
        academic_year=str(data.get("academic_year", "")),
        payment_schedule=domain.PaymentSchedule(
            start_month=int(schedule.get("start_month", defaults.start_month)),
            end_month=int(schedule.get("end_month", defaults.end_month)),
            total_months=int(schedule.get("total_months", defaults.total_months)),
        ),
        is_active=bool(data.get("is_active", True)),
        updated_at=_parse_datetime(data.get("updated_at")),
    )


def tuition_settings_to_data(settings: domain.TuitionSettings, updated_at: datetime) -> dict[str, Any]:
    """Build the stored fields of the settings document."""
    return {
        "default_monthly_amount": settings.default_monthly_amount,
        "default_registration_fee": settings.default_registration_fee,
        "default_exam_fee": settings.default_exam_fee,
        "academic_year": settings.academic_year,
        "payment_schedule": {
            "start_month": settings.payment_schedule.start_month,
            "end_month": settings.payment_schedule.end_month,
            "total_months": settings.payment_schedule.total_months,
        },
        "is_active": settings.is_active,
        "updated_at": updated_at.isoformat(),
    }


def employee_from_document(document: domain.Document) -> domain.Employee:
    """Convert an employee document to an Employee entity."""
    data: Mapping[str, Any] = document.data
    return domain.Employee(
        id=document.id,
        first_name=str(data.get("first_name", "")),
        last_name=str(data.get("last_name", "")),
        position=str(data.get("position", "")),
        department=str(data.get("department", "")),
        salary=to_amount(data.get("salary")),
        status=str(data.get("status", "active")),
    )
