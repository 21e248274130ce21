"""Tests for document to entity conversion."""

from datetime import date, datetime, UTC

from ecolage.domain.documents import (
    class_tuition_from_document,
    class_tuition_to_data,
    employee_from_document,
    tuition_settings_from_document,
)
from ecolage.domain.entities import Document


def test_class_tuition_to_data():
    """Stored tuition carries the annual amount and ISO dates."""
    updated = datetime(2025, 9, 1, 8, 0, tzinfo=UTC)
    data = class_tuition_to_data(
        class_name="GSA",
        level="Maternelle",
        monthly_amount=150000,
        registration_fee=50000,
        exam_fee=None,
        is_active=True,
        effective_date=date(2025, 9, 1),
        notes=None,
        updated_at=updated,
    )
    assert data["annual_amount"] == 1500000
    assert data["effective_date"] == "2025-09-01"
    assert data["updated_at"] == "2025-09-01T08:00:00+00:00"
    assert "exam_fee" not in data
    assert "notes" not in data
    assert data["registration_fee"] == 50000


def test_class_tuition_from_document():
    doc = Document(
        id="class_gsa",
        data={
            "class_name": "GSA",
            "level": "Maternelle",
            "monthly_amount": "150000",
            "registration_fee": 0,
            "effective_date": "2025-09-01",
            "created_at": "2025-09-01T08:00:00+00:00",
        },
    )
    amount = class_tuition_from_document(doc)
    assert amount.id == "class_gsa"
    assert amount.monthly_amount == 150000
    assert amount.registration_fee == 0
    assert amount.exam_fee is None
    assert amount.is_active is True
    assert amount.effective_date == date(2025, 9, 1)
    assert amount.created_at == datetime(2025, 9, 1, 8, 0, tzinfo=UTC)
    assert amount.updated_at is None


def test_settings_defaults_payment_schedule():
    """A settings document without a schedule gets September to June."""
    settings = tuition_settings_from_document(
        Document(id="current", data={"default_monthly_amount": 150000, "academic_year": "2025-2026"})
    )
    assert settings.payment_schedule.start_month == 9
    assert settings.payment_schedule.end_month == 6
    assert settings.payment_schedule.total_months == 10
    assert settings.default_exam_fee == 0


def test_employee_from_document():
    employee = employee_from_document(
        Document(id="e1", data={"first_name": "Rija", "last_name": "Rakoto", "salary": "800000"})
    )
    assert employee.full_name == "Rija Rakoto"
    assert employee.salary == 800000
    assert employee.status == "active"
    assert employee.position == ""
