"""Tuition (écolage) domain service."""

import logging
import re
from datetime import date, datetime, UTC
from typing import Any, Iterable, Mapping, Optional

from ecolage.domain import collections
from ecolage.domain.documents import (
    class_tuition_from_document,
    class_tuition_to_data,
    tuition_settings_from_document,
    tuition_settings_to_data,
)
from ecolage.domain.entities import (
    ClassTuitionAmount,
    SuggestedAmount,
    TuitionSettings,
    TuitionSource,
)
from ecolage.domain.errors import (
    NotFoundError,
    ValidationError,
    class_amount_not_found,
    is_connectivity_error,
)
from ecolage.domain.money import to_amount
from ecolage.domain.rules import DEFAULT_TUITION, TuitionDefaults
from ecolage.store.base import DocumentStore

logger = logging.getLogger(__name__)

SETTINGS_DOCUMENT_ID = "current"


def class_document_id(class_name: str) -> str:
    """Return the document identifier used for a class's tuition amount."""
    return "class_" + re.sub(r"\s+", "_", class_name).lower()


class TuitionService:
    """Service for per-class tuition amounts and suggestions."""

    def __init__(self, store: DocumentStore, defaults: TuitionDefaults = DEFAULT_TUITION):
        """Initialize tuition service.

        Args:
            store: Document store instance
            defaults: Fallback amounts for classes without configuration
        """
        self.store = store
        self.defaults = defaults
        self.amounts = store.collection(collections.CLASS_TUITION_AMOUNTS)
        self.settings = store.collection(collections.TUITION_SETTINGS)

    def get_all_class_amounts(self) -> list[ClassTuitionAmount]:
        """List configured amounts for every class, active or not."""
        return [class_tuition_from_document(doc) for doc in self.amounts.get_all()]

    def get_class_amount(self, class_name: str) -> Optional[ClassTuitionAmount]:
        """Get the configured amount for a class, or None."""
        for amount in self.get_all_class_amounts():
            if amount.class_name == class_name:
                return amount
        return None

    def set_class_amount(
        self,
        class_name: str,
        level: str,
        monthly_amount: Any,
        registration_fee: Any = None,
        exam_fee: Any = None,
        is_active: bool = True,
        effective_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> str:
        """Create or update the tuition amount of a class.

        The annual amount is always recomputed from the monthly amount.

        Args:
            class_name: Class name (e.g. "GSA")
            level: Level the class belongs to
            monthly_amount: Monthly tuition
            registration_fee: Optional registration fee; None keeps the stored one
            exam_fee: Optional exam fee; None keeps the stored one
            is_active: Whether the amount applies
            effective_date: Date the amount applies from (defaults to today)
            notes: Free text; None keeps the stored notes

        Returns:
            Document identifier of the class amount

        Raises:
            ValidationError: If the class name is empty or the monthly amount is not positive
        """
        class_name = class_name.strip()
        if not class_name:
            raise ValidationError("Class name is required")
        monthly = to_amount(monthly_amount)
        if monthly <= 0:
            raise ValidationError(f"Monthly amount for '{class_name}' must be positive")

        doc_id = class_document_id(class_name)
        now = datetime.now(UTC)
        data = class_tuition_to_data(
            class_name=class_name,
            level=level,
            monthly_amount=monthly,
            registration_fee=None if registration_fee is None else to_amount(registration_fee),
            exam_fee=None if exam_fee is None else to_amount(exam_fee),
            is_active=is_active,
            effective_date=effective_date or date.today(),
            notes=notes,
            updated_at=now,
        )
        if self.amounts.get(doc_id) is None:
            data["created_at"] = now.isoformat()
        self.amounts.set(doc_id, data, merge=True)
        logger.info("Tuition for %s set to %s Ar/month", class_name, f"{monthly:,}")
        return doc_id

    def initialize_default_amounts(self, classes: Iterable[Mapping[str, Any]]) -> list[str]:
        """Store the default amounts for a list of classes.

        Args:
            classes: Class records with ``name`` and ``level`` fields

        Returns:
            Document identifiers written, in input order
        """
        written = []
        for school_class in classes:
            name = str(school_class.get("name", "")).strip()
            if not name:
                continue
            written.append(
                self.set_class_amount(
                    class_name=name,
                    level=str(school_class.get("level", "")),
                    monthly_amount=self.defaults.monthly_amount_for(name),
                    registration_fee=self.defaults.registration_fee,
                    exam_fee=self.defaults.exam_fee,
                    notes="Montant initialisé automatiquement",
                )
            )
        logger.info("Default tuition initialized for %d class(es)", len(written))
        return written

    def deactivate_class_amount(self, class_name: str) -> None:
        """Mark a class amount inactive; suggestions fall back to defaults.

        Raises:
            NotFoundError: If the class has no configured amount
        """
        doc_id = class_document_id(class_name)
        if self.amounts.get(doc_id) is None:
            raise NotFoundError(class_amount_not_found(class_name))
        self.amounts.set(
            doc_id,
            {"is_active": False, "updated_at": datetime.now(UTC).isoformat()},
            merge=True,
        )

    def get_suggested_amount(self, class_name: str, level: str = "") -> SuggestedAmount:
        """Suggest tuition amounts for a class.

        An active configured amount wins; otherwise the defaults table is
        used. ``level`` is accepted for callers that know it but does not
        change the lookup. The store is only read.

        Args:
            class_name: Class name
            level: Class level

        Returns:
            SuggestedAmount tagged with its source
        """
        try:
            configured = self.get_class_amount(class_name)
        except Exception as e:
            if not is_connectivity_error(e):
                raise
            logger.warning("Offline, using default tuition for %s: %s", class_name, e)
            configured = None

        if configured is not None and configured.is_active:
            return SuggestedAmount(
                monthly_amount=configured.monthly_amount,
                registration_fee=(
                    configured.registration_fee
                    if configured.registration_fee is not None
                    else self.defaults.registration_fee
                ),
                exam_fee=(
                    configured.exam_fee if configured.exam_fee is not None else self.defaults.exam_fee
                ),
                source=TuitionSource.CONFIGURED,
            )

        return SuggestedAmount(
            monthly_amount=self.defaults.monthly_amount_for(class_name),
            registration_fee=self.defaults.registration_fee,
            exam_fee=self.defaults.exam_fee,
            source=TuitionSource.DEFAULT,
        )

    def get_settings(self) -> Optional[TuitionSettings]:
        """Get the school-wide tuition settings, or None if never saved."""
        document = self.settings.get(SETTINGS_DOCUMENT_ID)
        return tuition_settings_from_document(document) if document is not None else None

    def update_settings(self, settings: TuitionSettings) -> None:
        """Save the school-wide tuition settings."""
        self.settings.set(
            SETTINGS_DOCUMENT_ID,
            tuition_settings_to_data(settings, updated_at=datetime.now(UTC)),
            merge=True,
        )
