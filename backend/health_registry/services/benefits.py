"""Benefits service: eligibility verification, card issuance and coverage."""

from __future__ import annotations

import logging
import math

from health_registry.config import settings
from health_registry.errors import NotFound, ValidationError
from health_registry.models import BenefitsEnrollment
from health_registry.repositories import RecordStore
from health_registry.schemas.benefits import BenefitsView, EligibilityOutcome, VerifyBenefitsRequest
from health_registry.services.eligibility import evaluate_eligibility
from health_registry.services.identifiers import IdentifierGenerator, issue_unique

logger = logging.getLogger(__name__)


class BenefitsService:
    def __init__(self, store: RecordStore, generator: IdentifierGenerator):
        self.store = store
        self.generator = generator

    async def verify(self, request: VerifyBenefitsRequest) -> EligibilityOutcome:
        """Check eligibility and, when eligible, (re)enroll the person.

        An eligible verification replaces any prior enrollment with a new card,
        the default coverage and zero usage. An ineligible one persists
        nothing and leaves a prior enrollment as it was.

        Raises:
            ValidationError: Health ID or income missing, or values out of range.
            NotFound: The person is not registered.
            GenerationExhausted: No unused card number could be produced.
        """
        missing = [
            name
            for name, value in (("health_id", request.health_id), ("annual_income", request.annual_income))
            if value is None
        ]
        if missing:
            raise ValidationError(
                "Health ID and annual income are required for benefits verification.",
                missing_fields=missing,
            )
        if not math.isfinite(request.annual_income):
            raise ValidationError("Annual income must be a finite number.")
        if request.annual_income < 0:
            raise ValidationError("Annual income cannot be negative.")
        if request.family_size is not None and request.family_size < 1:
            raise ValidationError("Family size must be at least 1.")

        if await self.store.get_person(request.health_id) is None:
            raise NotFound(f"Health ID {request.health_id} not found.")

        result = evaluate_eligibility(request.annual_income)
        if not result.eligible:
            logger.info("Benefits verification for %s: ineligible", request.health_id)
            return EligibilityOutcome(eligible=False, reason=result.reason)

        family_size = request.family_size or settings.benefits_default_family_size
        coverage = settings.benefits_default_coverage

        async def enroll(card_number: str) -> BenefitsEnrollment:
            return await self.store.upsert_benefits_enrollment(
                request.health_id,
                card_number=card_number,
                coverage_amount=coverage,
                annual_income=request.annual_income,
                family_size=family_size,
                family_head_name=request.family_head_name,
                state=request.state,
                district=request.district,
                block=request.block,
                village=request.village,
            )

        card_number, enrollment = await issue_unique(
            self.generator.issue_card_number,
            self.store.card_number_exists,
            kind="card number",
            claim=enroll,
        )

        return EligibilityOutcome(
            eligible=True,
            reason=result.reason,
            card_number=card_number,
            coverage_amount=enrollment.coverage_amount,
            family_size=enrollment.family_size,
            remaining_amount=enrollment.remaining_amount,
        )

    async def get_benefits(self, health_id: str) -> BenefitsView:
        """Enrollment joined with the beneficiary's name and city."""
        enrollment = await self.store.get_benefits_enrollment(health_id)
        if enrollment is None or not enrollment.enrolled:
            raise NotFound("No benefits found. Please complete benefits verification first.")
        person = await self.store.get_person(health_id)
        if person is None:
            raise NotFound(f"Health ID {health_id} not found.")
        return _benefits_view(enrollment, person.name, person.city)

    async def record_usage(self, health_id: str, amount: float | None) -> BenefitsView:
        """Draw ``amount`` from the remaining coverage."""
        if amount is None:
            raise ValidationError(missing_fields=["amount"])
        if not math.isfinite(amount) or amount <= 0:
            raise ValidationError("Amount must be a positive number.")
        enrollment = await self.store.record_coverage_usage(health_id, amount)
        logger.info("Recorded %.2f coverage usage for %s", amount, health_id)
        return await self.get_benefits(enrollment.health_id)


def _benefits_view(enrollment: BenefitsEnrollment, name: str, city: str) -> BenefitsView:
    return BenefitsView(
        card_number=enrollment.card_number,
        beneficiary_name=name,
        family_head_name=enrollment.family_head_name,
        family_size=enrollment.family_size,
        coverage_amount=enrollment.coverage_amount,
        used_amount=enrollment.used_amount,
        remaining_amount=enrollment.remaining_amount,
        city=city,
        state=enrollment.state,
        district=enrollment.district,
        block=enrollment.block,
        village=enrollment.village,
    )
