"""Tests for benefits verification, card issuance and coverage."""

import pydantic
import pytest

from health_registry.errors import NotFound, ValidationError
from health_registry.schemas import VerifyBenefitsRequest
from health_registry.services.benefits import BenefitsService
from health_registry.services.eligibility import INELIGIBLE_REASON
from health_registry.services.identifiers import CARD_NUMBER_PATTERN, IdentifierGenerator

from conftest import PERSON_ID, ScriptedRandom, make_person


def verify_request(annual_income=250_000, **overrides) -> VerifyBenefitsRequest:
    fields = {
        "health_id": PERSON_ID,
        "annual_income": annual_income,
        "family_head_name": "Asha Verma",
        "state": "Delhi",
        "district": "South Delhi",
    }
    fields.update(overrides)
    return VerifyBenefitsRequest(**fields)


@pytest.fixture
def service(store, generator) -> BenefitsService:
    return BenefitsService(store, generator)


class TestVerify:
    """Tests for eligibility verification and enrollment."""

    @pytest.mark.asyncio
    async def test_eligible_person_is_enrolled(self, service, store, person):
        outcome = await service.verify(verify_request())

        assert outcome.eligible
        assert CARD_NUMBER_PATTERN.match(outcome.card_number)
        assert outcome.coverage_amount == 500_000
        assert outcome.family_size == 4
        assert outcome.remaining_amount == 500_000

        enrollment = await store.get_benefits_enrollment(PERSON_ID)
        assert enrollment.card_number == outcome.card_number
        assert enrollment.district == "South Delhi"

    @pytest.mark.asyncio
    async def test_boundary_income_is_eligible(self, service, person):
        assert (await service.verify(verify_request(500_000))).eligible

    @pytest.mark.asyncio
    async def test_ineligible_persists_nothing(self, service, store, person):
        outcome = await service.verify(verify_request(900_000))

        assert not outcome.eligible
        assert outcome.reason == INELIGIBLE_REASON
        assert outcome.card_number is None
        assert await store.get_benefits_enrollment(PERSON_ID) is None

    @pytest.mark.asyncio
    async def test_ineligible_reverification_keeps_prior_enrollment(self, service, store, person):
        first = await service.verify(verify_request())
        await service.verify(verify_request(900_000))

        enrollment = await store.get_benefits_enrollment(PERSON_ID)
        assert enrollment.card_number == first.card_number
        assert enrollment.remaining_amount == 500_000

    @pytest.mark.asyncio
    async def test_eligible_reverification_resets_usage(self, service, store, person):
        first = await service.verify(verify_request())
        await service.record_usage(PERSON_ID, 20_000)

        second = await service.verify(verify_request(family_size=6))

        assert second.card_number != first.card_number
        assert second.family_size == 6
        enrollment = await store.get_benefits_enrollment(PERSON_ID)
        assert enrollment.used_amount == 0

    @pytest.mark.asyncio
    async def test_card_collision_is_retried(self, store, person):
        await store.create_person(make_person("HLTH-20260118-10002"))
        taken = 111111111111111
        generator = IdentifierGenerator(rng=ScriptedRandom([taken, taken, 222222222222222]))
        service = BenefitsService(store, generator)

        await service.verify(verify_request(health_id="HLTH-20260118-10002"))
        outcome = await service.verify(verify_request())

        assert outcome.card_number == "ABY-222222222222222"

    @pytest.mark.asyncio
    async def test_missing_fields(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.verify(VerifyBenefitsRequest())
        assert exc_info.value.missing_fields == ["health_id", "annual_income"]

    @pytest.mark.asyncio
    async def test_negative_income(self, service, person):
        with pytest.raises(ValidationError):
            await service.verify(verify_request(-1))

    @pytest.mark.asyncio
    async def test_zero_family_size(self, service, person):
        with pytest.raises(ValidationError):
            await service.verify(verify_request(family_size=0))

    @pytest.mark.asyncio
    async def test_unknown_person(self, service):
        with pytest.raises(NotFound):
            await service.verify(verify_request())


class TestGetBenefits:
    @pytest.mark.asyncio
    async def test_joined_with_person(self, service, person):
        outcome = await service.verify(verify_request(village="Mehrauli"))
        benefits = await service.get_benefits(PERSON_ID)

        assert benefits.card_number == outcome.card_number
        assert benefits.beneficiary_name == "Asha Verma"
        assert benefits.city == "New Delhi"
        assert benefits.village == "Mehrauli"

    @pytest.mark.asyncio
    async def test_not_enrolled(self, service, person):
        with pytest.raises(NotFound) as exc_info:
            await service.get_benefits(PERSON_ID)
        assert "complete benefits verification" in exc_info.value.message


class TestRecordUsage:
    @pytest.mark.asyncio
    async def test_draws_from_remaining(self, service, person):
        await service.verify(verify_request())
        benefits = await service.record_usage(PERSON_ID, 125_000)

        assert benefits.used_amount == 125_000
        assert benefits.remaining_amount == 375_000

    @pytest.mark.asyncio
    async def test_rejects_non_positive_amount(self, service, person):
        await service.verify(verify_request())
        with pytest.raises(ValidationError):
            await service.record_usage(PERSON_ID, 0)

    @pytest.mark.asyncio
    async def test_rejects_amount_over_remaining(self, service, person):
        await service.verify(verify_request())
        with pytest.raises(ValidationError):
            await service.record_usage(PERSON_ID, 500_001)

    @pytest.mark.asyncio
    async def test_rejects_non_finite_amount(self, service, store, person):
        await service.verify(verify_request())
        with pytest.raises(ValidationError):
            await service.record_usage(PERSON_ID, float("nan"))
        with pytest.raises(ValidationError):
            await service.record_usage(PERSON_ID, float("inf"))
        assert (await store.get_benefits_enrollment(PERSON_ID)).used_amount == 0


class TestVerifyNonFiniteIncome:
    def test_request_schema_rejects_nan(self):
        with pytest.raises(pydantic.ValidationError):
            verify_request(float("nan"))

    @pytest.mark.asyncio
    async def test_service_rejects_non_finite_income(self, service, store, person):
        request = VerifyBenefitsRequest.model_construct(
            health_id=PERSON_ID, annual_income=float("inf"), family_size=None
        )
        with pytest.raises(ValidationError):
            await service.verify(request)
        assert await store.get_benefits_enrollment(PERSON_ID) is None
