"""Retirement planner orchestration service."""

import time
from typing import List

from retirement_planner.core.logging_config import get_logger, log_projection
from retirement_planner.schemas.retirement import (
    Account,
    AccumulationResult,
    Assumptions,
    BenefitsRequest,
    BenefitsResponse,
    JurisdictionSummary,
    MandatoryDistributionRequest,
    MandatoryDistributionResponse,
    Profile,
    ProjectionResponse,
    TaxEstimateRequest,
    TaxEstimateResponse,
)
from retirement_planner.services.retirement.accumulation_service import project_accumulation
from retirement_planner.services.retirement.jurisdictions.jurisdiction_factory import (
    JurisdictionFactory,
    get_jurisdiction,
)
from retirement_planner.services.retirement.mandatory_distribution import get_required_fraction
from retirement_planner.services.retirement.tax_engine import effective_tax_rate
from retirement_planner.services.retirement.withdrawal_simulator import project_withdrawals
from retirement_planner.utils.profile_validation import validate_profile_ages

logger = get_logger(__name__)


class RetirementPlannerService:
    """Core orchestration service for retirement planning."""

    @staticmethod
    def run_projection(
        accounts: List[Account],
        profile: Profile,
        assumptions: Assumptions,
    ) -> ProjectionResponse:
        """Accumulation followed by withdrawal simulation for one request."""
        validate_profile_ages(profile)
        provider = get_jurisdiction(profile.jurisdiction)

        start = time.perf_counter()
        logger.debug(
            "projection_started",
            jurisdiction=provider.code.value,
            accounts=len(accounts),
        )

        accumulation = project_accumulation(accounts, profile, provider=provider)
        retirement = project_withdrawals(
            accounts, profile, assumptions, accumulation, provider=provider
        )

        log_projection(
            logger,
            jurisdiction=provider.code.value,
            years_simulated=len(retirement.yearly_withdrawals),
            total_at_retirement=accumulation.total_at_retirement,
            depletion_age=retirement.portfolio_depletion_age,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            lifetime_taxes_paid=round(retirement.lifetime_taxes_paid, 2),
        )

        return ProjectionResponse(accumulation=accumulation, retirement=retirement)

    @staticmethod
    def run_accumulation(accounts: List[Account], profile: Profile) -> AccumulationResult:
        return project_accumulation(accounts, profile)

    @staticmethod
    def estimate_tax(request: TaxEstimateRequest) -> TaxEstimateResponse:
        """Single-year tax for a mix of ordinary income and capital gains."""
        provider = get_jurisdiction(request.jurisdiction)

        # Tax rules only read filing status, region and flat rate from the profile
        profile = Profile.model_construct(
            filing_status=request.filing_status,
            region=request.region,
            state_tax_rate=request.state_tax_rate,
            jurisdiction=provider.code,
        )

        tax = provider.calculate_tax(request.ordinary_income, request.capital_gains, profile)
        gross = request.ordinary_income + request.capital_gains

        return TaxEstimateResponse(
            federal_tax=round(tax.federal_tax, 2),
            state_tax=round(tax.state_tax, 2),
            total_tax=round(tax.total_tax, 2),
            marginal_rate=provider.get_marginal_rate(request.ordinary_income, profile),
            effective_rate=effective_tax_rate(tax.total_tax, gross),
        )

    @staticmethod
    def mandatory_distribution(
        request: MandatoryDistributionRequest,
    ) -> MandatoryDistributionResponse:
        """Required withdrawal for one account at one age."""
        provider = get_jurisdiction(request.jurisdiction or request.account_type.jurisdiction)
        fraction = get_required_fraction(request.age, request.account_type, provider)

        return MandatoryDistributionResponse(
            jurisdiction=provider.code,
            start_age=provider.mandatory_distribution_start_age,
            is_subject=provider.is_subject_to_mandatory_distribution(request.account_type),
            required_fraction=fraction,
            required_amount=round(min(request.balance * fraction, request.balance), 2),
        )

    @staticmethod
    def benefits(request: BenefitsRequest) -> BenefitsResponse:
        """Government benefits received at one age."""
        validate_profile_ages(request.profile)
        provider = get_jurisdiction(request.profile.jurisdiction)
        entries = provider.calculate_benefits(
            request.profile, request.age, request.gross_income_estimate
        )
        return BenefitsResponse(
            benefits=entries,
            total_annual=sum(b.annual_amount for b in entries),
            taxable_annual=provider.get_taxable_benefit_income(entries),
        )

    @staticmethod
    def list_jurisdictions() -> List[JurisdictionSummary]:
        return [
            get_jurisdiction(code).get_summary()
            for code in JurisdictionFactory.supported_codes()
        ]
