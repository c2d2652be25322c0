"""Retirement planning API endpoints."""

from typing import List

from fastapi import APIRouter

from retirement_planner.schemas.retirement import (
    AccumulationRequest,
    AccumulationResult,
    BenefitsRequest,
    BenefitsResponse,
    JurisdictionSummary,
    MandatoryDistributionRequest,
    MandatoryDistributionResponse,
    ProjectionRequest,
    ProjectionResponse,
    TaxEstimateRequest,
    TaxEstimateResponse,
)
from retirement_planner.services.retirement.retirement_planner_service import RetirementPlannerService

router = APIRouter()


# --- Projections ---


@router.post("/projection", response_model=ProjectionResponse)
def run_projection(data: ProjectionRequest):
    """Project accumulation to retirement, then simulate withdrawals to life expectancy."""
    return RetirementPlannerService.run_projection(data.accounts, data.profile, data.assumptions)


@router.post("/accumulation", response_model=AccumulationResult)
def run_accumulation(data: AccumulationRequest):
    """Project account growth to retirement only."""
    return RetirementPlannerService.run_accumulation(data.accounts, data.profile)


# --- Calculators ---


@router.post("/tax-estimate", response_model=TaxEstimateResponse)
def estimate_tax(data: TaxEstimateRequest):
    """Estimate one year's tax on ordinary income and capital gains."""
    return RetirementPlannerService.estimate_tax(data)


@router.post("/mandatory-distribution", response_model=MandatoryDistributionResponse)
def mandatory_distribution(data: MandatoryDistributionRequest):
    """Required minimum withdrawal (RMD / RRIF minimum) for one account."""
    return RetirementPlannerService.mandatory_distribution(data)


@router.post("/benefits", response_model=BenefitsResponse)
def estimate_benefits(data: BenefitsRequest):
    """Government retirement benefits received at one age."""
    return RetirementPlannerService.benefits(data)


@router.get("/jurisdictions", response_model=List[JurisdictionSummary])
def list_jurisdictions():
    """Supported jurisdictions with their account types and groupings."""
    return RetirementPlannerService.list_jurisdictions()
