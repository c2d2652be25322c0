"""Retirement planning schemas."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from retirement_planner.models.account import (
    AccountType,
    FilingStatus,
    JurisdictionCode,
    TaxTreatment,
)
from retirement_planner.utils.account_tax_treatment import get_tax_treatment


# --- Inputs ---


class Account(BaseModel):
    """One savings vehicle, snapshotted for a single projection run."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1, max_length=100)
    name: str = Field(max_length=200)
    account_type: AccountType
    balance: float = Field(default=0.0, ge=0)
    annual_contribution: float = Field(default=0.0, ge=0)
    contribution_growth_rate: float = Field(default=0.0, ge=-1, le=1)
    return_rate: float = Field(default=0.0, ge=-1, le=1)
    employer_match_percent: Optional[float] = Field(None, ge=0, le=10)
    employer_match_limit: Optional[float] = Field(None, ge=0)

    @property
    def tax_treatment(self) -> TaxTreatment:
        return get_tax_treatment(self.account_type)


class Profile(BaseModel):
    """Person-level parameters.

    Field bounds are checked on construction. The timeline itself
    (current < retirement < life expectancy) is checked by
    ``validate_profile_ages`` when a projection starts.
    """

    model_config = ConfigDict(frozen=True)

    current_age: int = Field(ge=0, le=120)
    retirement_age: int = Field(ge=1, le=120)
    life_expectancy: int = Field(ge=2, le=120)
    filing_status: FilingStatus = FilingStatus.MARRIED_FILING_JOINTLY
    state_tax_rate: float = Field(default=0.0, ge=0, le=1)

    # Primary benefit (Social Security / CPP), annual amount in today's dollars
    social_security_benefit: Optional[float] = Field(None, ge=0)
    social_security_start_age: Optional[int] = Field(None, ge=0, le=120)

    # Secondary benefit (OAS), annual amount
    secondary_benefit_amount: Optional[float] = Field(None, ge=0)
    secondary_benefit_start_age: Optional[int] = Field(None, ge=0, le=120)

    jurisdiction: JurisdictionCode = JurisdictionCode.US
    region: Optional[str] = Field(None, max_length=10)  # State or province code


class Assumptions(BaseModel):
    """Global economic scalars."""

    model_config = ConfigDict(frozen=True)

    inflation_rate: float = Field(default=0.03, ge=-0.5, le=1)
    safe_withdrawal_rate: float = Field(default=0.04, ge=0, le=1)
    retirement_return_rate: float = Field(default=0.05, ge=-1, le=1)


# --- Static table entries ---


class TaxBracket(BaseModel):
    """Half-open income range [min, max) taxed at a marginal rate."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float  # float("inf") for the top bracket
    rate: float


class MandatoryDistributionEntry(BaseModel):
    """Required withdrawal at one age.

    Exactly one of ``divisor`` (balance ÷ divisor) or ``percentage``
    (balance × percentage) is set, depending on the jurisdiction.
    """

    model_config = ConfigDict(frozen=True)

    age: int
    divisor: Optional[float] = None
    percentage: Optional[float] = None

    @property
    def required_fraction(self) -> float:
        if self.divisor:
            return 1 / self.divisor
        return self.percentage or 0.0


class AccountGrouping(BaseModel):
    """Reporting group of account types defined by a jurisdiction."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    account_types: List[AccountType]


class BenefitEntry(BaseModel):
    """One government retirement benefit received in a given year."""

    model_config = ConfigDict(frozen=True)

    name: str  # social_security, cpp, oas
    age: int
    monthly_amount: float
    annual_amount: float
    taxable_amount: float


class TaxBreakdown(BaseModel):
    """Tax owed for one year, split by level of government."""

    model_config = ConfigDict(frozen=True)

    federal_tax: float = 0.0
    state_tax: float = 0.0  # State (US) or provincial (Canada)

    @property
    def total_tax(self) -> float:
        return self.federal_tax + self.state_tax


# --- Accumulation results ---


class YearlyAccountBalance(BaseModel):
    """Snapshot of every account at one age during accumulation."""

    model_config = ConfigDict(frozen=True)

    age: int
    year: int
    balances: Dict[str, float]
    total_balance: float
    contributions: Dict[str, float]


class AccumulationResult(BaseModel):
    """Account growth from current age through retirement age inclusive."""

    model_config = ConfigDict(frozen=True)

    yearly_balances: List[YearlyAccountBalance] = []
    final_balances: Dict[str, float] = {}
    total_at_retirement: float = 0.0
    breakdown_by_tax_treatment: Dict[TaxTreatment, float] = {}
    breakdown_by_group: Dict[str, float] = {}


# --- Withdrawal results ---


class YearlyWithdrawal(BaseModel):
    """One simulated retirement year."""

    model_config = ConfigDict(frozen=True)

    age: int
    year: int
    withdrawals: Dict[str, float]
    remaining_balances: Dict[str, float]
    total_withdrawal: float
    benefit_income: float
    taxable_benefit_income: float
    ordinary_income: float
    capital_gains: float
    gross_income: float
    federal_tax: float
    state_tax: float
    total_tax: float
    after_tax_income: float
    target_spending: float
    mandatory_distribution: float
    total_remaining_balance: float


class RetirementResult(BaseModel):
    """Drawdown from retirement age to life expectancy inclusive."""

    model_config = ConfigDict(frozen=True)

    yearly_withdrawals: List[YearlyWithdrawal] = []
    portfolio_depletion_age: Optional[int] = None  # None = never depletes
    lifetime_taxes_paid: float = 0.0
    sustainable_monthly_withdrawal: float = 0.0
    sustainable_annual_withdrawal: float = 0.0
    account_depletion_ages: Dict[str, Optional[int]] = {}


# --- API requests / responses ---


class ProjectionRequest(BaseModel):
    """Full accumulation + withdrawal projection request."""

    accounts: List[Account] = Field(min_length=1, max_length=50)
    profile: Profile
    assumptions: Assumptions = Assumptions()

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "ProjectionRequest":
        ids = [a.id for a in self.accounts]
        if len(ids) != len(set(ids)):
            raise ValueError("Account ids must be unique")
        return self


class AccumulationRequest(BaseModel):
    """Accumulation-only projection request."""

    accounts: List[Account] = Field(min_length=1, max_length=50)
    profile: Profile


class ProjectionResponse(BaseModel):
    """Full projection response."""

    accumulation: AccumulationResult
    retirement: RetirementResult


class TaxEstimateRequest(BaseModel):
    """Single-year tax estimate."""

    ordinary_income: float = Field(ge=0)
    capital_gains: float = Field(default=0.0, ge=0)
    filing_status: FilingStatus = FilingStatus.MARRIED_FILING_JOINTLY
    jurisdiction: JurisdictionCode = JurisdictionCode.US
    region: Optional[str] = Field(None, max_length=10)
    state_tax_rate: float = Field(default=0.0, ge=0, le=1)


class TaxEstimateResponse(BaseModel):
    """Single-year tax estimate result."""

    federal_tax: float
    state_tax: float
    total_tax: float
    marginal_rate: float
    effective_rate: float


class MandatoryDistributionRequest(BaseModel):
    """Mandatory distribution lookup for one account."""

    age: int = Field(ge=0, le=130)
    balance: float = Field(ge=0)
    account_type: AccountType
    jurisdiction: Optional[JurisdictionCode] = None  # Defaults to the account type's own


class MandatoryDistributionResponse(BaseModel):
    """Mandatory distribution lookup result."""

    jurisdiction: JurisdictionCode
    start_age: int
    is_subject: bool
    required_fraction: float
    required_amount: float


class BenefitsRequest(BaseModel):
    """Benefit income for one age."""

    profile: Profile
    age: int = Field(ge=0, le=130)
    gross_income_estimate: float = Field(default=0.0, ge=0)


class BenefitsResponse(BaseModel):
    """Benefit income for one age."""

    benefits: List[BenefitEntry]
    total_annual: float
    taxable_annual: float


class JurisdictionSummary(BaseModel):
    """Static facts about a supported jurisdiction."""

    code: JurisdictionCode
    name: str
    mandatory_distribution_start_age: int
    account_types: List[AccountType]
    account_type_labels: Dict[AccountType, str]
    tax_treatments: Dict[AccountType, TaxTreatment]
    account_groupings: List[AccountGrouping]
