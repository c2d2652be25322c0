"""United States federal tax, RMD and Social Security rules (2024 tables).

State tax is modelled as a single flat rate from the profile, applied to
ordinary income plus realised gains.
"""

from typing import Dict, List

from retirement_planner.models.account import AccountType, FilingStatus, JurisdictionCode
from retirement_planner.schemas.retirement import (
    AccountGrouping,
    BenefitEntry,
    MandatoryDistributionEntry,
    Profile,
    TaxBracket,
    TaxBreakdown,
)
from retirement_planner.services.retirement import tax_engine
from retirement_planner.services.retirement.jurisdictions.base_jurisdiction import JurisdictionProvider
from retirement_planner.services.retirement.social_security_estimator import (
    estimate_social_security_benefits,
)
from retirement_planner.utils.account_type_groups import (
    US_ACCOUNT_TYPES,
    US_RMD_ACCOUNT_TYPES,
    US_ROTH_TYPES,
    US_TRADITIONAL_TYPES,
)
from retirement_planner.utils.rmd_calculator import (
    RMD_START_AGE,
    UNIFORM_LIFETIME_TABLE,
    get_rmd_divisor,
)

INF = float("inf")

# --- 2024 ordinary income brackets ---

TAX_BRACKETS_MFJ: List[TaxBracket] = [
    TaxBracket(min=0, max=23200, rate=0.10),
    TaxBracket(min=23200, max=94300, rate=0.12),
    TaxBracket(min=94300, max=201050, rate=0.22),
    TaxBracket(min=201050, max=383900, rate=0.24),
    TaxBracket(min=383900, max=487450, rate=0.32),
    TaxBracket(min=487450, max=731200, rate=0.35),
    TaxBracket(min=731200, max=INF, rate=0.37),
]

TAX_BRACKETS_SINGLE: List[TaxBracket] = [
    TaxBracket(min=0, max=11600, rate=0.10),
    TaxBracket(min=11600, max=47150, rate=0.12),
    TaxBracket(min=47150, max=100525, rate=0.22),
    TaxBracket(min=100525, max=191950, rate=0.24),
    TaxBracket(min=191950, max=243725, rate=0.32),
    TaxBracket(min=243725, max=609350, rate=0.35),
    TaxBracket(min=609350, max=INF, rate=0.37),
]

STANDARD_DEDUCTION_MFJ = 29200
STANDARD_DEDUCTION_SINGLE = 14600

# --- 2024 long-term capital gains brackets ---

CAPITAL_GAINS_BRACKETS_MFJ: List[TaxBracket] = [
    TaxBracket(min=0, max=94050, rate=0.0),
    TaxBracket(min=94050, max=583750, rate=0.15),
    TaxBracket(min=583750, max=INF, rate=0.20),
]

CAPITAL_GAINS_BRACKETS_SINGLE: List[TaxBracket] = [
    TaxBracket(min=0, max=47025, rate=0.0),
    TaxBracket(min=47025, max=518900, rate=0.15),
    TaxBracket(min=518900, max=INF, rate=0.20),
]

# Pretax withdrawals fill up to the top of this bracket before tax-free sources
BRACKET_FILL_TARGET_RATE = 0.12

_BRACKETS: Dict[FilingStatus, List[TaxBracket]] = {
    FilingStatus.MARRIED_FILING_JOINTLY: TAX_BRACKETS_MFJ,
    FilingStatus.SINGLE: TAX_BRACKETS_SINGLE,
}
_CAPITAL_GAINS_BRACKETS: Dict[FilingStatus, List[TaxBracket]] = {
    FilingStatus.MARRIED_FILING_JOINTLY: CAPITAL_GAINS_BRACKETS_MFJ,
    FilingStatus.SINGLE: CAPITAL_GAINS_BRACKETS_SINGLE,
}
_STANDARD_DEDUCTIONS: Dict[FilingStatus, float] = {
    FilingStatus.MARRIED_FILING_JOINTLY: STANDARD_DEDUCTION_MFJ,
    FilingStatus.SINGLE: STANDARD_DEDUCTION_SINGLE,
}


class USJurisdiction(JurisdictionProvider):
    """US federal brackets, flat state tax, RMDs and Social Security."""

    code = JurisdictionCode.US
    name = "United States"
    account_types = US_ACCOUNT_TYPES

    def get_tax_brackets(self, filing_status: FilingStatus) -> List[TaxBracket]:
        return _BRACKETS[filing_status]

    def get_standard_deduction(self, filing_status: FilingStatus) -> float:
        return _STANDARD_DEDUCTIONS[filing_status]

    def get_capital_gains_brackets(self, filing_status: FilingStatus) -> List[TaxBracket]:
        return _CAPITAL_GAINS_BRACKETS[filing_status]

    def calculate_federal_tax(
        self, ordinary_income: float, capital_gains: float, filing_status: FilingStatus
    ) -> float:
        return tax_engine.combined_federal_tax(
            ordinary_income,
            capital_gains,
            self.get_tax_brackets(filing_status),
            self.get_capital_gains_brackets(filing_status),
            self.get_standard_deduction(filing_status),
        )

    def calculate_tax(
        self, ordinary_income: float, capital_gains: float, profile: Profile
    ) -> TaxBreakdown:
        federal = self.calculate_federal_tax(ordinary_income, capital_gains, profile.filing_status)
        state = tax_engine.state_tax(ordinary_income + capital_gains, profile.state_tax_rate)
        return TaxBreakdown(federal_tax=federal, state_tax=state)

    def get_marginal_rate(self, ordinary_income: float, profile: Profile) -> float:
        return tax_engine.marginal_rate(
            ordinary_income,
            self.get_tax_brackets(profile.filing_status),
            self.get_standard_deduction(profile.filing_status),
        )

    def get_bracket_fill_room(self, ordinary_income: float, profile: Profile) -> float:
        return tax_engine.room_to_fill_bracket(
            ordinary_income,
            BRACKET_FILL_TARGET_RATE,
            self.get_tax_brackets(profile.filing_status),
            self.get_standard_deduction(profile.filing_status),
        )

    @property
    def mandatory_distribution_start_age(self) -> int:
        return RMD_START_AGE

    def get_mandatory_distribution_table(self) -> List[MandatoryDistributionEntry]:
        return [
            MandatoryDistributionEntry(age=age, divisor=float(divisor))
            for age, divisor in sorted(UNIFORM_LIFETIME_TABLE.items())
        ]

    def get_mandatory_distribution_fraction(self, age: int) -> float:
        # Past the table the divisor flatlines at the age-120 factor
        divisor = get_rmd_divisor(age)
        if divisor is None:
            return 0.0
        return 1 / float(divisor)

    def is_subject_to_mandatory_distribution(self, account_type: AccountType) -> bool:
        return account_type in US_RMD_ACCOUNT_TYPES

    def calculate_benefits(
        self, profile: Profile, age: int, gross_income: float
    ) -> List[BenefitEntry]:
        return estimate_social_security_benefits(profile, age, gross_income)

    def get_account_groupings(self) -> List[AccountGrouping]:
        return [
            AccountGrouping(
                id="pretax",
                label="Pre-Tax (401k / IRA)",
                account_types=sorted(US_TRADITIONAL_TYPES, key=lambda t: t.value),
            ),
            AccountGrouping(
                id="roth",
                label="Roth",
                account_types=sorted(US_ROTH_TYPES, key=lambda t: t.value),
            ),
            AccountGrouping(id="taxable", label="Taxable Brokerage", account_types=[AccountType.TAXABLE]),
            AccountGrouping(id="hsa", label="HSA", account_types=[AccountType.HSA]),
        ]
