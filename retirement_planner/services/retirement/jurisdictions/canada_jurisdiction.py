"""Canadian federal and provincial tax, RRIF minimums, CPP and OAS (2024).

Federal and provincial tax are computed independently with their own
brackets and basic personal amounts. Capital gains use the inclusion-rate
model: the included share is added to ordinary income.
"""

from typing import Dict, List, Optional

from retirement_planner.core.logging_config import get_logger
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
from retirement_planner.services.retirement.canada_benefits_estimator import estimate_canada_benefits
from retirement_planner.services.retirement.jurisdictions.base_jurisdiction import JurisdictionProvider
from retirement_planner.utils.account_type_groups import CA_ACCOUNT_TYPES, CA_RRIF_ACCOUNT_TYPES

logger = get_logger(__name__)

INF = float("inf")

# --- 2024 federal ---

FEDERAL_TAX_BRACKETS: List[TaxBracket] = [
    TaxBracket(min=0, max=55867, rate=0.15),
    TaxBracket(min=55867, max=111733, rate=0.205),
    TaxBracket(min=111733, max=173205, rate=0.26),
    TaxBracket(min=173205, max=246752, rate=0.29),
    TaxBracket(min=246752, max=INF, rate=0.33),
]

FEDERAL_BASIC_PERSONAL_AMOUNT = 15705

# --- 2024 provincial / territorial ---


def _brackets(*rows: tuple) -> List[TaxBracket]:
    """Build a bracket table from (upper bound, rate) rows."""
    table = []
    lower = 0.0
    for upper, rate in rows:
        table.append(TaxBracket(min=lower, max=upper, rate=rate))
        lower = upper
    return table


PROVINCIAL_TAX_BRACKETS: Dict[str, List[TaxBracket]] = {
    "AB": _brackets((148269, 0.10), (177922, 0.12), (237230, 0.13), (355845, 0.14), (INF, 0.15)),
    "BC": _brackets(
        (47937, 0.0506), (95875, 0.077), (110076, 0.105), (133664, 0.1229),
        (181232, 0.147), (252752, 0.168), (INF, 0.205),
    ),
    "MB": _brackets((47000, 0.108), (100000, 0.1275), (INF, 0.174)),
    "NB": _brackets((49958, 0.094), (99916, 0.14), (185064, 0.16), (INF, 0.195)),
    "NL": _brackets((43198, 0.087), (86395, 0.145), (154244, 0.158), (215943, 0.178), (INF, 0.208)),
    "NS": _brackets((29590, 0.0879), (59180, 0.1495), (93000, 0.1667), (150000, 0.175), (INF, 0.21)),
    "NT": _brackets((50597, 0.059), (101198, 0.086), (164525, 0.122), (INF, 0.1405)),
    "NU": _brackets((53268, 0.04), (106537, 0.07), (173205, 0.09), (INF, 0.115)),
    "ON": _brackets((51446, 0.0505), (102894, 0.0915), (150000, 0.1116), (220000, 0.1216), (INF, 0.1316)),
    "PE": _brackets((32656, 0.098), (64313, 0.138), (105000, 0.167), (INF, 0.187)),
    # Quebec runs its own system; simplified to its bracket table
    "QC": _brackets((51780, 0.14), (103545, 0.19), (126000, 0.24), (INF, 0.2575)),
    "SK": _brackets((52057, 0.105), (148734, 0.125), (INF, 0.145)),
    "YT": _brackets((55867, 0.064), (111733, 0.09), (173205, 0.109), (500000, 0.128), (INF, 0.15)),
}

PROVINCIAL_BASIC_PERSONAL_AMOUNTS: Dict[str, float] = {
    "AB": 21885,
    "BC": 12580,
    "MB": 15780,
    "NB": 13044,
    "NL": 10382,
    "NS": 8481,
    "NT": 16593,
    "NU": 19000,
    "ON": 11865,
    "PE": 13500,
    "QC": 18056,
    "SK": 18491,
    "YT": 15705,
}

PROVINCE_NAMES: Dict[str, str] = {
    "AB": "Alberta",
    "BC": "British Columbia",
    "MB": "Manitoba",
    "NB": "New Brunswick",
    "NL": "Newfoundland and Labrador",
    "NS": "Nova Scotia",
    "NT": "Northwest Territories",
    "NU": "Nunavut",
    "ON": "Ontario",
    "PE": "Prince Edward Island",
    "QC": "Quebec",
    "SK": "Saskatchewan",
    "YT": "Yukon",
}

# --- Capital gains inclusion ---
CAPITAL_GAINS_INCLUSION_RATE_DEFAULT = 0.50
CAPITAL_GAINS_INCLUSION_RATE_HIGH = 0.6667
CAPITAL_GAINS_THRESHOLD = 250000

# --- RRIF minimum withdrawals ---
# RRSPs must be converted by the end of the year the holder turns 71
RRIF_START_AGE = 71
RRIF_TERMINAL_PERCENTAGE = 0.20  # Age 95 and over

RRIF_MINIMUM_TABLE: Dict[int, float] = {
    71: 0.0528,
    72: 0.0540,
    73: 0.0553,
    74: 0.0567,
    75: 0.0582,
    76: 0.0598,
    77: 0.0617,
    78: 0.0636,
    79: 0.0658,
    80: 0.0682,
    81: 0.0708,
    82: 0.0738,
    83: 0.0771,
    84: 0.0808,
    85: 0.0851,
    86: 0.0899,
    87: 0.0955,
    88: 0.1021,
    89: 0.1099,
    90: 0.1192,
    91: 0.1306,
    92: 0.1449,
    93: 0.1634,
    94: 0.1879,
    95: RRIF_TERMINAL_PERCENTAGE,
}

# Pretax withdrawals fill the lowest federal bracket before tax-free sources
BRACKET_FILL_TARGET_RATE = 0.15


def must_convert_rrsp_to_rrif(age: int) -> bool:
    """Whether an RRSP must have been converted to a RRIF by this age."""
    return age >= RRIF_START_AGE


def get_rrif_minimum_percentage(age: int) -> float:
    """RRIF minimum as a fraction of the balance (20% from 95 on)."""
    if age < RRIF_START_AGE:
        return 0.0
    return RRIF_MINIMUM_TABLE.get(age, RRIF_TERMINAL_PERCENTAGE)


class CanadaJurisdiction(JurisdictionProvider):
    """Canadian federal + provincial tax, RRIF minimums, CPP and OAS.

    Filing status has no effect: Canada taxes individuals.
    """

    code = JurisdictionCode.CA
    name = "Canada"
    account_types = CA_ACCOUNT_TYPES

    def get_tax_brackets(self, filing_status: FilingStatus) -> List[TaxBracket]:
        return FEDERAL_TAX_BRACKETS

    def get_standard_deduction(self, filing_status: FilingStatus) -> float:
        return FEDERAL_BASIC_PERSONAL_AMOUNT

    def get_taxable_capital_gains(self, capital_gains: float) -> float:
        if capital_gains <= 0:
            return 0.0
        if capital_gains <= CAPITAL_GAINS_THRESHOLD:
            return capital_gains * CAPITAL_GAINS_INCLUSION_RATE_DEFAULT
        return (
            CAPITAL_GAINS_THRESHOLD * CAPITAL_GAINS_INCLUSION_RATE_DEFAULT
            + (capital_gains - CAPITAL_GAINS_THRESHOLD) * CAPITAL_GAINS_INCLUSION_RATE_HIGH
        )

    def get_provincial_brackets(self, province: Optional[str]) -> Optional[List[TaxBracket]]:
        if not province:
            return None
        return PROVINCIAL_TAX_BRACKETS.get(province.upper())

    def calculate_federal_tax(self, income: float) -> float:
        taxable = max(0.0, income - FEDERAL_BASIC_PERSONAL_AMOUNT)
        return tax_engine.ordinary_income_tax(taxable, FEDERAL_TAX_BRACKETS)

    def calculate_provincial_tax(
        self, income: float, province: Optional[str], fallback_rate: float = 0.0
    ) -> float:
        """Provincial tax on total taxable income.

        An unknown or missing province falls back to ``fallback_rate``
        applied flat to the income.
        """
        brackets = self.get_provincial_brackets(province)
        if brackets is None:
            logger.warning(
                "provincial_brackets_missing",
                province=province,
                fallback_rate=fallback_rate,
            )
            return tax_engine.state_tax(income, fallback_rate)

        basic_personal_amount = PROVINCIAL_BASIC_PERSONAL_AMOUNTS.get(province.upper(), 0)
        taxable = max(0.0, income - basic_personal_amount)
        return tax_engine.ordinary_income_tax(taxable, brackets)

    def calculate_tax(
        self, ordinary_income: float, capital_gains: float, profile: Profile
    ) -> TaxBreakdown:
        income = ordinary_income + self.get_taxable_capital_gains(capital_gains)
        return TaxBreakdown(
            federal_tax=self.calculate_federal_tax(income),
            state_tax=self.calculate_provincial_tax(
                income, profile.region, profile.state_tax_rate
            ),
        )

    def get_marginal_rate(self, ordinary_income: float, profile: Profile) -> float:
        """Combined federal + provincial rate on the next dollar."""
        federal = tax_engine.bracket_rate_at(
            max(0.0, ordinary_income - FEDERAL_BASIC_PERSONAL_AMOUNT), FEDERAL_TAX_BRACKETS
        )

        brackets = self.get_provincial_brackets(profile.region)
        if brackets is None:
            return federal + profile.state_tax_rate

        basic_personal_amount = PROVINCIAL_BASIC_PERSONAL_AMOUNTS[profile.region.upper()]
        provincial = tax_engine.bracket_rate_at(
            max(0.0, ordinary_income - basic_personal_amount), brackets
        )
        return federal + provincial

    def get_bracket_fill_room(self, ordinary_income: float, profile: Profile) -> float:
        return tax_engine.room_to_fill_bracket(
            ordinary_income,
            BRACKET_FILL_TARGET_RATE,
            FEDERAL_TAX_BRACKETS,
            FEDERAL_BASIC_PERSONAL_AMOUNT,
        )

    @property
    def mandatory_distribution_start_age(self) -> int:
        return RRIF_START_AGE

    def get_mandatory_distribution_table(self) -> List[MandatoryDistributionEntry]:
        return [
            MandatoryDistributionEntry(age=age, percentage=percentage)
            for age, percentage in sorted(RRIF_MINIMUM_TABLE.items())
        ]

    def get_mandatory_distribution_fraction(self, age: int) -> float:
        return get_rrif_minimum_percentage(age)

    def is_subject_to_mandatory_distribution(self, account_type: AccountType) -> bool:
        return account_type in CA_RRIF_ACCOUNT_TYPES

    def calculate_benefits(
        self, profile: Profile, age: int, gross_income: float
    ) -> List[BenefitEntry]:
        return estimate_canada_benefits(profile, age, gross_income)

    def get_account_groupings(self) -> List[AccountGrouping]:
        return [
            AccountGrouping(
                id="rrsp_rrif",
                label="RRSP / RRIF",
                account_types=[AccountType.RRSP, AccountType.EMPLOYER_RRSP, AccountType.RRIF],
            ),
            AccountGrouping(id="tfsa", label="TFSA", account_types=[AccountType.TFSA]),
            AccountGrouping(
                id="non_registered",
                label="Non-Registered",
                account_types=[AccountType.NON_REGISTERED],
            ),
        ]
