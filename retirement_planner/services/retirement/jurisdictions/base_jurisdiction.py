"""
Base jurisdiction interface for retirement tax and benefit rules.

This allows the withdrawal simulator to run against US, Canadian, or any
future rule set without knowing which one it has.
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, List

from retirement_planner.models.account import AccountType, FilingStatus, JurisdictionCode, TaxTreatment
from retirement_planner.schemas.retirement import (
    AccountGrouping,
    BenefitEntry,
    JurisdictionSummary,
    MandatoryDistributionEntry,
    Profile,
    TaxBracket,
    TaxBreakdown,
)
from retirement_planner.utils.account_tax_treatment import get_account_type_label, get_tax_treatment


class JurisdictionProvider(ABC):
    """
    Abstract base class for jurisdiction rule sets.

    Implementations: USJurisdiction, CanadaJurisdiction
    """

    code: JurisdictionCode
    name: str
    account_types: FrozenSet[AccountType]

    # --- Tax tables ---

    @abstractmethod
    def get_tax_brackets(self, filing_status: FilingStatus) -> List[TaxBracket]:
        """Ordinary-income brackets used for the federal tax."""

    @abstractmethod
    def get_standard_deduction(self, filing_status: FilingStatus) -> float:
        """Standard deduction (US) or federal basic personal amount (Canada)."""

    def get_capital_gains_brackets(self, filing_status: FilingStatus) -> List[TaxBracket]:
        """Separate capital-gains rate table, empty when gains are taxed as ordinary income."""
        return []

    def get_taxable_capital_gains(self, capital_gains: float) -> float:
        """Portion of realised gains included in ordinary income."""
        return 0.0

    # --- Tax calculation ---

    @abstractmethod
    def calculate_tax(
        self, ordinary_income: float, capital_gains: float, profile: Profile
    ) -> TaxBreakdown:
        """
        Tax owed for one year.

        Args:
            ordinary_income: Pretax withdrawals plus the taxable share of benefits
            capital_gains: Realised gains from taxable-account withdrawals
            profile: Filing status, region and flat state/provincial rate

        Returns:
            TaxBreakdown split into federal and state/provincial
        """

    @abstractmethod
    def get_marginal_rate(self, ordinary_income: float, profile: Profile) -> float:
        """Rate on the next dollar of ordinary income."""

    @abstractmethod
    def get_bracket_fill_room(self, ordinary_income: float, profile: Profile) -> float:
        """Additional pretax withdrawal that stays within the bracket-fill target."""

    # --- Mandatory distributions ---

    @property
    @abstractmethod
    def mandatory_distribution_start_age(self) -> int:
        """First age at which mandatory distributions apply."""

    @abstractmethod
    def get_mandatory_distribution_table(self) -> List[MandatoryDistributionEntry]:
        """Tabulated divisors or percentages, ascending by age."""

    @abstractmethod
    def get_mandatory_distribution_fraction(self, age: int) -> float:
        """
        Required withdrawal as a fraction of balance at ``age``.

        0 below the start age; past the end of the table each
        implementation applies its own terminal policy.
        """

    @abstractmethod
    def is_subject_to_mandatory_distribution(self, account_type: AccountType) -> bool:
        """Whether the account type has a mandatory minimum withdrawal."""

    # --- Benefits ---

    @abstractmethod
    def calculate_benefits(
        self, profile: Profile, age: int, gross_income: float
    ) -> List[BenefitEntry]:
        """Government retirement benefits received at ``age``."""

    def get_taxable_benefit_income(self, benefits: List[BenefitEntry]) -> float:
        return sum(b.taxable_amount for b in benefits)

    # --- Accounts ---

    def get_tax_treatment(self, account_type: AccountType) -> TaxTreatment:
        return get_tax_treatment(account_type)

    @abstractmethod
    def get_account_groupings(self) -> List[AccountGrouping]:
        """Reporting groups for accumulation breakdowns."""

    def get_summary(self) -> JurisdictionSummary:
        account_types = sorted(self.account_types, key=lambda t: t.value)
        return JurisdictionSummary(
            code=self.code,
            name=self.name,
            mandatory_distribution_start_age=self.mandatory_distribution_start_age,
            account_types=account_types,
            account_type_labels={t: get_account_type_label(t) for t in account_types},
            tax_treatments={t: self.get_tax_treatment(t) for t in account_types},
            account_groupings=self.get_account_groupings(),
        )
