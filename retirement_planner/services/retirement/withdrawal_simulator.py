"""Tax-aware retirement withdrawal simulator.

Runs one year at a time from retirement age to life expectancy inclusive.
Each year:
  1. Target spending = sustainable withdrawal at retirement, inflated
  2. Benefit income (Social Security / CPP + OAS)
  3. Mandatory distributions from every subject account
  4. Remaining need = target - benefits - mandatory distributions
  5. Withdraw in order, stopping once the need is met:
       Pretax up to the bracket-fill ceiling → Tax-exempt → Taxable
       → Medical-exempt → Pretax beyond the ceiling
  6. Tax via the jurisdiction provider
  7. Retirement-phase return applied to what is left

Accounts sharing a tax treatment are drawn in declaration order. After the
portfolio is depleted the simulation keeps recording years with benefit
income only.
"""

from typing import Dict, List, Optional

from retirement_planner.config import settings
from retirement_planner.core.logging_config import get_logger
from retirement_planner.models.account import TaxTreatment
from retirement_planner.schemas.retirement import (
    Account,
    AccumulationResult,
    Assumptions,
    Profile,
    RetirementResult,
    YearlyWithdrawal,
)
from retirement_planner.services.retirement.jurisdictions.base_jurisdiction import JurisdictionProvider
from retirement_planner.services.retirement.jurisdictions.jurisdiction_factory import get_jurisdiction
from retirement_planner.services.retirement.mandatory_distribution import (
    calculate_mandatory_distribution,
)
from retirement_planner.utils.datetime_utils import current_year
from retirement_planner.utils.profile_validation import validate_profile_ages

logger = get_logger(__name__)


class AccountLedger:
    """Tracks per-account balances and this year's withdrawals."""

    __slots__ = ("accounts", "balances", "treatments", "withdrawals")

    def __init__(
        self,
        accounts: List[Account],
        starting_balances: Dict[str, float],
        treatments: Optional[Dict[str, TaxTreatment]] = None,
    ):
        self.accounts = accounts
        self.treatments: Dict[str, TaxTreatment] = treatments or {
            a.id: a.tax_treatment for a in accounts
        }
        self.balances: Dict[str, float] = {
            a.id: max(0.0, starting_balances.get(a.id, 0.0)) for a in accounts
        }
        self.withdrawals: Dict[str, float] = {}
        self.reset_withdrawals()

    @property
    def total(self) -> float:
        return sum(self.balances.values())

    @property
    def total_withdrawn(self) -> float:
        return sum(self.withdrawals.values())

    def reset_withdrawals(self) -> None:
        self.withdrawals = {a.id: 0.0 for a in self.accounts}

    def withdraw(self, account_id: str, amount: float) -> float:
        """Take up to ``amount`` from one account; returns what was taken."""
        taken = min(max(0.0, amount), self.balances[account_id])
        self.balances[account_id] -= taken
        self.withdrawals[account_id] += taken
        return taken

    def withdraw_from(self, treatment: TaxTreatment, amount: float) -> float:
        """Take up to ``amount`` across all accounts with one tax treatment."""
        remaining = amount
        for account in self.accounts:
            if remaining <= 0:
                break
            if self.treatments[account.id] == treatment:
                remaining -= self.withdraw(account.id, remaining)
        return amount - remaining

    def apply_return(self, annual_return: float) -> None:
        """Apply investment return to every balance."""
        factor = 1 + annual_return
        for account_id, balance in self.balances.items():
            self.balances[account_id] = max(0.0, balance * factor)


def project_withdrawals(
    accounts: List[Account],
    profile: Profile,
    assumptions: Assumptions,
    accumulation: AccumulationResult,
    provider: Optional[JurisdictionProvider] = None,
    start_year: Optional[int] = None,
    taxable_gain_fraction: Optional[float] = None,
    balance_epsilon: Optional[float] = None,
) -> RetirementResult:
    """Simulate drawdown from the accumulation result's final balances.

    Args:
        accounts: Same accounts used for the accumulation projection
        profile: Ages, filing status, region and benefit parameters
        assumptions: Inflation, safe withdrawal rate and retirement return
        accumulation: Output of ``project_accumulation``
        provider: Jurisdiction rules (defaults to the profile's jurisdiction)
        start_year: Calendar year of the current age (defaults to this year)
        taxable_gain_fraction: Share of taxable withdrawals that is realised
            gain (defaults to TAXABLE_GAIN_FRACTION)
        balance_epsilon: Balances at or below this count as depleted
            (defaults to BALANCE_EPSILON)

    Returns:
        RetirementResult with one record per simulated age. With nothing
        saved the target is 0 and each year carries benefit income only.
    """
    validate_profile_ages(profile)

    provider = provider or get_jurisdiction(profile.jurisdiction)
    start_year = start_year if start_year is not None else current_year()
    gain_fraction = (
        taxable_gain_fraction if taxable_gain_fraction is not None else settings.TAXABLE_GAIN_FRACTION
    )
    epsilon = balance_epsilon if balance_epsilon is not None else settings.BALANCE_EPSILON

    ledger = AccountLedger(
        accounts,
        accumulation.final_balances,
        {a.id: provider.get_tax_treatment(a.account_type) for a in accounts},
    )

    sustainable_annual = accumulation.total_at_retirement * assumptions.safe_withdrawal_rate

    yearly: List[YearlyWithdrawal] = []
    account_depletion_ages: Dict[str, Optional[int]] = {a.id: None for a in accounts}
    portfolio_depletion_age: Optional[int] = None
    lifetime_taxes = 0.0
    prior_gross_income: Optional[float] = None

    for age in range(profile.retirement_age, profile.life_expectancy + 1):
        ledger.reset_withdrawals()
        years_retired = age - profile.retirement_age
        target = sustainable_annual * (1 + assumptions.inflation_rate) ** years_retired

        # Benefits: any income test uses last year's gross income
        income_estimate = prior_gross_income if prior_gross_income is not None else target
        benefits = provider.calculate_benefits(profile, age, income_estimate)
        benefit_income = sum(b.annual_amount for b in benefits)
        taxable_benefits = provider.get_taxable_benefit_income(benefits)

        # Mandatory distributions are taken in full even above target spending
        mandatory_total = 0.0
        for account in accounts:
            required = calculate_mandatory_distribution(
                age, ledger.balances[account.id], account.account_type, provider
            )
            if required > 0:
                mandatory_total += ledger.withdraw(account.id, required)

        ordinary_income = taxable_benefits + mandatory_total
        capital_gains = 0.0
        need = max(0.0, target - benefit_income - mandatory_total)

        # (a) Pretax up to the bracket-fill ceiling
        if need > 0:
            room = provider.get_bracket_fill_room(ordinary_income, profile)
            taken = ledger.withdraw_from(TaxTreatment.PRE_TAX, min(need, room))
            ordinary_income += taken
            need -= taken

        # (b) Tax-exempt
        if need > 0:
            need -= ledger.withdraw_from(TaxTreatment.TAX_EXEMPT, need)

        # (c) Taxable: only the gain share is taxed
        if need > 0:
            taken = ledger.withdraw_from(TaxTreatment.TAXABLE, need)
            capital_gains += taken * gain_fraction
            need -= taken

        # (d) Medical-exempt
        if need > 0:
            need -= ledger.withdraw_from(TaxTreatment.MEDICAL_EXEMPT, need)

        # (e) Pretax beyond the ceiling
        if need > 0:
            taken = ledger.withdraw_from(TaxTreatment.PRE_TAX, need)
            ordinary_income += taken
            need -= taken

        tax = provider.calculate_tax(ordinary_income, capital_gains, profile)
        total_withdrawal = ledger.total_withdrawn
        gross_income = total_withdrawal + benefit_income

        ledger.apply_return(assumptions.retirement_return_rate)

        for account_id, balance in ledger.balances.items():
            if balance <= epsilon:
                ledger.balances[account_id] = 0.0
                if account_depletion_ages[account_id] is None:
                    account_depletion_ages[account_id] = age

        total_remaining = ledger.total
        if portfolio_depletion_age is None and total_remaining <= epsilon:
            portfolio_depletion_age = age
            logger.info(
                "portfolio_depleted",
                age=age,
                retirement_age=profile.retirement_age,
                unmet_spending=round(need, 2),
            )

        yearly.append(
            YearlyWithdrawal(
                age=age,
                year=start_year + (age - profile.current_age),
                withdrawals=dict(ledger.withdrawals),
                remaining_balances=dict(ledger.balances),
                total_withdrawal=total_withdrawal,
                benefit_income=benefit_income,
                taxable_benefit_income=taxable_benefits,
                ordinary_income=ordinary_income,
                capital_gains=capital_gains,
                gross_income=gross_income,
                federal_tax=tax.federal_tax,
                state_tax=tax.state_tax,
                total_tax=tax.total_tax,
                after_tax_income=gross_income - tax.total_tax,
                target_spending=target,
                mandatory_distribution=mandatory_total,
                total_remaining_balance=total_remaining,
            )
        )

        lifetime_taxes += tax.total_tax
        prior_gross_income = gross_income

    return RetirementResult(
        yearly_withdrawals=yearly,
        portfolio_depletion_age=portfolio_depletion_age,
        lifetime_taxes_paid=lifetime_taxes,
        sustainable_monthly_withdrawal=sustainable_annual / 12,
        sustainable_annual_withdrawal=sustainable_annual,
        account_depletion_ages=account_depletion_ages,
    )
