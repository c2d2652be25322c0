"""Accumulation-phase projection.

Each account grows independently from current age to retirement age:
  1. Apply the account's return to the existing balance
  2. Add the year's contribution plus any employer match
  3. Grow the contribution for the following year

Year 0 is the unmodified starting state. No tax is applied while saving.
"""

from typing import Dict, List, Optional

from retirement_planner.core.logging_config import get_logger
from retirement_planner.models.account import TaxTreatment
from retirement_planner.schemas.retirement import (
    Account,
    AccumulationResult,
    Profile,
    YearlyAccountBalance,
)
from retirement_planner.services.retirement.jurisdictions.base_jurisdiction import JurisdictionProvider
from retirement_planner.services.retirement.jurisdictions.jurisdiction_factory import get_jurisdiction
from retirement_planner.utils.account_type_groups import EMPLOYER_MATCH_TYPES
from retirement_planner.utils.datetime_utils import current_year
from retirement_planner.utils.profile_validation import validate_profile_ages

logger = get_logger(__name__)


def calculate_employer_match(account: Account, contribution: float) -> float:
    """Employer match on one year's contribution.

    Only match-eligible account types with both a match percent and a
    dollar cap receive a match: min(contribution × percent, cap).
    """
    if account.account_type not in EMPLOYER_MATCH_TYPES:
        return 0.0
    if not account.employer_match_percent or not account.employer_match_limit:
        return 0.0

    return min(contribution * account.employer_match_percent, account.employer_match_limit)


def project_accumulation(
    accounts: List[Account],
    profile: Profile,
    provider: Optional[JurisdictionProvider] = None,
    start_year: Optional[int] = None,
) -> AccumulationResult:
    """Project balances from current age through retirement age inclusive.

    Args:
        accounts: Accounts to project (ids must be unique)
        profile: Supplies current and retirement ages and the jurisdiction
        provider: Jurisdiction for group breakdowns (defaults to the profile's)
        start_year: Calendar year of the current age (defaults to this year)

    Returns:
        AccumulationResult with one snapshot per age
    """
    validate_profile_ages(profile)

    if not accounts:
        return AccumulationResult()

    provider = provider or get_jurisdiction(profile.jurisdiction)
    start_year = start_year if start_year is not None else current_year()
    years_to_retirement = profile.retirement_age - profile.current_age

    balances: Dict[str, float] = {a.id: a.balance for a in accounts}
    contributions: Dict[str, float] = {a.id: a.annual_contribution for a in accounts}

    yearly_balances = [
        YearlyAccountBalance(
            age=profile.current_age,
            year=start_year,
            balances=dict(balances),
            total_balance=sum(balances.values()),
            contributions=dict(contributions),
        )
    ]

    for i in range(1, years_to_retirement + 1):
        contributed: Dict[str, float] = {}

        for account in accounts:
            contribution = contributions[account.id]
            match = calculate_employer_match(account, contribution)

            balances[account.id] = balances[account.id] * (1 + account.return_rate) + contribution + match
            contributed[account.id] = contribution
            contributions[account.id] = contribution * (1 + account.contribution_growth_rate)

        yearly_balances.append(
            YearlyAccountBalance(
                age=profile.current_age + i,
                year=start_year + i,
                balances=dict(balances),
                total_balance=sum(balances.values()),
                contributions=contributed,
            )
        )

    by_treatment: Dict[TaxTreatment, float] = {t: 0.0 for t in TaxTreatment}
    for account in accounts:
        by_treatment[account.tax_treatment] += balances[account.id]

    groupings = provider.get_account_groupings()
    by_group: Dict[str, float] = {g.id: 0.0 for g in groupings}
    for account in accounts:
        group = next((g for g in groupings if account.account_type in g.account_types), None)
        if group is not None:
            by_group[group.id] += balances[account.id]

    total = sum(balances.values())
    logger.debug(
        "accumulation_projected",
        accounts=len(accounts),
        years=years_to_retirement,
        total_at_retirement=round(total, 2),
    )

    return AccumulationResult(
        yearly_balances=yearly_balances,
        final_balances=dict(balances),
        total_at_retirement=total,
        breakdown_by_tax_treatment=by_treatment,
        breakdown_by_group=by_group,
    )


def get_balance_at_age(result: AccumulationResult, account_id: str, age: int) -> float:
    """Balance of one account at an age, or 0 if the age or account is absent."""
    snapshot = next((y for y in result.yearly_balances if y.age == age), None)
    if snapshot is None:
        return 0.0
    return snapshot.balances.get(account_id, 0.0)


def calculate_total_contributions(accounts: List[Account], profile: Profile) -> Dict[str, float]:
    """Employee contributions plus employer match over the accumulation phase."""
    years_to_retirement = profile.retirement_age - profile.current_age
    totals: Dict[str, float] = {}

    for account in accounts:
        total = 0.0
        contribution = account.annual_contribution
        for _ in range(years_to_retirement):
            total += contribution + calculate_employer_match(account, contribution)
            contribution *= 1 + account.contribution_growth_rate
        totals[account.id] = total

    return totals
