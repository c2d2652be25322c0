"""Mandatory distribution calculator.

Normalizes US RMD divisors and Canadian RRIF percentages into a single
"required fraction of balance" so the withdrawal simulator never needs to
know which form a jurisdiction uses.
"""

from typing import Optional

from retirement_planner.models.account import AccountType
from retirement_planner.services.retirement.jurisdictions.base_jurisdiction import JurisdictionProvider
from retirement_planner.services.retirement.jurisdictions.jurisdiction_factory import get_jurisdiction


def get_required_fraction(
    age: int,
    account_type: AccountType,
    provider: Optional[JurisdictionProvider] = None,
) -> float:
    """Fraction of the balance that must be withdrawn at ``age``.

    Accounts not subject to mandatory distribution always return 0. The
    provider defaults to the account type's own jurisdiction.
    """
    provider = provider or get_jurisdiction(account_type.jurisdiction)

    if not provider.is_subject_to_mandatory_distribution(account_type):
        return 0.0
    if age < provider.mandatory_distribution_start_age:
        return 0.0

    return provider.get_mandatory_distribution_fraction(age)


def calculate_mandatory_distribution(
    age: int,
    balance: float,
    account_type: AccountType,
    provider: Optional[JurisdictionProvider] = None,
) -> float:
    """Required withdrawal for the year, never more than the balance."""
    if balance <= 0:
        return 0.0

    fraction = get_required_fraction(age, account_type, provider)
    return min(balance * fraction, balance)
