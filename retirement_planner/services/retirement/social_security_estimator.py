"""Social Security benefit estimator.

Simplified model: the profile carries the annual benefit the person expects
at their chosen claiming age, paid flat from that age on. Up to 85% of
Social Security is federally taxable; the model always uses 85%.
"""

from typing import List

from retirement_planner.schemas.retirement import BenefitEntry, Profile


# Share of Social Security included in taxable income
SOCIAL_SECURITY_TAXABLE_FRACTION = 0.85


def get_taxable_social_security(annual_benefit: float) -> float:
    """Taxable portion of an annual Social Security benefit."""
    return max(0.0, annual_benefit) * SOCIAL_SECURITY_TAXABLE_FRACTION


def estimate_social_security_benefits(
    profile: Profile,
    age: int,
    gross_income: float = 0.0,
) -> List[BenefitEntry]:
    """Social Security income received at ``age``.

    Args:
        profile: Person-level parameters (annual benefit and start age)
        age: Age being simulated
        gross_income: Unused; Social Security has no means test in this model

    Returns:
        A single-entry list once benefits have started, otherwise empty.
    """
    annual = profile.social_security_benefit
    start_age = profile.social_security_start_age

    if not annual or start_age is None or age < start_age:
        return []

    return [
        BenefitEntry(
            name="social_security",
            age=age,
            monthly_amount=annual / 12,
            annual_amount=annual,
            taxable_amount=get_taxable_social_security(annual),
        )
    ]
