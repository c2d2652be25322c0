"""Canada Pension Plan and Old Age Security estimator.

CPP:
- Base amount is the annual pension at 65 (``Profile.social_security_benefit``)
- Reduced 0.6% per month started before 65, increased 0.7% per month after
- Start age window 60-70

OAS:
- Base amount defaults to the 2024 maximum when the profile carries none
- Not payable before 65; increased 0.6% per month deferred (up to 70)
- Recovery tax ("clawback") of 15% of net income above the threshold,
  fully eliminated at the upper threshold and never more than the OAS itself
"""

from typing import List

from retirement_planner.schemas.retirement import BenefitEntry, Profile


# --- CPP (2024) ---
CPP_MAX_MONTHLY = 1364.60  # At age 65
CPP_START_AGE_MIN = 60
CPP_START_AGE_MAX = 70
CPP_START_AGE_DEFAULT = 65
CPP_EARLY_REDUCTION_RATE = 0.006  # Per month before 65
CPP_LATE_INCREASE_RATE = 0.007  # Per month after 65

# --- OAS (2024) ---
OAS_MAX_MONTHLY = 713.34  # At age 65
OAS_START_AGE_MIN = 65
OAS_START_AGE_MAX = 70
OAS_START_AGE_DEFAULT = 65
OAS_DEFERRAL_INCREASE_RATE = 0.006  # Per month deferred
OAS_CLAWBACK_THRESHOLD = 86912
OAS_CLAWBACK_RATE = 0.15
OAS_CLAWBACK_ELIMINATION = 142609


def calculate_cpp_adjustment(
    start_age: int, base_monthly_amount: float = CPP_MAX_MONTHLY
) -> float:
    """Monthly CPP after the early/late start adjustment.

    Start age is clamped to the 60-70 window.
    """
    start_age = min(max(start_age, CPP_START_AGE_MIN), CPP_START_AGE_MAX)
    months_from_65 = (start_age - CPP_START_AGE_DEFAULT) * 12

    if months_from_65 < 0:
        return base_monthly_amount * (1 + months_from_65 * CPP_EARLY_REDUCTION_RATE)
    if months_from_65 > 0:
        return base_monthly_amount * (1 + months_from_65 * CPP_LATE_INCREASE_RATE)
    return base_monthly_amount


def calculate_oas_adjustment(
    start_age: int, base_monthly_amount: float = OAS_MAX_MONTHLY
) -> float:
    """Monthly OAS after the deferral increase (0 before 65)."""
    if start_age < OAS_START_AGE_MIN:
        return 0.0

    months_deferred = (min(start_age, OAS_START_AGE_MAX) - OAS_START_AGE_DEFAULT) * 12
    if months_deferred > 0:
        return base_monthly_amount * (1 + months_deferred * OAS_DEFERRAL_INCREASE_RATE)
    return base_monthly_amount


def calculate_oas_clawback(net_income: float, annual_oas: float) -> float:
    """OAS recovery tax owed for a year.

    Args:
        net_income: Net income for the year
        annual_oas: Annual OAS before recovery

    Returns:
        Amount repaid, between 0 and ``annual_oas``
    """
    if net_income <= OAS_CLAWBACK_THRESHOLD:
        return 0.0
    if net_income >= OAS_CLAWBACK_ELIMINATION:
        return annual_oas

    clawback = (net_income - OAS_CLAWBACK_THRESHOLD) * OAS_CLAWBACK_RATE
    return min(clawback, annual_oas)


def estimate_canada_benefits(
    profile: Profile,
    age: int,
    gross_income: float = 0.0,
) -> List[BenefitEntry]:
    """CPP and OAS received at ``age``, net of the OAS recovery tax.

    Both benefits are fully taxable. OAS is omitted once fully clawed back.
    """
    benefits: List[BenefitEntry] = []

    cpp_annual = profile.social_security_benefit
    cpp_start = profile.social_security_start_age
    if cpp_annual and cpp_start is not None and age >= cpp_start:
        monthly = calculate_cpp_adjustment(cpp_start, cpp_annual / 12)
        benefits.append(
            BenefitEntry(
                name="cpp",
                age=age,
                monthly_amount=monthly,
                annual_amount=monthly * 12,
                taxable_amount=monthly * 12,
            )
        )

    oas_start = profile.secondary_benefit_start_age or OAS_START_AGE_DEFAULT
    oas_base_monthly = (
        profile.secondary_benefit_amount / 12
        if profile.secondary_benefit_amount
        else OAS_MAX_MONTHLY
    )

    if age >= oas_start:
        annual_oas = calculate_oas_adjustment(oas_start, oas_base_monthly) * 12
        net_oas = annual_oas - calculate_oas_clawback(gross_income, annual_oas)

        if net_oas > 0:
            benefits.append(
                BenefitEntry(
                    name="oas",
                    age=age,
                    monthly_amount=net_oas / 12,
                    annual_amount=net_oas,
                    taxable_amount=net_oas,
                )
            )

    return benefits
