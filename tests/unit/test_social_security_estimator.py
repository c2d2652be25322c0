"""Tests for Social Security and CPP/OAS benefit estimators.

Covers:
- Flat Social Security once the start age is reached
- CPP early/late start adjustments
- OAS deferral and recovery tax (clawback)
- Combined Canadian benefit entries
"""

import pytest

from retirement_planner.models.account import JurisdictionCode
from retirement_planner.schemas.retirement import Profile
from retirement_planner.services.retirement.canada_benefits_estimator import (
    OAS_MAX_MONTHLY,
    calculate_cpp_adjustment,
    calculate_oas_adjustment,
    calculate_oas_clawback,
    estimate_canada_benefits,
)
from retirement_planner.services.retirement.social_security_estimator import (
    estimate_social_security_benefits,
    get_taxable_social_security,
)


def _profile(**overrides) -> Profile:
    values = dict(current_age=60, retirement_age=65, life_expectancy=90)
    values.update(overrides)
    return Profile(**values)


# ── Social Security ──────────────────────────────────────────────────────────


@pytest.mark.unit
class TestSocialSecurity:
    def test_before_start_age(self):
        profile = _profile(social_security_benefit=30000, social_security_start_age=67)
        assert estimate_social_security_benefits(profile, 66) == []

    def test_at_start_age(self):
        profile = _profile(social_security_benefit=30000, social_security_start_age=67)
        [benefit] = estimate_social_security_benefits(profile, 67)
        assert benefit.name == "social_security"
        assert benefit.age == 67
        assert benefit.annual_amount == 30000
        assert benefit.monthly_amount == pytest.approx(2500)
        assert benefit.taxable_amount == pytest.approx(25500)

    def test_flat_after_start(self):
        profile = _profile(social_security_benefit=30000, social_security_start_age=67)
        [benefit] = estimate_social_security_benefits(profile, 90, gross_income=500000)
        assert benefit.annual_amount == 30000

    def test_no_benefit_configured(self):
        assert estimate_social_security_benefits(_profile(), 70) == []

    def test_missing_start_age(self):
        profile = _profile(social_security_benefit=30000)
        assert estimate_social_security_benefits(profile, 70) == []

    def test_taxable_share(self):
        assert get_taxable_social_security(20000) == pytest.approx(17000)
        assert get_taxable_social_security(-100) == 0


# ── CPP ──────────────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestCPPAdjustment:
    def test_at_65(self):
        assert calculate_cpp_adjustment(65, 1000) == pytest.approx(1000)

    def test_early_at_60(self):
        # 60 months × 0.6% = 36% reduction
        assert calculate_cpp_adjustment(60, 1000) == pytest.approx(640)

    def test_late_at_70(self):
        # 60 months × 0.7% = 42% increase
        assert calculate_cpp_adjustment(70, 1000) == pytest.approx(1420)

    def test_start_age_clamped(self):
        assert calculate_cpp_adjustment(55, 1000) == pytest.approx(640)
        assert calculate_cpp_adjustment(75, 1000) == pytest.approx(1420)


# ── OAS ──────────────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestOASAdjustment:
    def test_not_available_before_65(self):
        assert calculate_oas_adjustment(64, 700) == 0

    def test_at_65(self):
        assert calculate_oas_adjustment(65, 700) == pytest.approx(700)

    def test_deferred_to_70(self):
        # 60 months × 0.6% = 36% increase
        assert calculate_oas_adjustment(70, 700) == pytest.approx(952)

    def test_deferral_capped_at_70(self):
        assert calculate_oas_adjustment(72, 700) == pytest.approx(952)


@pytest.mark.unit
class TestOASClawback:
    def test_below_threshold(self):
        assert calculate_oas_clawback(80000, 8000) == 0

    def test_partial(self):
        assert calculate_oas_clawback(100000, 8000) == pytest.approx((100000 - 86912) * 0.15)

    def test_full_elimination(self):
        assert calculate_oas_clawback(150000, 8000) == 8000

    def test_capped_at_oas(self):
        assert calculate_oas_clawback(142000, 5000) == 5000


# ── Combined Canadian benefits ───────────────────────────────────────────────


@pytest.mark.unit
class TestCanadaBenefits:
    def test_before_65(self, ca_profile):
        assert estimate_canada_benefits(ca_profile, 64, 0) == []

    def test_cpp_and_default_oas(self, ca_profile):
        benefits = {b.name: b for b in estimate_canada_benefits(ca_profile, 65, 50000)}
        assert benefits["cpp"].annual_amount == pytest.approx(12000)
        assert benefits["oas"].monthly_amount == pytest.approx(OAS_MAX_MONTHLY)
        assert benefits["oas"].annual_amount == pytest.approx(OAS_MAX_MONTHLY * 12)
        assert all(b.taxable_amount == b.annual_amount for b in benefits.values())

    def test_oas_fully_clawed_back_is_omitted(self, ca_profile):
        benefits = estimate_canada_benefits(ca_profile, 65, 150000)
        assert [b.name for b in benefits] == ["cpp"]

    def test_partial_clawback_reduces_oas(self, ca_profile):
        [_, oas] = estimate_canada_benefits(ca_profile, 65, 100000)
        expected = OAS_MAX_MONTHLY * 12 - (100000 - 86912) * 0.15
        assert oas.annual_amount == pytest.approx(expected)

    def test_early_cpp_is_reduced(self):
        profile = _profile(
            social_security_benefit=12000,
            social_security_start_age=60,
            jurisdiction=JurisdictionCode.CA,
        )
        [cpp] = estimate_canada_benefits(profile, 62, 0)
        assert cpp.annual_amount == pytest.approx(12000 * 0.64)

    def test_custom_deferred_oas(self):
        profile = _profile(
            secondary_benefit_amount=8400,
            secondary_benefit_start_age=70,
            jurisdiction=JurisdictionCode.CA,
        )
        assert estimate_canada_benefits(profile, 69, 0) == []
        [oas] = estimate_canada_benefits(profile, 70, 0)
        assert oas.annual_amount == pytest.approx(8400 * 1.36)
