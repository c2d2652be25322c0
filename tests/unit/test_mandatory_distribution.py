"""Tests for RMD / RRIF minimum calculations."""

from decimal import Decimal

import pytest

from retirement_planner.models.account import AccountType
from retirement_planner.services.retirement.mandatory_distribution import (
    calculate_mandatory_distribution,
    get_required_fraction,
)
from retirement_planner.utils.rmd_calculator import (
    RMD_START_AGE,
    calculate_rmd,
    get_rmd_divisor,
    requires_rmd,
)


# ── IRS Uniform Lifetime table ───────────────────────────────────────────────


@pytest.mark.unit
class TestRMDCalculator:
    def test_requires_rmd(self):
        assert requires_rmd(72) is False
        assert requires_rmd(RMD_START_AGE) is True

    def test_divisor_below_start_age(self):
        assert get_rmd_divisor(72) is None

    def test_divisor_at_start_age(self):
        assert get_rmd_divisor(73) == Decimal("26.5")

    def test_divisor_beyond_table_flatlines(self):
        assert get_rmd_divisor(120) == Decimal("2.0")
        assert get_rmd_divisor(130) == Decimal("2.0")

    def test_calculate_rmd_rounds_to_cents(self):
        assert calculate_rmd(Decimal("1000000"), 73) == Decimal("37735.85")

    def test_calculate_rmd_not_applicable(self):
        assert calculate_rmd(Decimal("1000000"), 70) is None

    def test_calculate_rmd_zero_balance(self):
        assert calculate_rmd(Decimal("0"), 80) == Decimal("0.00")


# ── Normalized mandatory distribution ────────────────────────────────────────


@pytest.mark.unit
class TestMandatoryDistribution:
    def test_us_rmd_at_73(self):
        amount = calculate_mandatory_distribution(73, 1_000_000, AccountType.TRADITIONAL_IRA)
        assert amount == pytest.approx(37735.85, abs=0.01)

    def test_below_start_age_is_zero(self):
        for age in range(50, 73):
            assert calculate_mandatory_distribution(age, 1_000_000, AccountType.TRADITIONAL_401K) == 0

    def test_roth_never_required(self):
        for age in (73, 85, 100):
            assert calculate_mandatory_distribution(age, 500_000, AccountType.ROTH_IRA) == 0

    def test_non_pretax_categories_never_required(self):
        for account_type in (AccountType.TAXABLE, AccountType.HSA, AccountType.TFSA, AccountType.NON_REGISTERED):
            assert calculate_mandatory_distribution(90, 500_000, account_type) == 0

    def test_zero_balance(self):
        assert calculate_mandatory_distribution(80, 0, AccountType.TRADITIONAL_IRA) == 0

    def test_past_table_uses_terminal_divisor(self):
        assert calculate_mandatory_distribution(125, 10000, AccountType.TRADITIONAL_IRA) == pytest.approx(5000)

    def test_rrif_minimum_uses_percentage(self):
        amount = calculate_mandatory_distribution(71, 100000, AccountType.RRIF)
        assert amount == pytest.approx(5280)

    def test_rrsp_subject_after_conversion_age(self):
        assert calculate_mandatory_distribution(70, 100000, AccountType.RRSP) == 0
        assert calculate_mandatory_distribution(72, 100000, AccountType.RRSP) == pytest.approx(5400)

    def test_rrif_terminal_percentage(self):
        assert calculate_mandatory_distribution(99, 100000, AccountType.RRIF) == pytest.approx(20000)

    def test_required_fraction_is_normalized(self):
        assert get_required_fraction(73, AccountType.TRADITIONAL_IRA) == pytest.approx(1 / 26.5)
        assert get_required_fraction(71, AccountType.RRIF) == pytest.approx(0.0528)

    def test_account_outside_provider_jurisdiction(self, ca_provider):
        assert get_required_fraction(80, AccountType.TRADITIONAL_IRA, ca_provider) == 0

    def test_never_exceeds_balance(self, us_provider):
        amount = calculate_mandatory_distribution(130, 1000, AccountType.TRADITIONAL_IRA, us_provider)
        assert amount <= 1000
