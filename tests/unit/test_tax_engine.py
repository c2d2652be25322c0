"""Tests for the progressive tax engine.

Covers:
- Ordinary income tax walking brackets by width
- Capital gains stacked on ordinary income
- Flat state tax
- Marginal rate lookup
- Bracket-fill headroom
- Effective tax rate
"""

import pytest

from retirement_planner.services.retirement.jurisdictions.us_jurisdiction import (
    CAPITAL_GAINS_BRACKETS_MFJ,
    CAPITAL_GAINS_BRACKETS_SINGLE,
    STANDARD_DEDUCTION_MFJ,
    TAX_BRACKETS_MFJ,
    TAX_BRACKETS_SINGLE,
)
from retirement_planner.services.retirement.tax_engine import (
    capital_gains_tax,
    combined_federal_tax,
    effective_tax_rate,
    marginal_rate,
    ordinary_income_tax,
    room_to_fill_bracket,
    state_tax,
)


# ── Ordinary income tax ──────────────────────────────────────────────────────


@pytest.mark.unit
class TestOrdinaryIncomeTax:
    def test_zero_income(self):
        assert ordinary_income_tax(0, TAX_BRACKETS_MFJ) == 0

    def test_negative_income(self):
        assert ordinary_income_tax(-5000, TAX_BRACKETS_MFJ) == 0

    def test_first_bracket_only(self):
        assert ordinary_income_tax(20000, TAX_BRACKETS_MFJ) == pytest.approx(2000)

    def test_two_brackets(self):
        # 23,200 × 10% + 26,800 × 12%
        assert ordinary_income_tax(50000, TAX_BRACKETS_MFJ) == pytest.approx(5536)

    def test_three_brackets(self):
        # 2,320 + 71,100 × 12% + 5,700 × 22%
        assert ordinary_income_tax(100000, TAX_BRACKETS_MFJ) == pytest.approx(12106)

    def test_single_filer(self):
        # 11,600 × 10% + 18,400 × 12%
        assert ordinary_income_tax(30000, TAX_BRACKETS_SINGLE) == pytest.approx(3368)

    def test_exactly_at_bracket_boundary(self):
        assert ordinary_income_tax(23200, TAX_BRACKETS_MFJ) == pytest.approx(2320)
        assert ordinary_income_tax(94300, TAX_BRACKETS_MFJ) == pytest.approx(10852)

    def test_top_bracket_is_unbounded(self):
        below = ordinary_income_tax(1_000_000, TAX_BRACKETS_MFJ)
        above = ordinary_income_tax(2_000_000, TAX_BRACKETS_MFJ)
        assert above - below == pytest.approx(1_000_000 * 0.37)

    def test_slope_equals_active_bracket_rate(self):
        for income, rate in [(10000, 0.10), (50000, 0.12), (150000, 0.22), (800000, 0.37)]:
            delta = ordinary_income_tax(income + 100, TAX_BRACKETS_MFJ) - ordinary_income_tax(
                income, TAX_BRACKETS_MFJ
            )
            assert delta == pytest.approx(100 * rate)

    def test_non_decreasing(self):
        previous = 0.0
        for income in range(0, 1_000_001, 25_000):
            tax = ordinary_income_tax(income, TAX_BRACKETS_SINGLE)
            assert tax >= previous
            previous = tax

    def test_split_at_boundary_matches_single_call(self):
        # Tax on the first bracket plus the rest taxed at the next rate
        boundary = TAX_BRACKETS_MFJ[0].max
        total = ordinary_income_tax(60000, TAX_BRACKETS_MFJ)
        first = ordinary_income_tax(boundary, TAX_BRACKETS_MFJ)
        assert total == pytest.approx(first + (60000 - boundary) * TAX_BRACKETS_MFJ[1].rate)


# ── Capital gains ────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestCapitalGainsTax:
    def test_zero_gains(self):
        assert capital_gains_tax(0, 100000, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0

    def test_gains_in_zero_percent_bracket(self):
        assert capital_gains_tax(50000, 0, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0

    def test_gains_stacked_on_ordinary_income(self):
        # Base 70,800: 23,250 at 0%, 26,750 at 15%
        tax = capital_gains_tax(50000, 100000, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ)
        assert tax == pytest.approx(4012.50)

    def test_single_filer_crosses_into_fifteen_percent(self):
        # 47,025 at 0%, 52,975 at 15%
        tax = capital_gains_tax(100000, 0, CAPITAL_GAINS_BRACKETS_SINGLE, 14600)
        assert tax == pytest.approx(7946.25)

    def test_gains_starting_mid_bracket(self):
        # Base 570,800: 12,950 at 15%, 87,050 at 20%
        tax = capital_gains_tax(100000, 600000, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ)
        assert tax == pytest.approx(19352.50)

    def test_monotonic_in_gains(self):
        previous = 0.0
        for gains in range(0, 800_001, 20_000):
            tax = capital_gains_tax(gains, 80000, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ)
            assert tax >= previous
            previous = tax


@pytest.mark.unit
class TestCombinedFederalTax:
    def test_ordinary_only(self):
        tax = combined_federal_tax(
            100000, 0, TAX_BRACKETS_MFJ, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ
        )
        # 70,800 taxable: 2,320 + 47,600 × 12%
        assert tax == pytest.approx(8032)

    def test_gains_positioned_on_gross_ordinary_income(self):
        tax = combined_federal_tax(
            100000, 50000, TAX_BRACKETS_MFJ, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ
        )
        assert tax == pytest.approx(8032 + 4012.50)

    def test_income_below_deduction(self):
        tax = combined_federal_tax(
            20000, 0, TAX_BRACKETS_MFJ, CAPITAL_GAINS_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ
        )
        assert tax == 0


# ── State tax ────────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestStateTax:
    def test_flat_rate(self):
        assert state_tax(50000, 0.05) == pytest.approx(2500)

    def test_negative_income(self):
        assert state_tax(-10000, 0.05) == 0

    def test_zero_rate(self):
        assert state_tax(50000, 0) == 0


# ── Marginal rate ────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestMarginalRate:
    def test_below_deduction(self):
        assert marginal_rate(20000, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0

    def test_first_bracket(self):
        assert marginal_rate(50000, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0.10

    def test_second_bracket(self):
        assert marginal_rate(100000, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0.12

    def test_boundary_belongs_to_lower_bracket(self):
        income = STANDARD_DEDUCTION_MFJ + 23200
        assert marginal_rate(income, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0.10

    def test_top_bracket(self):
        assert marginal_rate(10_000_000, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0.37


# ── Bracket fill ─────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestRoomToFillBracket:
    def test_no_income_includes_deduction_room(self):
        room = room_to_fill_bracket(0, 0.12, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ)
        assert room == pytest.approx((94300 - 23200) + 29200)

    def test_income_in_lower_bracket(self):
        room = room_to_fill_bracket(50000, 0.12, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ)
        assert room == pytest.approx(94300 - 23200)

    def test_income_inside_target_bracket(self):
        # Taxable 50,800
        room = room_to_fill_bracket(80000, 0.12, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ)
        assert room == pytest.approx(43500)

    def test_already_past_target_bracket(self):
        assert room_to_fill_bracket(130000, 0.12, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0

    def test_no_exact_rate_match(self):
        assert room_to_fill_bracket(0, 0.13, TAX_BRACKETS_MFJ, STANDARD_DEDUCTION_MFJ) == 0


@pytest.mark.unit
class TestEffectiveTaxRate:
    def test_basic(self):
        assert effective_tax_rate(10000, 100000) == pytest.approx(0.10)

    def test_no_income(self):
        assert effective_tax_rate(500, 0) == 0
