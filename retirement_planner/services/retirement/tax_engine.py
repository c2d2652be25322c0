"""Progressive tax engine.

Pure functions over ordered bracket tables. Every table is sorted ascending,
gap-free from 0 and open-ended at the top (last ``max`` is ``float("inf")``).
Zero or negative income never produces negative tax.
"""

from typing import Sequence

from retirement_planner.schemas.retirement import TaxBracket


def ordinary_income_tax(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    """Tax on ordinary income, walking each bracket by its width."""
    if taxable_income <= 0:
        return 0.0

    tax = 0.0
    remaining = taxable_income

    for bracket in brackets:
        width = bracket.max - bracket.min
        income_in_bracket = min(remaining, width)
        if income_in_bracket <= 0:
            break

        tax += income_in_bracket * bracket.rate
        remaining -= income_in_bracket

    return tax


def capital_gains_tax(
    gains: float,
    other_taxable_income: float,
    brackets: Sequence[TaxBracket],
    standard_deduction: float,
) -> float:
    """Tax on long-term gains stacked on top of other income.

    Bracket placement starts at ``other_taxable_income`` net of the standard
    deduction; the rates come from the capital-gains table. Gains that start
    mid-bracket pay only on the portion still inside that bracket.
    """
    if gains <= 0:
        return 0.0

    current_income = max(0.0, other_taxable_income - standard_deduction)
    remaining = gains
    tax = 0.0

    for bracket in brackets:
        if remaining <= 0:
            break

        room = max(0.0, bracket.max - current_income)
        gains_in_bracket = min(remaining, room)

        if gains_in_bracket > 0 and current_income + gains_in_bracket > bracket.min:
            taxed = min(
                gains_in_bracket,
                current_income + gains_in_bracket - max(bracket.min, current_income),
            )
            tax += taxed * bracket.rate

        current_income += gains_in_bracket
        remaining -= gains_in_bracket

    return tax


def combined_federal_tax(
    ordinary_income: float,
    capital_gains: float,
    brackets: Sequence[TaxBracket],
    capital_gains_brackets: Sequence[TaxBracket],
    standard_deduction: float,
) -> float:
    """Ordinary tax net of the deduction plus gains stacked on gross income.

    Gains are positioned using gross (pre-deduction) ordinary income;
    ``capital_gains_tax`` subtracts the deduction itself.
    """
    taxable_ordinary = max(0.0, ordinary_income - standard_deduction)
    return ordinary_income_tax(taxable_ordinary, brackets) + capital_gains_tax(
        capital_gains, ordinary_income, capital_gains_brackets, standard_deduction
    )


def state_tax(taxable_income: float, flat_rate: float) -> float:
    """Flat-rate state or provincial tax."""
    return max(0.0, taxable_income) * flat_rate


def bracket_rate_at(taxable_income: float, brackets: Sequence[TaxBracket]) -> float:
    """Rate of the first bracket whose max covers the income.

    Falls back to the last bracket's rate past the end of the table.
    """
    if not brackets:
        return 0.0
    for bracket in brackets:
        if taxable_income <= bracket.max:
            return bracket.rate
    return brackets[-1].rate


def marginal_rate(
    current_taxable_income: float,
    brackets: Sequence[TaxBracket],
    standard_deduction: float,
) -> float:
    """Rate paid on the next dollar of ordinary income."""
    adjusted = current_taxable_income - standard_deduction
    if adjusted <= 0:
        return 0.0
    return bracket_rate_at(adjusted, brackets)


def room_to_fill_bracket(
    current_ordinary_income: float,
    target_rate: float,
    brackets: Sequence[TaxBracket],
    standard_deduction: float,
) -> float:
    """Additional ordinary income that still lands in the target bracket.

    Returns 0 when no bracket carries exactly ``target_rate`` or income is
    already past the top of it. Unused standard deduction counts as room.
    """
    target = next((b for b in brackets if b.rate == target_rate), None)
    if target is None:
        return 0.0

    current_taxable = max(0.0, current_ordinary_income - standard_deduction)
    if current_taxable >= target.max:
        return 0.0

    room = target.max - max(current_taxable, target.min)

    if current_ordinary_income < standard_deduction:
        room += standard_deduction - current_ordinary_income

    return room


def effective_tax_rate(total_tax: float, gross_income: float) -> float:
    """Total tax as a fraction of gross income (0 for no income)."""
    if gross_income <= 0:
        return 0.0
    return total_tax / gross_income
