"""
Central registry of AccountType group memberships.

All other modules should import from here instead of defining their own
inline lists.  Groups are frozensets of AccountType enum members so they
can be used in ``in`` tests and set operations.

DESIGN: Sets are composed from named atomic building blocks so that a
new type added to, say, US_TRADITIONAL_TYPES automatically propagates
to every set built on it.
"""

from retirement_planner.models.account import AccountType, TaxTreatment

# ---------------------------------------------------------------------------
# Atomic building blocks
# ---------------------------------------------------------------------------

#: US pre-tax employer plans and IRAs
US_TRADITIONAL_TYPES: frozenset[AccountType] = frozenset({
    AccountType.TRADITIONAL_401K,
    AccountType.TRADITIONAL_IRA,
})

#: US Roth family (after-tax, no RMD during owner's lifetime)
US_ROTH_TYPES: frozenset[AccountType] = frozenset({
    AccountType.ROTH_401K,
    AccountType.ROTH_IRA,
})

#: 401(k) family, Roth or traditional
US_401K_TYPES: frozenset[AccountType] = frozenset({
    AccountType.TRADITIONAL_401K,
    AccountType.ROTH_401K,
})

#: Canadian registered retirement plans (RRIF minimums apply)
CA_REGISTERED_TYPES: frozenset[AccountType] = frozenset({
    AccountType.RRSP,
    AccountType.EMPLOYER_RRSP,
    AccountType.RRIF,
})

# ---------------------------------------------------------------------------
# Composed groups
# ---------------------------------------------------------------------------

#: Types that accept an employer match during accumulation
EMPLOYER_MATCH_TYPES: frozenset[AccountType] = (
    US_401K_TYPES | frozenset({AccountType.EMPLOYER_RRSP})
)

#: US RMD-applicable accounts (no Roth, HSA or brokerage)
US_RMD_ACCOUNT_TYPES: frozenset[AccountType] = US_TRADITIONAL_TYPES

#: Canadian RRIF-minimum-applicable accounts
CA_RRIF_ACCOUNT_TYPES: frozenset[AccountType] = CA_REGISTERED_TYPES

US_ACCOUNT_TYPES: frozenset[AccountType] = (
    US_TRADITIONAL_TYPES
    | US_ROTH_TYPES
    | frozenset({AccountType.TAXABLE, AccountType.HSA})
)

CA_ACCOUNT_TYPES: frozenset[AccountType] = (
    CA_REGISTERED_TYPES
    | frozenset({AccountType.TFSA, AccountType.NON_REGISTERED})
)

# ---------------------------------------------------------------------------
# Tax treatment defaults
# ---------------------------------------------------------------------------

#: Every AccountType maps to exactly one TaxTreatment.
TAX_TREATMENT_DEFAULTS: dict[AccountType, TaxTreatment] = {
    AccountType.TRADITIONAL_401K: TaxTreatment.PRE_TAX,
    AccountType.TRADITIONAL_IRA:  TaxTreatment.PRE_TAX,
    AccountType.ROTH_401K:        TaxTreatment.TAX_EXEMPT,
    AccountType.ROTH_IRA:         TaxTreatment.TAX_EXEMPT,
    AccountType.TAXABLE:          TaxTreatment.TAXABLE,
    AccountType.HSA:              TaxTreatment.MEDICAL_EXEMPT,
    AccountType.RRSP:             TaxTreatment.PRE_TAX,
    AccountType.EMPLOYER_RRSP:    TaxTreatment.PRE_TAX,
    AccountType.RRIF:             TaxTreatment.PRE_TAX,
    AccountType.TFSA:             TaxTreatment.TAX_EXEMPT,
    AccountType.NON_REGISTERED:   TaxTreatment.TAXABLE,
}
