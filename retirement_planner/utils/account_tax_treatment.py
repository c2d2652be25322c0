"""Utility functions for determining account tax treatment.

Every AccountType maps to exactly one TaxTreatment through
``TAX_TREATMENT_DEFAULTS``; the simulator and projector only ever branch on
the treatment, never on the raw account type.
"""

from retirement_planner.models.account import AccountType, TaxTreatment
from retirement_planner.utils.account_type_groups import TAX_TREATMENT_DEFAULTS


_TYPE_LABELS: dict[AccountType, str] = {
    AccountType.TRADITIONAL_401K: "Traditional 401(k)",
    AccountType.ROTH_401K: "Roth 401(k)",
    AccountType.TRADITIONAL_IRA: "Traditional IRA",
    AccountType.ROTH_IRA: "Roth IRA",
    AccountType.TAXABLE: "Taxable Brokerage",
    AccountType.HSA: "HSA",
    AccountType.RRSP: "RRSP",
    AccountType.EMPLOYER_RRSP: "Employer RRSP",
    AccountType.RRIF: "RRIF",
    AccountType.TFSA: "TFSA",
    AccountType.NON_REGISTERED: "Non-Registered",
}


def get_tax_treatment(account_type: AccountType) -> TaxTreatment:
    """Get the tax treatment for an account type.

    Returns:
        PRE_TAX: Traditional 401k/IRA, RRSP, RRIF (taxed on withdrawal)
        TAX_EXEMPT: Roth 401k/IRA, TFSA
        TAXABLE: Brokerage / non-registered (gains taxed)
        MEDICAL_EXEMPT: HSA
    """
    return TAX_TREATMENT_DEFAULTS[account_type]


def get_account_type_label(account_type: AccountType) -> str:
    """Get a human-readable account type label."""
    return _TYPE_LABELS[account_type]

